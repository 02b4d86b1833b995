from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.audit.models import AdminAuditLog
from apps.authentication import services
from apps.authentication.exceptions import UserManagementError
from apps.authentication.models import User


def make_user(email, role='client', **extra):
    return User.objects.create_user(username=email, email=email, password='testpass123', role=role, **extra)


class UserImportTest(TestCase):
    def setUp(self):
        self.admin = make_user('admin@test.com', role='admin')
        make_user('taken@test.com')

    def test_rows_numbered_from_two(self):
        text = (
            "email,full_name,role,company_name,subscription_tier\n"
            "new@test.com,New Host,host,Hosting Co,basic\n"
            "taken@test.com,Dup,client,,\n"
            "bad@test.com,Bad Role,wizard,,\n"
            "short@test.com,Too Short\n"
            ",No Email,client,,\n"
        )

        result = services.import_users_csv(text, self.admin)

        self.assertEqual(result['success'], 1)
        self.assertEqual(result['errors'], [
            "Row 3: User with email taken@test.com already exists",
            "Row 4: Invalid role 'wizard'",
            "Row 5: Invalid number of columns",
            "Row 6: Email is required",
        ])
        created = User.objects.get(email='new@test.com')
        self.assertEqual(created.role, User.Role.HOST)
        self.assertEqual(created.subscription_tier, User.SubscriptionTier.BASIC)
        self.assertTrue(AdminAuditLog.objects.filter(action='import_users').exists())

    def test_blank_role_and_tier_get_defaults(self):
        text = "email,full_name,role,company_name,subscription_tier\nplain@test.com,Plain,,,\n"
        services.import_users_csv(text, self.admin)
        user = User.objects.get(email='plain@test.com')
        self.assertEqual(user.role, User.Role.CLIENT)
        self.assertEqual(user.subscription_tier, User.SubscriptionTier.FREE)
        self.assertFalse(user.has_usable_password())

    def test_export_has_header_and_rows(self):
        lines = services.export_users_csv().splitlines()
        self.assertEqual(lines[0], 'ID,Email,Full Name,Role,Company,Subscription Tier,Created At')
        self.assertEqual(len(lines), 3)


class DeleteUserTest(TestCase):
    def setUp(self):
        self.admin = make_user('admin@test.com', role='admin')

    def test_cannot_delete_self(self):
        with self.assertRaisesMessage(UserManagementError, "You cannot delete your own account"):
            services.delete_user(self.admin, self.admin)

    def test_cannot_delete_admin(self):
        other_admin = make_user('admin2@test.com', role='admin')
        with self.assertRaisesMessage(UserManagementError, "Cannot delete admin users"):
            services.delete_user(other_admin, self.admin)

    def test_delete_client_is_audited(self):
        client = make_user('client@test.com')
        client_id = client.pk
        services.delete_user(client, self.admin)
        self.assertFalse(User.objects.filter(pk=client_id).exists())
        log = AdminAuditLog.objects.get(action='delete_user')
        self.assertEqual(log.details, {'user_role': 'client'})


class UserAdminApiTest(APITestCase):
    def setUp(self):
        self.admin = make_user('admin@test.com', role='admin')
        self.client_user = make_user('client@test.com', full_name='Cora Client')

    def test_list_requires_admin(self):
        self.client.force_authenticate(self.client_user)
        response = self.client.get(reverse('user-list'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_search_users(self):
        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse('user-list'), {'search': 'cora'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([u['email'] for u in response.data], ['client@test.com'])

    def test_change_role(self):
        self.client.force_authenticate(self.admin)
        response = self.client.patch(
            reverse('user-detail', args=[self.client_user.pk]), {'role': 'designer'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.client_user.refresh_from_db()
        self.assertEqual(self.client_user.role, User.Role.DESIGNER)

    def test_delete_admin_is_refused(self):
        other_admin = make_user('admin2@test.com', role='admin')
        self.client.force_authenticate(self.admin)
        response = self.client.delete(reverse('user-detail', args=[other_admin.pk]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Cannot delete admin users')
