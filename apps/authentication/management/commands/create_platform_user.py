from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model

User = get_user_model()

class Command(BaseCommand):
    help = 'Create a platform user (client, host, designer or admin)'

    def add_arguments(self, parser):
        parser.add_argument('--email', type=str, required=True)
        parser.add_argument('--password', type=str, required=True)
        parser.add_argument('--role', type=str, default='client', choices=User.Role.values)
        parser.add_argument('--full_name', type=str, default='')
        parser.add_argument('--company', type=str, default='')

    def handle(self, *args, **options):
        email = options['email'].lower()
        role = options['role']

        if User.objects.filter(email__iexact=email).exists():
            raise CommandError(f'User with email {email} already exists')

        user = User.objects.create_user(
            username=email,
            email=email,
            password=options['password'],
            full_name=options['full_name'],
            company_name=options['company'] or None,
            role=role,
        )

        # Admins also get Django staff rights
        if role == User.Role.ADMIN:
            user.is_staff = True
            user.save(update_fields=['is_staff'])

        self.stdout.write(
            self.style.SUCCESS(f'Successfully created {role} user {email}')
        )
