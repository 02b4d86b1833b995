from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from apps.audit.mixins import AuditedModelMixin
from apps.authentication.permissions import IsPlatformAdmin
from .models import Invoice, PaymentRecord
from .serializers import InvoiceSerializer, PaymentRecordSerializer


class InvoiceViewSet(AuditedModelMixin, viewsets.ModelViewSet):
    serializer_class = InvoiceSerializer
    audit_resource = 'invoice'

    def perform_create(self, serializer):
        user_id = self.request.data.get('user_id') or self.request.user.pk
        instance = serializer.save(user_id=user_id)
        self._audit('create', instance.pk)

    def get_permissions(self):
        if self.action in ('list', 'retrieve'):
            return [IsAuthenticated()]
        return [IsPlatformAdmin()]

    def get_queryset(self):
        invoices = Invoice.objects.select_related('user')
        if self.request.user.is_platform_admin:
            user_id = self.request.query_params.get('user')
            return invoices.filter(user_id=user_id) if user_id else invoices
        return invoices.filter(user=self.request.user)


class PaymentRecordViewSet(viewsets.ReadOnlyModelViewSet):
    permission_classes = [IsAuthenticated]
    serializer_class = PaymentRecordSerializer

    def get_queryset(self):
        payments = PaymentRecord.objects.all()
        if self.request.user.is_platform_admin:
            return payments
        return payments.filter(user=self.request.user)
