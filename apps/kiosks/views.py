from django.http import HttpResponse
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from apps.audit.mixins import AuditedModelMixin
from apps.authentication.permissions import IsPlatformAdmin
from .models import Kiosk
from .serializers import KioskSerializer
from .services import export_kiosks_csv


class KioskViewSet(AuditedModelMixin, viewsets.ModelViewSet):
    serializer_class = KioskSerializer
    queryset = Kiosk.objects.all()
    audit_resource = 'kiosk'

    def get_permissions(self):
        if self.action in ('list', 'retrieve'):
            return [IsAuthenticated()]
        return [IsPlatformAdmin()]

    def get_queryset(self):
        user = self.request.user
        kiosks = Kiosk.objects.select_related('host')
        if user.is_platform_admin:
            status = self.request.query_params.get('status')
            return kiosks.filter(status=status) if status else kiosks
        if user.role == 'host':
            return kiosks.filter(host=user)
        return kiosks.filter(status=Kiosk.Status.ACTIVE)

    @action(detail=False, methods=['get'])
    def export(self, request):
        response = HttpResponse(export_kiosks_csv(), content_type='text/csv')
        response['Content-Disposition'] = 'attachment; filename="kiosks-export.csv"'
        return response
