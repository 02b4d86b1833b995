from django.shortcuts import get_object_or_404
from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.audit.mixins import AuditedModelMixin
from apps.authentication.permissions import IsPlatformAdmin
from . import system_settings
from .campaign_notifications import send_campaign_test_email
from .models import EmailQueueItem, EmailTemplate, SystemSetting
from .queue import cancel_email, requeue_email
from .serializers import (
    CampaignTestEmailSerializer,
    EmailQueueItemSerializer,
    EmailTemplateSerializer,
    SystemSettingSerializer,
)


class EmailTemplateViewSet(AuditedModelMixin, viewsets.ModelViewSet):
    permission_classes = [IsPlatformAdmin]
    serializer_class = EmailTemplateSerializer
    queryset = EmailTemplate.objects.all()
    audit_resource = 'email_template'


class EmailQueueViewSet(viewsets.ReadOnlyModelViewSet):
    permission_classes = [IsPlatformAdmin]
    serializer_class = EmailQueueItemSerializer
    queryset = EmailQueueItem.objects.all()

    def get_queryset(self):
        items = EmailQueueItem.objects.select_related('template').order_by('-created_at')
        status_filter = self.request.query_params.get('status')
        return items.filter(status=status_filter) if status_filter else items

    @action(detail=False, methods=['post'])
    def process(self, request):
        from tasks.notifications import process_email_queue
        result = process_email_queue.delay()
        return Response({'task_id': result.id, 'status': 'queued'}, status=status.HTTP_202_ACCEPTED)

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        item = self.get_object()
        if not cancel_email(item):
            return Response({'error': 'Only pending emails can be cancelled'}, status=status.HTTP_409_CONFLICT)
        return Response(self.get_serializer(item).data)

    @action(detail=True, methods=['post'])
    def retry(self, request, pk=None):
        item = self.get_object()
        if not requeue_email(item):
            return Response({'error': 'Only failed emails can be retried'}, status=status.HTTP_409_CONFLICT)
        return Response(self.get_serializer(item).data)


@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def settings_list(request):
    rows = system_settings.list_settings(category=request.GET.get('category'))
    return Response(SystemSettingSerializer(rows, many=True).data)


@api_view(['GET'])
@permission_classes([AllowAny])
def public_settings(request):
    rows = system_settings.list_settings(public_only=True)
    return Response({row.key: row.value for row in rows})


@api_view(['GET', 'PUT'])
@permission_classes([IsPlatformAdmin])
def setting_detail(request, key):
    if request.method == 'PUT':
        if 'value' not in request.data:
            return Response({'error': 'value is required'}, status=status.HTTP_400_BAD_REQUEST)
        row = system_settings.update_existing_setting(key, request.data['value'], actor=request.user)
    else:
        row = get_object_or_404(SystemSetting, key=key)
    return Response(SystemSettingSerializer(row).data)


@api_view(['GET', 'PUT'])
@permission_classes([IsPlatformAdmin])
def notification_settings(request):
    if request.method == 'PUT':
        return Response(system_settings.update_notification_settings(dict(request.data), actor=request.user))
    return Response(system_settings.notification_settings())


@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def campaign_test_email(request):
    serializer = CampaignTestEmailSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    queued = send_campaign_test_email(serializer.validated_data['status'], serializer.validated_data['email'])
    if not queued:
        return Response(
            {'error': f"No active template for campaign_{serializer.validated_data['status']}"},
            status=status.HTTP_404_NOT_FOUND
        )
    return Response({'queued': True})
