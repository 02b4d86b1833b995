from django.shortcuts import get_object_or_404
from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.authentication.permissions import IsHost, IsPlatformAdmin
from . import review as review_service
from . import services
from .models import AssetLifecycle, Campaign, HostAd, MediaAsset
from .serializers import (
    AssetLifecycleSerializer,
    CampaignSerializer,
    HostAdSerializer,
    MediaAssetSerializer,
    PendingItemSerializer,
    ReviewSerializer,
)


class CampaignViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAuthenticated]
    serializer_class = CampaignSerializer
    queryset = Campaign.objects.all()

    def get_queryset(self):
        campaigns = Campaign.objects.select_related('user').prefetch_related('kiosks')
        if self.request.user.is_platform_admin:
            status_filter = self.request.query_params.get('status')
            return campaigns.filter(status=status_filter) if status_filter else campaigns
        return campaigns.filter(user=self.request.user)

    def perform_create(self, serializer):
        serializer.instance = services.create_campaign(self.request.user, dict(serializer.validated_data))

    def _respond(self, campaign):
        return Response(self.get_serializer(campaign).data)

    @action(detail=True, methods=['post'])
    def submit(self, request, pk=None):
        return self._respond(services.submit_campaign(self.get_object()))

    @action(detail=True, methods=['post'])
    def pause(self, request, pk=None):
        return self._respond(services.pause_campaign(self.get_object()))

    @action(detail=True, methods=['post'])
    def resume(self, request, pk=None):
        return self._respond(services.resume_campaign(self.get_object()))


class MediaAssetViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAuthenticated]
    serializer_class = MediaAssetSerializer
    queryset = MediaAsset.objects.all()
    http_method_names = ['get', 'post', 'delete', 'head', 'options']

    def get_queryset(self):
        assets = MediaAsset.objects.select_related('campaign')
        if self.request.user.is_platform_admin:
            return assets
        return assets.filter(user=self.request.user)

    def perform_create(self, serializer):
        serializer.save(user=self.request.user, status=MediaAsset.Status.PROCESSING)


class HostAdViewSet(viewsets.ModelViewSet):
    permission_classes = [IsHost]
    serializer_class = HostAdSerializer
    queryset = HostAd.objects.all()

    def get_queryset(self):
        if self.request.user.is_platform_admin:
            return HostAd.objects.select_related('host')
        return HostAd.objects.filter(host=self.request.user)

    def perform_create(self, serializer):
        serializer.save(host=self.request.user, status=HostAd.Status.DRAFT)

    @action(detail=True, methods=['post'])
    def submit(self, request, pk=None):
        host_ad = self.get_object()
        host_ad.transition_to(HostAd.Status.PENDING_REVIEW)
        host_ad.save()
        return Response(self.get_serializer(host_ad).data)


@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def review_queue(request):
    kind = request.GET.get('kind') or None
    if kind and kind not in review_service.ReviewKind.values:
        return Response({'error': f"Unknown review kind '{kind}'"}, status=status.HTTP_400_BAD_REQUEST)
    items = review_service.all_pending(kind)
    return Response({
        'items': PendingItemSerializer(items, many=True).data,
        'counts': review_service.pending_counts(),
    })


@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def review_item(request):
    serializer = ReviewSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    obj = review_service.review(data['kind'], data['id'], data['action'], data.get('reason'), actor=request.user)
    return Response({'kind': data['kind'], 'id': obj.pk, 'status': obj.status})


@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def asset_lifecycle_list(request):
    rows = services.asset_lifecycle(status=request.GET.get('status'))
    return Response(AssetLifecycleSerializer(rows, many=True).data)


@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def restore_asset(request, lifecycle_id):
    lifecycle = get_object_or_404(AssetLifecycle, pk=lifecycle_id)
    lifecycle = services.restore_asset(lifecycle, actor=request.user)
    return Response(AssetLifecycleSerializer(lifecycle).data)
