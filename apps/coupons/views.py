from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.authentication.permissions import IsPlatformAdmin
from . import services
from .models import Coupon
from .serializers import CouponSerializer, CouponValidationSerializer


class CouponViewSet(viewsets.ModelViewSet):
    permission_classes = [IsPlatformAdmin]
    serializer_class = CouponSerializer
    queryset = Coupon.objects.all()
    http_method_names = ['get', 'post', 'put', 'patch', 'head', 'options']

    def get_queryset(self):
        return services.list_coupons(
            status=self.request.query_params.get('status'),
            search=self.request.query_params.get('search'),
        )

    def perform_create(self, serializer):
        serializer.instance = services.create_coupon(dict(serializer.validated_data), self.request.user)

    def perform_update(self, serializer):
        services.update_coupon(serializer.instance, dict(serializer.validated_data), self.request.user)

    @action(detail=False, methods=['get'])
    def stats(self, request):
        return Response(services.coupon_stats())


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def validate_coupon(request):
    serializer = CouponValidationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    user = request.user
    context = {
        'user': user,
        'user_role': user.role,
        'subscription_tier': user.subscription_tier,
        'amount': data['amount'],
        'kiosk_ids': data.get('kiosk_ids'),
        'campaign_type': data.get('campaign_type'),
    }
    result = services.validate_coupon(data['code'], context)
    return Response({'valid': True, 'coupon': result}, status=status.HTTP_200_OK)
