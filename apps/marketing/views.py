from rest_framework import viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.audit.mixins import AuditedModelMixin
from apps.authentication.permissions import IsPlatformAdmin
from . import services
from .models import MarketingTool, PartnerLogo, Testimonial
from .serializers import (
    MarketingToolSerializer,
    PartnerLogoSerializer,
    ReorderSerializer,
    TestimonialSerializer,
)


class MarketingToolViewSet(AuditedModelMixin, viewsets.ModelViewSet):
    permission_classes = [IsPlatformAdmin]
    serializer_class = MarketingToolSerializer
    queryset = MarketingTool.objects.all()
    audit_resource = 'marketing_tool'


class TestimonialViewSet(AuditedModelMixin, viewsets.ModelViewSet):
    permission_classes = [IsPlatformAdmin]
    serializer_class = TestimonialSerializer
    queryset = Testimonial.objects.all()
    audit_resource = 'testimonial'


class PartnerLogoViewSet(AuditedModelMixin, viewsets.ModelViewSet):
    permission_classes = [IsPlatformAdmin]
    serializer_class = PartnerLogoSerializer
    queryset = PartnerLogo.objects.all()
    audit_resource = 'partner_logo'

    @action(detail=True, methods=['post'])
    def toggle(self, request, pk=None):
        logo = self.get_object()
        is_active = request.data.get('is_active', not logo.is_active)
        services.toggle_partner_logo(logo, bool(is_active), actor=request.user)
        return Response(self.get_serializer(logo).data)

    @action(detail=False, methods=['post'])
    def reorder(self, request):
        serializer = ReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        logos = services.reorder_partner_logos(serializer.validated_data['logo_ids'], actor=request.user)
        return Response(self.get_serializer(logos, many=True).data)


@api_view(['GET'])
@permission_classes([AllowAny])
def public_marketing(request):
    """Everything the public site renders: live tools, featured testimonials, partners."""
    return Response({
        'tools': MarketingToolSerializer(
            services.active_marketing_tools(request.GET.get('type')), many=True
        ).data,
        'testimonials': TestimonialSerializer(services.featured_testimonials(), many=True).data,
        'partners': PartnerLogoSerializer(PartnerLogo.objects.filter(is_active=True), many=True).data,
    })
