import logging

from django.shortcuts import get_object_or_404
from django.db.models import Q
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.authentication.permissions import IsDesigner, IsOrderParticipant, IsPlatformAdmin
from . import services
from .models import CustomAdOrder, OrderNotification, Proof
from .serializers import (
    AssignDesignerSerializer,
    ChangeRequestSerializer,
    CustomAdOrderSerializer,
    FeedbackSerializer,
    OrderCommentSerializer,
    OrderCreateSerializer,
    OrderNotificationSerializer,
    OrderStatusSerializer,
    ProofSerializer,
)
from .workflow import workflow_steps

logger = logging.getLogger(__name__)


def _require_owner(request, order):
    if order.user_id != request.user.pk and not request.user.is_platform_admin:
        raise PermissionDenied("Only the client who placed the order can do this")


def _require_staff(request, order):
    user = request.user
    if not (user.is_platform_admin or order.designer_id == user.pk):
        raise PermissionDenied("Only the assigned designer or an admin can do this")


class CustomAdOrderViewSet(mixins.CreateModelMixin,
                           mixins.ListModelMixin,
                           mixins.RetrieveModelMixin,
                           viewsets.GenericViewSet):
    permission_classes = [IsAuthenticated, IsOrderParticipant]
    serializer_class = CustomAdOrderSerializer
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    queryset = CustomAdOrder.objects.all()

    def get_queryset(self):
        orders = CustomAdOrder.objects.select_related('user', 'designer')
        user = self.request.user
        if user.is_platform_admin:
            status_filter = self.request.query_params.get('status')
            return orders.filter(workflow_status=status_filter) if status_filter else orders
        return orders.filter(Q(user=user) | Q(designer=user))

    def create(self, request, *args, **kwargs):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        uploads = data.pop('files')

        order, rejected = services.create_order(request.user, data, uploads)
        return Response(
            {
                'order': CustomAdOrderSerializer(order).data,
                'rejected_files': [{'name': name, 'error': error} for name, error in rejected],
            },
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=['get'])
    def workflow(self, request, pk=None):
        return Response(workflow_steps(self.get_object()))

    @action(detail=True, methods=['post'], url_path='assign-designer', permission_classes=[IsPlatformAdmin])
    def assign_designer(self, request, pk=None):
        order = self.get_object()
        serializer = AssignDesignerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = services.assign_designer(order, serializer.validated_data['designer'])
        return Response(self.get_serializer(order).data)

    @action(detail=True, methods=['post'], url_path='status')
    def update_status(self, request, pk=None):
        order = self.get_object()
        _require_staff(request, order)
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        order = services.update_order_status(
            order, data['status'], notes=data.get('notes'), rejection_reason=data.get('rejection_reason')
        )
        return Response(self.get_serializer(order).data)

    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        order = self.get_object()
        _require_owner(request, order)
        serializer = FeedbackSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = services.approve_order(order, serializer.validated_data['feedback'])
        return Response(self.get_serializer(order).data)

    @action(detail=True, methods=['post'], url_path='request-changes')
    def request_changes(self, request, pk=None):
        order = self.get_object()
        _require_owner(request, order)
        serializer = ChangeRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        order = services.request_changes(order, data['feedback'], attachments=data['files'])
        return Response(self.get_serializer(order).data)

    @action(detail=True, methods=['get', 'post'])
    def comments(self, request, pk=None):
        order = self.get_object()
        if request.method == 'POST':
            serializer = OrderCommentSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            is_internal = serializer.validated_data.get('is_internal', False)
            if is_internal:
                _require_staff(request, order)
            comment = services.add_comment(
                order, request.user, serializer.validated_data['content'], is_internal=is_internal
            )
            return Response(OrderCommentSerializer(comment).data, status=status.HTTP_201_CREATED)

        comments = services.visible_comments(order, request.user)
        return Response(OrderCommentSerializer(comments, many=True).data)

    @action(detail=True, methods=['get', 'post'])
    def proofs(self, request, pk=None):
        order = self.get_object()
        if request.method == 'POST':
            _require_staff(request, order)
            serializer = ProofSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            proof = services.create_proof(
                order,
                request.user,
                data['file_url'],
                title=data.get('title', ''),
                description=data.get('description', ''),
                file_name=data.get('file_name', ''),
                file_type=data.get('file_type', ''),
            )
            return Response(ProofSerializer(proof).data, status=status.HTTP_201_CREATED)

        proofs = order.proofs.all()
        if order.user_id == request.user.pk and not request.user.is_platform_admin:
            proofs = proofs.exclude(status=Proof.Status.DRAFT)
        return Response(ProofSerializer(proofs, many=True).data)


class ProofViewSet(viewsets.ReadOnlyModelViewSet):
    permission_classes = [IsAuthenticated, IsOrderParticipant]
    serializer_class = ProofSerializer
    queryset = Proof.objects.all()

    def get_queryset(self):
        proofs = Proof.objects.select_related('order')
        user = self.request.user
        if user.is_platform_admin:
            return proofs
        return proofs.filter(Q(order__user=user) | Q(order__designer=user))

    @action(detail=True, methods=['post'], permission_classes=[IsDesigner])
    def submit(self, request, pk=None):
        proof = self.get_object()
        _require_staff(request, proof.order)
        proof = services.submit_proof(proof, request.data.get('designer_notes', ''))
        return Response(self.get_serializer(proof).data)

    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        proof = self.get_object()
        _require_owner(request, proof.order)
        serializer = FeedbackSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        proof = services.approve_proof(proof, serializer.validated_data['feedback'])
        return Response(self.get_serializer(proof).data)

    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        proof = self.get_object()
        _require_owner(request, proof.order)
        proof = services.reject_proof(proof, request.data.get('feedback', ''))
        return Response(self.get_serializer(proof).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def notifications(request):
    unread_only = request.GET.get('unread') in ('1', 'true')
    items = services.notifications_for(request.user, unread_only=unread_only)
    return Response(OrderNotificationSerializer(items, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def mark_notification_read(request, notification_id):
    notification = get_object_or_404(OrderNotification, pk=notification_id, recipient=request.user)
    services.mark_notification_read(notification)
    return Response(OrderNotificationSerializer(notification).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def approved_media(request):
    return Response(services.approved_media_for(request.user))
