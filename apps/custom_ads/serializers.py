from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import CustomAdOrder, OrderComment, OrderNotification, Proof
from .workflow import workflow_steps

User = get_user_model()


class OrderCommentSerializer(serializers.ModelSerializer):
    author_name = serializers.CharField(source='author.display_name', read_only=True)

    class Meta:
        model = OrderComment
        fields = ('id', 'order', 'author', 'author_name', 'content', 'attachments', 'is_internal', 'created_at')
        read_only_fields = ('order', 'author', 'attachments', 'created_at')


class ProofSerializer(serializers.ModelSerializer):
    class Meta:
        model = Proof
        fields = '__all__'
        read_only_fields = (
            'order', 'designer', 'version', 'status', 'client_feedback', 'created_at', 'updated_at'
        )


class CustomAdOrderSerializer(serializers.ModelSerializer):
    client_name = serializers.CharField(read_only=True)
    designer_name = serializers.CharField(source='designer.display_name', read_only=True, default=None)
    workflow_steps = serializers.SerializerMethodField()

    class Meta:
        model = CustomAdOrder
        fields = '__all__'
        read_only_fields = (
            'user', 'files', 'payment_status', 'workflow_status', 'designer', 'actual_completion_date',
            'rejection_reason', 'designer_notes', 'created_at', 'updated_at',
        )

    def get_workflow_steps(self, obj):
        return workflow_steps(obj)

    def validate_total_amount(self, value):
        if value < 0:
            raise serializers.ValidationError("Total amount cannot be negative")
        return value


class OrderCreateSerializer(serializers.Serializer):
    service_key = serializers.CharField(max_length=100)
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    address = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    details = serializers.CharField(required=False, allow_blank=True, default='')
    total_amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    priority = serializers.ChoiceField(choices=CustomAdOrder.Priority.choices, default=CustomAdOrder.Priority.NORMAL)
    estimated_completion_date = serializers.DateField(required=False, allow_null=True)
    files = serializers.ListField(child=serializers.FileField(), allow_empty=False)


class AssignDesignerSerializer(serializers.Serializer):
    designer_id = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(role='designer', is_active=True), source='designer'
    )


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=CustomAdOrder.WorkflowStatus.choices)
    notes = serializers.CharField(required=False, allow_blank=True)
    rejection_reason = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if attrs['status'] == CustomAdOrder.WorkflowStatus.REJECTED and not attrs.get('rejection_reason', '').strip():
            raise serializers.ValidationError({'rejection_reason': "A reason is required to reject an order"})
        return attrs


class FeedbackSerializer(serializers.Serializer):
    feedback = serializers.CharField(required=False, allow_blank=True, default='')


class ChangeRequestSerializer(serializers.Serializer):
    feedback = serializers.CharField()
    files = serializers.ListField(child=serializers.FileField(), required=False, default=list)


class OrderNotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderNotification
        fields = '__all__'
        read_only_fields = [f.name for f in OrderNotification._meta.fields]
