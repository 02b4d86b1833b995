from rest_framework import serializers
from .models import AdminAuditLog


class AdminAuditLogSerializer(serializers.ModelSerializer):
    admin_email = serializers.EmailField(source='admin.email', read_only=True, default=None)

    class Meta:
        model = AdminAuditLog
        fields = (
            'id', 'admin', 'admin_email', 'action', 'resource_type', 'resource_id',
            'details', 'ip_address', 'user_agent', 'created_at',
        )
        read_only_fields = fields
