from rest_framework import serializers
from .campaign_notifications import CAMPAIGN_EMAIL_STATUSES
from .models import EmailQueueItem, EmailTemplate, SystemSetting


class EmailTemplateSerializer(serializers.ModelSerializer):
    class Meta:
        model = EmailTemplate
        fields = '__all__'
        read_only_fields = ('created_at', 'updated_at')


class EmailQueueItemSerializer(serializers.ModelSerializer):
    template_type = serializers.CharField(source='template.type', read_only=True, default=None)

    class Meta:
        model = EmailQueueItem
        fields = (
            'id', 'template', 'template_type', 'recipient_email', 'recipient_name', 'subject',
            'status', 'retry_count', 'max_retries', 'error_message', 'sent_at', 'created_at',
        )
        read_only_fields = fields


class SystemSettingSerializer(serializers.ModelSerializer):
    class Meta:
        model = SystemSetting
        fields = ('key', 'value', 'category', 'description', 'is_public', 'updated_at')
        read_only_fields = ('updated_at',)


class CampaignTestEmailSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=CAMPAIGN_EMAIL_STATUSES)
    email = serializers.EmailField()
