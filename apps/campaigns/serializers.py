from rest_framework import serializers
from apps.kiosks.models import Kiosk
from .models import AssetLifecycle, Campaign, HostAd, MediaAsset
from .review import APPROVE, REJECT, ReviewKind


class CampaignSerializer(serializers.ModelSerializer):
    kiosks = serializers.PrimaryKeyRelatedField(
        many=True, required=False, queryset=Kiosk.objects.filter(status=Kiosk.Status.ACTIVE)
    )

    class Meta:
        model = Campaign
        fields = '__all__'
        read_only_fields = ('user', 'status', 'total_spent', 'rejection_reason', 'created_at', 'updated_at')

    def validate_name(self, value):
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            owner = self.instance.user if self.instance else request.user
            existing = Campaign.objects.filter(user=owner, name=value)
            if self.instance:
                existing = existing.exclude(pk=self.instance.pk)
            if existing.exists():
                raise serializers.ValidationError(f"You already have a campaign named '{value}'.")
        return value

    def validate(self, data):
        start = data.get('start_date', getattr(self.instance, 'start_date', None))
        end = data.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and start > end:
            raise serializers.ValidationError({'end_date': "end_date must not be before start_date"})
        return data


class MediaAssetSerializer(serializers.ModelSerializer):
    class Meta:
        model = MediaAsset
        fields = '__all__'
        read_only_fields = ('user', 'status', 'validation_errors', 'created_at', 'updated_at')

    def validate_campaign(self, campaign):
        request = self.context.get('request')
        if campaign and request and campaign.user_id != request.user.id:
            raise serializers.ValidationError("Campaign not found.")
        return campaign


class HostAdSerializer(serializers.ModelSerializer):
    class Meta:
        model = HostAd
        fields = '__all__'
        read_only_fields = ('host', 'status', 'rejection_reason', 'created_at', 'updated_at')


class AssetLifecycleSerializer(serializers.ModelSerializer):
    file_name = serializers.CharField(source='media_asset.file_name', read_only=True)
    file_type = serializers.CharField(source='media_asset.file_type', read_only=True)
    campaign_name = serializers.CharField(source='campaign.name', read_only=True, default=None)

    class Meta:
        model = AssetLifecycle
        fields = (
            'id', 'media_asset', 'file_name', 'file_type', 'campaign', 'campaign_name', 'status',
            'storage_folder', 'archived_at', 'restored_at', 'created_at',
        )
        read_only_fields = fields


class ReviewSerializer(serializers.Serializer):
    kind = serializers.ChoiceField(choices=ReviewKind.choices)
    id = serializers.IntegerField()
    action = serializers.ChoiceField(choices=[APPROVE, REJECT])
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')


class PendingItemSerializer(serializers.Serializer):
    kind = serializers.CharField()
    id = serializers.IntegerField()
    title = serializers.CharField()
    status = serializers.CharField()
    owner_id = serializers.IntegerField()
    owner_email = serializers.EmailField()
    owner_name = serializers.CharField()
    detail = serializers.DictField()
    created_at = serializers.DateTimeField()
