from rest_framework import serializers
from .models import Coupon, CouponScope
from .services import status_label


class CouponScopeSerializer(serializers.ModelSerializer):
    class Meta:
        model = CouponScope
        fields = ('id', 'scope_type', 'scope_value')


class CouponSerializer(serializers.ModelSerializer):
    scopes = CouponScopeSerializer(many=True, required=False)
    status_label = serializers.SerializerMethodField()

    class Meta:
        model = Coupon
        fields = (
            'id', 'code', 'description', 'type', 'value', 'max_uses', 'current_uses', 'min_amount',
            'valid_from', 'valid_until', 'is_active', 'scopes', 'status_label', 'created_at', 'updated_at',
        )
        read_only_fields = ('current_uses', 'created_at', 'updated_at')

    def get_status_label(self, obj):
        return status_label(obj)

    def validate_code(self, value):
        code = value.strip().upper()
        existing = Coupon.objects.filter(code=code)
        if self.instance:
            existing = existing.exclude(pk=self.instance.pk)
        if existing.exists():
            raise serializers.ValidationError(f"Coupon code {code} already exists.")
        return code

    def validate(self, data):
        coupon_type = data.get('type', getattr(self.instance, 'type', None))
        value = data.get('value', getattr(self.instance, 'value', 0))
        if value < 0:
            raise serializers.ValidationError({'value': "Value must not be negative."})
        if coupon_type == Coupon.Type.PERCENTAGE and value > 100:
            raise serializers.ValidationError({'value': "Percentage discounts cannot exceed 100."})

        valid_from = data.get('valid_from', getattr(self.instance, 'valid_from', None))
        valid_until = data.get('valid_until', getattr(self.instance, 'valid_until', None))
        if valid_from and valid_until and valid_until <= valid_from:
            raise serializers.ValidationError({'valid_until': "valid_until must be after valid_from."})
        return data


class CouponValidationSerializer(serializers.Serializer):
    code = serializers.CharField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    kiosk_ids = serializers.ListField(child=serializers.CharField(), required=False)
    campaign_type = serializers.ChoiceField(choices=['campaign', 'custom_ad'], required=False)
