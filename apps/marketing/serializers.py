from rest_framework import serializers
from .models import MarketingTool, PartnerLogo, Testimonial


class MarketingToolSerializer(serializers.ModelSerializer):
    class Meta:
        model = MarketingTool
        fields = '__all__'
        read_only_fields = ('created_at', 'updated_at')

    def validate(self, data):
        start = data.get('start_date', getattr(self.instance, 'start_date', None))
        end = data.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': "end_date must not be before start_date."})
        return data


class TestimonialSerializer(serializers.ModelSerializer):
    rating = serializers.IntegerField(min_value=1, max_value=5, required=False, allow_null=True)

    class Meta:
        model = Testimonial
        fields = '__all__'
        read_only_fields = ('created_at', 'updated_at')


class PartnerLogoSerializer(serializers.ModelSerializer):
    class Meta:
        model = PartnerLogo
        fields = '__all__'
        read_only_fields = ('created_at', 'updated_at')


class ReorderSerializer(serializers.Serializer):
    logo_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)

    def validate_logo_ids(self, value):
        if len(set(value)) != len(value):
            raise serializers.ValidationError("Duplicate logo ids.")
        return value
