from rest_framework import serializers
from .models import Kiosk


class KioskSerializer(serializers.ModelSerializer):
    class Meta:
        model = Kiosk
        fields = '__all__'
        read_only_fields = ('created_at', 'updated_at')

    def validate(self, data):
        base_rate = data.get('base_rate', getattr(self.instance, 'base_rate', 0))
        price = data.get('price', getattr(self.instance, 'price', 0))
        if base_rate < 0 or price < 0:
            raise serializers.ValidationError("Rates must not be negative.")
        return data
