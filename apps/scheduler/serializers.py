from rest_framework import serializers


class SchedulerInfoSerializer(serializers.Serializer):
    name = serializers.CharField()
    label = serializers.CharField()
    enabled = serializers.BooleanField()
    time = serializers.CharField()
    timezone = serializers.CharField()
    last_run = serializers.DateTimeField(allow_null=True)
    last_result = serializers.JSONField(allow_null=True)


class SchedulerTimeSerializer(serializers.Serializer):
    time = serializers.CharField()
