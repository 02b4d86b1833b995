from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from apps.audit.serializers import AdminAuditLogSerializer
from apps.authentication.permissions import IsPlatformAdmin
from . import services
from .serializers import SchedulerInfoSerializer, SchedulerTimeSerializer


@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def scheduler_list(request):
    return Response(SchedulerInfoSerializer(services.all_schedulers(), many=True).data)


@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def scheduler_detail(request, name):
    return Response(SchedulerInfoSerializer(services.scheduler_info(name)).data)


@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def trigger(request, name):
    task_id = services.trigger(name, actor=request.user)
    return Response({'task_id': task_id, 'status': 'queued'}, status=status.HTTP_202_ACCEPTED)


@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def test_run(request, name):
    """Run the job synchronously so admins can see its result right away."""
    return Response({'name': name, 'result': services.run_test(name, actor=request.user)})


@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def enable(request, name):
    return Response(SchedulerInfoSerializer(services.set_enabled(name, True, actor=request.user)).data)


@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def disable(request, name):
    return Response(SchedulerInfoSerializer(services.set_enabled(name, False, actor=request.user)).data)


@api_view(['PUT'])
@permission_classes([IsPlatformAdmin])
def update_time(request, name):
    serializer = SchedulerTimeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    info = services.update_time(name, serializer.validated_data['time'], actor=request.user)
    return Response(SchedulerInfoSerializer(info).data)


@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def activity(request):
    limit = request.GET.get('limit', '20')
    limit = int(limit) if limit.isdigit() else 20
    return Response(AdminAuditLogSerializer(services.recent_activity(limit), many=True).data)
