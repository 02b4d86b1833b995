from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from apps.authentication.permissions import IsPlatformAdmin
from .serializers import AdminAuditLogSerializer
from .services import recent_activity


@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def activity(request):
    try:
        limit = int(request.GET.get('limit', 10))
    except ValueError:
        return Response({'error': 'limit must be an integer'}, status=400)
    entries = recent_activity(limit=max(limit, 0), resource_type=request.GET.get('resource_type'))
    return Response(AdminAuditLogSerializer(entries, many=True).data)
