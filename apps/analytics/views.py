from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from apps.authentication.permissions import IsPlatformAdmin
from apps.notifications.mailchimp import mailchimp_circuit, subscribe_to_newsletter
from .services import dashboard_metrics


@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def dashboard(request):
    return Response(dashboard_metrics())


@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def circuit_breaker_status(request):
    """State of the breakers guarding outbound integrations."""
    circuits = [
        {'circuit': 'mailchimp', 'status': mailchimp_circuit.state_for(subscribe_to_newsletter)},
    ]
    return Response({
        'circuit_breakers': circuits,
        'overall_health': 'OK' if all(c['status'] == 'closed' for c in circuits) else 'DEGRADED'
    })
