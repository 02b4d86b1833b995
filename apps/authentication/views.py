import logging

from django.db.models import Q
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from .models import User
from .permissions import IsPlatformAdmin
from .serializers import LoginSerializer, RoleSerializer, UserAdminSerializer, UserSerializer
from . import services

logger = logging.getLogger(__name__)


def _token_pair(user):
    refresh = RefreshToken.for_user(user)
    return {'refresh': str(refresh), 'access': str(refresh.access_token)}


@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    serializer = UserSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = services.register_user(dict(serializer.validated_data))
    logger.info(f"Registered {user.role} account {user.email}")
    return Response(
        {'user': UserSerializer(user).data, 'tokens': _token_pair(user)},
        status=status.HTTP_201_CREATED
    )


@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.validated_data['user']
    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])
    return Response({'user': UserSerializer(user).data, 'tokens': _token_pair(user)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    try:
        RefreshToken(request.data.get('refresh')).blacklist()
    except TokenError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    return Response(status=status.HTTP_205_RESET_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    return Response(UserSerializer(request.user).data)


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def preference(request, key):
    if request.method == 'PUT':
        value = services.set_preference(request.user, key, request.data.get('value'))
    else:
        value = services.get_preference(request.user, key)
    return Response({'key': key, 'value': value})


@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def user_list(request):
    users = User.objects.order_by('-date_joined')
    role = request.GET.get('role')
    if role:
        users = users.filter(role=role)
    search = request.GET.get('search', '').strip()
    if search:
        users = users.filter(Q(email__icontains=search) | Q(full_name__icontains=search))
    return Response(UserAdminSerializer(users, many=True).data)


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsPlatformAdmin])
def user_detail(request, user_id):
    user = get_object_or_404(User, pk=user_id)
    if request.method == 'DELETE':
        services.delete_user(user, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = RoleSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    services.change_role(user, serializer.validated_data['role'], request.user)
    return Response(UserAdminSerializer(user).data)


@api_view(['GET'])
@permission_classes([IsPlatformAdmin])
def export_users(request):
    response = HttpResponse(services.export_users_csv(), content_type='text/csv')
    filename = f"users-export-{timezone.now().date().isoformat()}.csv"
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


@api_view(['POST'])
@permission_classes([IsPlatformAdmin])
def import_users(request):
    upload = request.FILES.get('file')
    if upload is not None:
        text = upload.read().decode('utf-8-sig')
    else:
        text = request.data.get('csv', '')
    if not text:
        return Response({'error': 'CSV content is required'}, status=status.HTTP_400_BAD_REQUEST)
    return Response(services.import_users_csv(text, request.user))
