from rest_framework.permissions import BasePermission


class IsPlatformAdmin(BasePermission):
    def has_permission(self, request, view):
        return (
            request.user.is_authenticated and
            request.user.is_platform_admin
        )


class IsDesigner(BasePermission):
    def has_permission(self, request, view):
        return (
            request.user.is_authenticated and
            (request.user.role == 'designer' or request.user.is_platform_admin)
        )


class IsHost(BasePermission):
    def has_permission(self, request, view):
        return (
            request.user.is_authenticated and
            (request.user.role == 'host' or request.user.is_platform_admin)
        )


class IsOrderParticipant(BasePermission):
    """Order owner, assigned designer or an admin."""

    def has_object_permission(self, request, view, obj):
        user = request.user
        if not user.is_authenticated:
            return False
        if user.is_platform_admin:
            return True
        order = getattr(obj, 'order', obj)
        return order.user_id == user.id or order.designer_id == user.id
