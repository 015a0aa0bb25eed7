"""Custom DRF permissions for the admin back-office."""

from rest_framework import permissions


class IsStoreAdmin(permissions.BasePermission):
    """
    Only authenticated staff accounts may use back-office endpoints.
    """
    message = 'Admin authentication required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_staff)


class IsStoreAdminOrReadOnly(permissions.BasePermission):
    """Allow public reads; allow writes only for store admins."""

    message = 'Admin authentication required.'

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        return bool(user and user.is_authenticated and user.is_staff)
