from rest_framework.permissions import BasePermission


class IsAdminRole(BasePermission):
    message = "Only admin can perform this action."

    def has_permission(self, request, view):
        return (
            request.user.is_authenticated
            and request.user.is_admin_role
        )
