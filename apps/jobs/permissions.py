from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsJobOwnerOrReadOnly(BasePermission):
    message = "Not authorized"

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        return obj.client_id == request.user.id


class IsJobParty(BasePermission):
    """Client or assigned freelancer of the job."""

    message = "Not authorized"

    def has_object_permission(self, request, view, obj):
        return obj.is_party(request.user)
