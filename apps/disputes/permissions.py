from rest_framework.permissions import BasePermission

from apps.contract.chain import ChainError
from apps.cores.exceptions import ChainUnavailable
from apps.disputes.services import is_dispute_resolver


def check_resolver(user):
    try:
        return is_dispute_resolver(user)
    except ChainError as exc:
        raise ChainUnavailable(f"Could not verify dispute resolver status: {exc}")


class IsDisputeResolver(BasePermission):
    message = "Only dispute resolvers can perform this action."

    def has_permission(self, request, view):
        return check_resolver(request.user)


class IsDisputePartyOrResolver(BasePermission):
    message = "Unauthorized"

    def has_object_permission(self, request, view, obj):
        # parties never need the chain lookup
        return obj.is_party(request.user) or check_resolver(request.user)
