from rest_framework import status, generics
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView
from rest_framework.exceptions import (
    AuthenticationFailed,
    NotAuthenticated,
    PermissionDenied,
    ValidationError,
)
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken
from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404

from apps.applications.models import Application
from apps.applications.serializers import ApplicationSerializer
from apps.contract.models import Transaction
from apps.contract.serializers import TransactionSerializer
from apps.jobs.models import Job
from apps.jobs.serializers import JobSerializer
from apps.reviews.models import Review
from apps.reviews.serializers import ReviewSerializer

from .serializers import UserSerializer, VerifySignatureSerializer
from .utils import issue_nonce, is_wallet_address


User = get_user_model()


# -------- Wallet login --------
class NonceView(APIView):
    """
    Issue a fresh nonce for the wallet.
    The frontend asks the wallet to sign it and posts the signature to /auth/verify/.
    """
    permission_classes = [AllowAny]

    def get(self, request, wallet):
        if not is_wallet_address(wallet):
            raise ValidationError({"wallet": "Wallet required"})

        nonce = issue_nonce(wallet)
        return Response({"nonce": nonce}, status=status.HTTP_200_OK)


class VerifySignatureView(generics.GenericAPIView):
    """
    Verify the signed nonce, upsert the wallet user and return JWT tokens.
    """
    serializer_class = VerifySignatureSerializer
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        refresh = RefreshToken.for_user(user)
        refresh["wallet"] = user.wallet_address

        return Response(
            {
                "token": str(refresh.access_token),
                "refresh": str(refresh),
                "user": UserSerializer(user).data,
            },
            status=status.HTTP_200_OK,
        )


class VerifyTokenView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            raise NotAuthenticated("No token provided")

        try:
            token = AccessToken(auth_header.split(" ", 1)[1])
        except TokenError:
            raise AuthenticationFailed("Invalid token")

        return Response({"valid": True, "user": dict(token.payload)})


# -------- Profiles --------
class UserProfileView(generics.GenericAPIView):
    serializer_class = UserSerializer

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_object(self):
        return get_object_or_404(User, wallet_address=self.kwargs["wallet"].lower())

    def get(self, request, wallet):
        user = self.get_object()
        return Response(self.get_serializer(user).data)

    def put(self, request, wallet):
        user = self.get_object()

        if request.user.pk != user.pk:
            raise PermissionDenied("Not authorized")

        # walletAddress is read-only on the serializer
        serializer = self.get_serializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)


class DashboardView(APIView):
    """Everything the dashboard page shows for one wallet, in one response."""
    permission_classes = [IsAuthenticated]

    def get(self, request, wallet):
        user = get_object_or_404(User, wallet_address=wallet.lower())

        jobs_posted = Job.objects.filter(client=user).select_related("client", "freelancer")
        jobs_assigned = Job.objects.filter(freelancer=user).select_related("client", "freelancer")
        applications = Application.objects.filter(freelancer=user).select_related("job", "freelancer")
        applications_received = (
            Application.objects
            .filter(job__client=user)
            .select_related("job", "freelancer")
        )
        reviews = Review.objects.filter(reviewee=user).select_related("reviewer", "reviewee")
        transactions = Transaction.objects.filter(user=user)

        return Response({
            "user": UserSerializer(user).data,
            "jobsPosted": JobSerializer(jobs_posted, many=True).data,
            "jobsAssigned": JobSerializer(jobs_assigned, many=True).data,
            "applications": ApplicationSerializer(applications, many=True).data,
            "applicationsReceived": ApplicationSerializer(applications_received, many=True).data,
            "reviews": ReviewSerializer(reviews, many=True).data,
            "transactions": TransactionSerializer(transactions, many=True).data,
        })
