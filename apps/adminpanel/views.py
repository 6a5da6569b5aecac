from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Sum
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics, permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.filters import SearchFilter, OrderingFilter
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.contract.models import Transaction
from apps.jobs.models import Job
from apps.users.permissions import IsAdminRole
from apps.users.serializers import AdminUserSerializer
from .models import AbuseReport
from .serializers import AbuseReportSerializer, FlagAbuseSerializer, ReportStatusSerializer

User = get_user_model()


class AdminStatsView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        confirmed = Transaction.objects.filter(status="confirmed")
        revenue = (
            confirmed.filter(tx_type="release").aggregate(total=Sum("amount"))["total"]
            or Decimal("0")
        )

        return Response({
            "users": User.objects.count(),
            "jobs": Job.objects.count(),
            "revenue": str(revenue),
            "escrow": confirmed.filter(tx_type="fund").count(),
        })


class FlagAbuseView(generics.CreateAPIView):
    """Any signed-in user can file a report; only admins can read them."""
    serializer_class = FlagAbuseSerializer
    permission_classes = [permissions.IsAuthenticated]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        report = serializer.save()
        return Response(
            {"message": "Report submitted", "report": AbuseReportSerializer(report).data},
            status=status.HTTP_201_CREATED,
        )


class AbuseReportListView(generics.ListAPIView):
    serializer_class = AbuseReportSerializer
    permission_classes = [IsAdminRole]
    filterset_fields = ["status"]

    def get_queryset(self):
        return AbuseReport.objects.select_related("reporter", "reported_user")


class AbuseReportStatusView(generics.UpdateAPIView):
    serializer_class = ReportStatusSerializer
    permission_classes = [IsAdminRole]
    queryset = AbuseReport.objects.all()
    http_method_names = ["patch"]

    def update(self, request, *args, **kwargs):
        report = self.get_object()
        serializer = self.get_serializer(report, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(AbuseReportSerializer(report).data)


class AdminUserList(generics.ListAPIView):
    serializer_class = AdminUserSerializer
    permission_classes = [IsAdminRole]

    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ["role", "is_active"]
    search_fields = ["wallet_address", "username"]
    ordering_fields = ["created_at", "id", "username"]

    def get_queryset(self):
        return User.objects.all().order_by("-created_at")


@api_view(['POST'])
@permission_classes([IsAdminRole])
def toggle_block(request):
    user_id = request.data.get("userId")
    if not user_id:
        return Response({"message": "userId is required"}, status=400)

    try:
        user = User.objects.get(id=user_id)
    except (User.DoesNotExist, ValueError):
        return Response({"message": "User not found"}, status=404)

    if user.pk == request.user.pk:
        return Response({"message": "You cannot block yourself"}, status=400)

    # Flip the current state
    user.is_active = not user.is_active
    user.save(update_fields=["is_active"])

    status_text = "unblocked" if user.is_active else "blocked"

    return Response({
        "message": f"User {status_text} successfully",
        "userId": user.id,
        "isActive": user.is_active,
    })
