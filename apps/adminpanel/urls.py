from django.urls import path
from .views import (
    AdminStatsView,
    FlagAbuseView,
    AbuseReportListView,
    AbuseReportStatusView,
    AdminUserList,
    toggle_block,
)

urlpatterns = [
    path("admin/stats/", AdminStatsView.as_view(), name="admin-stats"),
    path("admin/flag/", FlagAbuseView.as_view(), name="admin-flag"),
    path("admin/reports/", AbuseReportListView.as_view(), name="admin-reports"),
    path("admin/reports/<int:pk>/", AbuseReportStatusView.as_view(), name="admin-report-status"),
    path("admin/users/", AdminUserList.as_view(), name="admin-users"),
    path("admin/toggle-block/", toggle_block, name="toggle-block"),
]
