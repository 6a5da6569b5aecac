from django.urls import path
from .views import (
    ApplyToJobView,
    JobApplicationsView,
    MyApplicationsView,
    ApplicationStatusView,
    WithdrawApplicationView,
)

urlpatterns = [
    path('applications/apply/', ApplyToJobView.as_view(), name='application-apply'),
    path('applications/job/<int:job_id>/', JobApplicationsView.as_view(), name='application-job-list'),
    path('applications/freelancer/', MyApplicationsView.as_view(), name='application-mine'),
    path('applications/<int:pk>/status/', ApplicationStatusView.as_view(), name='application-status'),
    path('applications/<int:pk>/withdraw/', WithdrawApplicationView.as_view(), name='application-withdraw'),
]
