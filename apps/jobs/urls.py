from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import JobViewSet, MilestoneCompleteView, MilestoneApproveView


# Router for job endpoints
job_router = DefaultRouter()
job_router.register("jobs", JobViewSet, basename="jobs")

urlpatterns = [
    path('milestones/complete/', MilestoneCompleteView.as_view(), name='milestone-complete'),
    path('milestones/approve/', MilestoneApproveView.as_view(), name='milestone-approve'),

    path('', include(job_router.urls)),
]
