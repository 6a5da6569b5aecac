from django.urls import path
from .views import (
    CreateDisputeView,
    UploadEvidenceView,
    DisputeDetailView,
    UserDisputesView,
    JobDisputesView,
    ResolverCheckView,
    AllDisputesView,
    ResolveDisputeView,
    CancelDisputeView,
    DisputeMessagesView,
)

urlpatterns = [
    path('disputes/create/', CreateDisputeView.as_view(), name='dispute-create'),

    # resolver routes
    path('disputes/resolver/check/', ResolverCheckView.as_view(), name='dispute-resolver-check'),
    path('disputes/resolver/all/', AllDisputesView.as_view(), name='dispute-resolver-all'),

    path('disputes/user/all/', UserDisputesView.as_view(), name='dispute-user-all'),
    path('disputes/job/<int:job_id>/', JobDisputesView.as_view(), name='dispute-job'),

    path('disputes/<int:pk>/', DisputeDetailView.as_view(), name='dispute-detail'),
    path('disputes/<int:pk>/evidence/', UploadEvidenceView.as_view(), name='dispute-evidence'),
    path('disputes/<int:pk>/resolve/', ResolveDisputeView.as_view(), name='dispute-resolve'),
    path('disputes/<int:pk>/cancel/', CancelDisputeView.as_view(), name='dispute-cancel'),
    path('disputes/<int:pk>/messages/', DisputeMessagesView.as_view(), name='dispute-messages'),
]
