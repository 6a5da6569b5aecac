from django.urls import path
from .views import (
    UploadSubmissionFilesView,
    MarkSubmissionCompleteView,
    ApproveSubmissionView,
    SubmissionDetailView,
)

urlpatterns = [
    path('submissions/<int:job_id>/upload/', UploadSubmissionFilesView.as_view(), name='submission-upload'),
    path('submissions/<int:job_id>/complete/', MarkSubmissionCompleteView.as_view(), name='submission-complete'),
    path('submissions/<int:job_id>/approve/', ApproveSubmissionView.as_view(), name='submission-approve'),
    path('submissions/<int:job_id>/', SubmissionDetailView.as_view(), name='submission-detail'),
]
