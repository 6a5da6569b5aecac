import logging

from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework import permissions, status
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.cores.exceptions import IPFSUploadFailed
from apps.files.constants import MAX_SUBMISSION_FILES
from apps.files.services.ipfs import IPFSUploadError, get_ipfs_url, pin_uploaded_file
from apps.files.validation import validate_uploads
from apps.jobs.models import Job
from apps.notifications.services.create_notifications import notify_user
from apps.submissions.models import ProjectSubmission, SubmissionFile
from apps.submissions.serializers import (
    ApproveSubmissionSerializer,
    ProjectSubmissionSerializer,
)

logger = logging.getLogger(__name__)


def get_submission(job):
    return (
        ProjectSubmission.objects
        .select_related("job", "freelancer")
        .prefetch_related("files")
        .filter(job=job)
        .first()
    )


class UploadSubmissionFilesView(APIView):
    """
    Assigned freelancer pins deliverables to IPFS.
    The first upload moves an assigned job to in_progress.
    """
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, job_id):
        files = request.FILES.getlist("files")
        if not files:
            raise ValidationError("No files uploaded")

        job = get_object_or_404(Job, id=job_id)

        if not job.is_freelancer(request.user):
            raise PermissionDenied("Unauthorized: Only assigned freelancer can upload files")

        if job.status not in ("assigned", "in_progress"):
            raise ValidationError("Job is not in a state that allows file uploads")

        validate_uploads(files, MAX_SUBMISSION_FILES)

        # pin everything before touching the database
        try:
            pinned = [pin_uploaded_file(f) for f in files]
        except IPFSUploadError as exc:
            logger.error("Submission upload for job %s failed: %s", job.id, exc)
            raise IPFSUploadFailed("Failed to upload file to IPFS")

        description = request.data.get("description", "")

        with transaction.atomic():
            submission, created = ProjectSubmission.objects.get_or_create(
                job=job,
                freelancer=request.user,
                defaults={"description": description},
            )
            if not created and description:
                submission.description = description
                submission.save(update_fields=["description", "updated_at"])

            SubmissionFile.objects.bulk_create([
                SubmissionFile(submission=submission, **meta) for meta in pinned
            ])

            if job.status == "assigned":
                job.status = "in_progress"
                job.save(update_fields=["status", "updated_at"])

        return Response({
            "message": "Files uploaded successfully",
            "submission": ProjectSubmissionSerializer(get_submission(job)).data,
            "fileUrls": [
                {"filename": meta["filename"], "url": get_ipfs_url(meta["ipfs_hash"])}
                for meta in pinned
            ],
        }, status=status.HTTP_200_OK)


class MarkSubmissionCompleteView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def patch(self, request, job_id):
        job = get_object_or_404(Job, id=job_id)

        if not job.is_freelancer(request.user):
            raise PermissionDenied("Unauthorized")

        if job.status != "in_progress":
            raise ValidationError("Job is not in progress")

        submission = ProjectSubmission.objects.filter(job=job, freelancer=request.user).first()
        if submission is None:
            raise ValidationError("No submission found. Please upload project files first.")

        with transaction.atomic():
            submission.mark_complete()
            job.status = "submitted"
            job.save(update_fields=["status", "updated_at"])

        notify_user(
            recipient=job.client,
            notif_type="WORK_SUBMITTED",
            title="Work submitted",
            message=f"The freelancer marked '{job.title}' as complete.",
            data={"jobId": job.id},
        )

        return Response({"message": "Project marked as complete. Awaiting client approval."})


class ApproveSubmissionView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def patch(self, request, job_id):
        job = get_object_or_404(Job, id=job_id)

        if not job.is_client(request.user):
            raise PermissionDenied("Unauthorized")

        if job.status not in ("submitted", "in_progress"):
            raise ValidationError(
                f"Job is not ready for approval. Current status: {job.status}. "
                "Job must be marked as complete by freelancer."
            )

        submission = get_submission(job)
        if submission is None:
            raise NotFound("No submission found")
        if not submission.is_marked_complete:
            raise ValidationError("Project not marked as complete by freelancer")

        serializer = ApproveSubmissionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            submission.approve(serializer.validated_data["feedback"])
            job.status = "completed"
            job.save(update_fields=["status", "updated_at"])

        if job.freelancer:
            notify_user(
                recipient=job.freelancer,
                notif_type="WORK_APPROVED",
                title="Work approved",
                message=f"The client approved your work on '{job.title}'.",
                data={"jobId": job.id},
            )

        return Response({"message": "Project approved successfully. Payment will be released."})


class SubmissionDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, job_id):
        job = get_object_or_404(Job, id=job_id)

        if not job.is_party(request.user):
            raise PermissionDenied("Unauthorized")

        submission = get_submission(job)
        if submission is None:
            raise NotFound("No submission found")

        return Response({"submission": ProjectSubmissionSerializer(submission).data})
