import os

from rest_framework.exceptions import ValidationError

from apps.files.constants import (
    ALLOWED_EXTENSIONS,
    ALLOWED_MIME_TYPES,
    MAX_UPLOAD_SIZE_BYTES,
)


def validate_upload_size(file):
    if not file:
        raise ValidationError("File is required.")

    if file.size > MAX_UPLOAD_SIZE_BYTES:
        raise ValidationError(
            f"{file.name} is too large. Max allowed size is {MAX_UPLOAD_SIZE_BYTES // (1024 * 1024)} MB."
        )

    return True


def validate_upload(file):
    validate_upload_size(file)

    # Either a known extension or a known content type is enough
    ext = os.path.splitext(file.name)[1].lower().replace(".", "")
    content_type = (getattr(file, "content_type", "") or "").lower()

    if ext not in ALLOWED_EXTENSIONS and content_type not in ALLOWED_MIME_TYPES:
        raise ValidationError(
            f"{file.name}: invalid file type. Only images, documents, archives, and videos are allowed."
        )

    return True


def _validate_count(files, max_files):
    if not files:
        raise ValidationError("No files uploaded")

    if len(files) > max_files:
        raise ValidationError(f"You can upload at most {max_files} files at once.")


def validate_uploads(files, max_files):
    _validate_count(files, max_files)

    for file in files:
        validate_upload(file)

    return True


def validate_evidence_uploads(files, max_files):
    """Dispute evidence accepts any file type; only count and size are limited."""
    _validate_count(files, max_files)

    for file in files:
        validate_upload_size(file)

    return True
