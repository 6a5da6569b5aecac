# -----------------------------
# FILE SIZE LIMITS
# -----------------------------

MAX_UPLOAD_SIZE_MB = 10
MAX_UPLOAD_SIZE_BYTES = MAX_UPLOAD_SIZE_MB * 1024 * 1024

MAX_EVIDENCE_FILES = 5
MAX_SUBMISSION_FILES = 10


# -----------------------------
# ALLOWED FILE EXTENSIONS
# -----------------------------

ALLOWED_EXTENSIONS = {
    # Images
    "jpeg",
    "jpg",
    "png",
    "gif",

    # Documents
    "pdf",
    "doc",
    "docx",
    "txt",

    # Archives (deliverables)
    "zip",
    "rar",

    # Video
    "mp4",
    "mov",
}


# -----------------------------
# MIME TYPES
# -----------------------------

ALLOWED_MIME_TYPES = {
    "image/jpeg",
    "image/png",
    "image/gif",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
    "application/zip",
    "application/x-zip-compressed",
    "application/x-rar-compressed",
    "application/vnd.rar",
    "video/mp4",
    "video/quicktime",
}
