from rest_framework import permissions, status
from rest_framework.exceptions import ValidationError
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.cores.exceptions import IPFSUploadFailed
from apps.files.services.ipfs import IPFSUploadError, get_ipfs_url, pin_uploaded_file
from apps.files.validation import validate_upload


class FileUploadView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        file = request.FILES.get("file")
        if not file:
            raise ValidationError("No file uploaded")

        validate_upload(file)

        try:
            pinned = pin_uploaded_file(file)
        except IPFSUploadError as exc:
            raise IPFSUploadFailed(str(exc))

        return Response(
            {
                "url": get_ipfs_url(pinned["ipfs_hash"]),
                "ipfsHash": pinned["ipfs_hash"],
                "filename": pinned["filename"],
            },
            status=status.HTTP_200_OK,
        )
