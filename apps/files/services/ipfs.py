import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class IPFSUploadError(Exception):
    pass


def upload_to_ipfs(data, filename="upload.bin", content_type="application/octet-stream"):
    """
    Pin raw bytes (or a file-like object) to IPFS through Pinata.
    Returns the content identifier (CID).
    """
    if not settings.PINATA_JWT:
        raise IPFSUploadError("Pinata JWT is not set in environment variables")

    headers = {
        "Authorization": f"Bearer {settings.PINATA_JWT.strip()}",
    }
    files = {"file": (filename, data, content_type)}

    try:
        response = requests.post(
            settings.PINATA_PIN_FILE_URL,
            files=files,
            headers=headers,
            timeout=settings.IPFS_REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as e:
        logger.error("Pinata IPFS upload error for %s: %s", filename, e)
        raise IPFSUploadError(f"Pinata IPFS upload failed: {str(e)}") from e
    except ValueError as e:
        logger.error("Pinata returned a non-JSON body for %s", filename)
        raise IPFSUploadError("Invalid response from Pinata") from e

    cid = payload.get("IpfsHash")
    if not cid:
        logger.error("Pinata response without IpfsHash: %s", payload)
        raise IPFSUploadError(f"Invalid response from Pinata: {payload}")

    logger.info("Pinned %s to IPFS as %s", filename, cid)
    return cid


def get_ipfs_url(cid):
    return f"{settings.IPFS_GATEWAY_URL.rstrip('/')}/{cid}"


def pin_uploaded_file(file):
    """Pin a Django UploadedFile and return its metadata."""
    cid = upload_to_ipfs(
        file.read(),
        filename=file.name,
        content_type=getattr(file, "content_type", None) or "application/octet-stream",
    )
    return {
        "filename": file.name,
        "ipfs_hash": cid,
        "file_size": file.size,
        "mime_type": getattr(file, "content_type", "") or "",
    }
