import pytest
import requests
from django.core.files.uploadedfile import SimpleUploadedFile

from apps.files.services.ipfs import IPFSUploadError, get_ipfs_url, upload_to_ipfs


def pdf(name="brief.pdf", size=128):
    return SimpleUploadedFile(name, b"%PDF" + b"0" * size, content_type="application/pdf")


@pytest.mark.django_db
class TestFileUpload:
    def test_upload(self, auth, client_user, pinata):
        r = auth(client_user).post("/api/files/upload/", {"file": pdf()}, format="multipart")

        assert r.status_code == 200
        assert r.json() == {
            "url": "https://ipfs.test/ipfs/QmTestHash1",
            "ipfsHash": "QmTestHash1",
            "filename": "brief.pdf",
        }
        assert pinata[0]["headers"]["Authorization"] == "Bearer test-pinata-jwt"
        assert pinata[0]["files"]["file"][0] == "brief.pdf"

    def test_no_file(self, auth, client_user, pinata):
        r = auth(client_user).post("/api/files/upload/", {}, format="multipart")
        assert r.status_code == 400
        assert r.json()["message"] == "No file uploaded"

    def test_rejects_unknown_type(self, auth, client_user, pinata):
        exe = SimpleUploadedFile("tool.exe", b"MZ", content_type="application/x-msdownload")
        r = auth(client_user).post("/api/files/upload/", {"file": exe}, format="multipart")
        assert r.status_code == 400
        assert pinata == []

    def test_rejects_large_file(self, auth, client_user, pinata, monkeypatch):
        monkeypatch.setattr("apps.files.validation.MAX_UPLOAD_SIZE_BYTES", 10)
        r = auth(client_user).post("/api/files/upload/", {"file": pdf(size=100)}, format="multipart")
        assert r.status_code == 400
        assert "too large" in r.json()["message"]

    def test_requires_auth(self, api_client, pinata):
        r = api_client.post("/api/files/upload/", {"file": pdf()}, format="multipart")
        assert r.status_code == 401

    def test_pinata_failure(self, auth, client_user, monkeypatch):
        def boom(*args, **kwargs):
            raise requests.ConnectionError("pinata down")

        monkeypatch.setattr("apps.files.services.ipfs.requests.post", boom)
        r = auth(client_user).post("/api/files/upload/", {"file": pdf()}, format="multipart")
        assert r.status_code == 500
        assert "Pinata" in r.json()["message"]


class TestIPFSService:
    def test_missing_jwt(self, settings):
        settings.PINATA_JWT = ""
        with pytest.raises(IPFSUploadError):
            upload_to_ipfs(b"data")

    def test_gateway_url(self, settings):
        settings.IPFS_GATEWAY_URL = "https://gateway.example/ipfs"
        assert get_ipfs_url("QmX") == "https://gateway.example/ipfs/QmX"

    def test_logs_with_lazy_arguments(self, pinata, caplog):
        with caplog.at_level("INFO", logger="apps.files.services.ipfs"):
            cid = upload_to_ipfs(b"data", filename="brief.pdf")

        record = caplog.records[-1]
        assert record.msg == "Pinned %s to IPFS as %s"
        assert record.args == ("brief.pdf", cid)
        assert record.getMessage() == f"Pinned brief.pdf to IPFS as {cid}"
