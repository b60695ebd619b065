from sqlalchemy import func, select

from app.core.config import settings
from app.domain.vendor_form import VendorForm
from app.services.storage import get_storage
from app.services.upload import object_key


def _count_vendor_forms(run_db) -> int:
    async def _count(session):
        return (await session.execute(select(func.count(VendorForm.id)))).scalar_one()

    return run_db(_count)


def test_upload_vendor_form(client, create_application, storage):
    application = create_application()

    response = client.post(
        "/api/upload",
        files={"file": ("W9 Form.pdf", b"%PDF-1.4 test", "application/pdf")},
        data={"applicationId": str(application["id"])},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    form = data["vendorForm"]
    assert data["url"] == form["fileUrl"]
    assert form["applicationId"] == application["id"]
    assert form["fileName"] == "W9 Form.pdf"
    assert form["fileSize"] == len(b"%PDF-1.4 test")
    assert form["fileType"] == "application/pdf"

    [(key, (content, content_type))] = storage.objects.items()
    assert key.startswith("vendor-forms/") and key.endswith(".pdf")
    assert content == b"%PDF-1.4 test"


def test_upload_without_application(client):
    response = client.post("/api/upload", files={"file": ("form.png", b"\x89PNG", "image/png")})
    assert response.status_code == 201
    assert response.json()["data"]["vendorForm"]["applicationId"] is None


def test_empty_file_rejected(client):
    response = client.post("/api/upload", files={"file": ("form.pdf", b"", "application/pdf")})
    assert response.status_code == 400


def test_missing_file(client):
    response = client.post("/api/upload", data={"applicationId": "1"})
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "file"


def test_bad_application_id(client):
    response = client.post(
        "/api/upload",
        files={"file": ("form.pdf", b"data", "application/pdf")},
        data={"applicationId": "abc"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Valid application ID is required"


def test_unknown_application_stores_nothing(client, storage, run_db):
    response = client.post(
        "/api/upload",
        files={"file": ("form.pdf", b"data", "application/pdf")},
        data={"applicationId": "999"},
    )
    assert response.status_code == 404
    assert storage.objects == {}
    assert _count_vendor_forms(run_db) == 0


def test_storage_failure_leaves_no_record(client, storage, run_db):
    storage.fail = True
    response = client.post("/api/upload", files={"file": ("form.pdf", b"data", "application/pdf")})
    assert response.status_code == 503
    assert response.json() == {"success": False, "error": "Failed to upload file"}
    assert _count_vendor_forms(run_db) == 0


def test_object_key_format():
    assert object_key("Scan.JPG", now_ms=1700000000000).startswith("vendor-forms/1700000000000-")
    assert object_key("Scan.JPG").endswith(".jpg")
    assert object_key("README").endswith(".bin")


def test_oversize_file_rejected(client, storage, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_size_mb", 0)
    response = client.post("/api/upload", files={"file": ("big.pdf", b"x", "application/pdf")})
    assert response.status_code == 413
    assert response.json() == {"success": False, "error": "File size exceeds the 0MB limit."}
    assert storage.objects == {}


def test_unconfigured_storage_is_unavailable(app, client, monkeypatch):
    app.dependency_overrides.pop(get_storage)
    monkeypatch.setattr(settings, "aws_s3_bucket_name", None)

    response = client.post("/api/upload", files={"file": ("form.pdf", b"data", "application/pdf")})

    assert response.status_code == 503
    assert response.json() == {"success": False, "error": "File storage is not configured"}
