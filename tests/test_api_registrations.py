from __future__ import annotations

import re
from io import BytesIO

from app import create_app
from database import MemoryStorage

FORM = {
    "fullName": "Chetan Urje",
    "email": "chetan@example.com",
    "phone": "9012345678",
    "address": "4 Civil Lines",
    "age": "17",
    "city": "Amravati",
    "state": "Maharashtra",
}


def _post(client, event_type, form, file=None):
    data = dict(form)
    if file is not None:
        data["submission"] = file
    return client.post(f"/api/registrations/{event_type}", data=data, content_type="multipart/form-data")


def test_registration_creates_participant(client, db, admin_headers):
    resp = _post(client, "photography", FORM, (BytesIO(b"fake image"), "sunset.jpg"))

    assert resp.status_code == 201, resp.get_data(as_text=True)
    body = resp.get_json()
    assert re.fullmatch(r"S1P25\d{3}", body["participantId"])
    assert body["data"]["paymentStatus"] == "completed"
    assert body["data"]["submissionFileName"] == "sunset.jpg"

    listed = client.get("/api/registrations?eventType=photography", headers=admin_headers).get_json()
    assert listed["total"] == 1
    assert listed["data"][0]["email"] == "chetan@example.com"

    detail = client.get(f"/api/registrations/{body['participantId']}", headers=admin_headers)
    assert detail.get_json()["data"]["fullName"] == "Chetan Urje"
    assert client.get("/api/registrations/S1P25000", headers=admin_headers).status_code == 404


def test_registration_step_one_errors(client, db):
    resp = _post(client, "art", dict(FORM, phone="12345"), (BytesIO(b"x"), "a.png"))
    assert resp.status_code == 400
    assert resp.get_json()["step"] == 1
    assert db.get_participants() == []


def test_registration_requires_file(client, db):
    resp = _post(client, "art", FORM)
    assert resp.status_code == 400
    assert resp.get_json()["step"] == 2
    assert resp.get_json()["message"] == "Please upload your submission file"


def test_registration_rejects_unsupported_file(client):
    resp = _post(client, "art", FORM, (BytesIO(b"x"), "virus.exe"))
    assert resp.status_code == 400


def test_registration_unknown_event(client):
    assert _post(client, "karaoke", FORM, (BytesIO(b"x"), "a.png")).status_code == 404


def test_registration_oversized_file(tmp_path):
    storage = MemoryStorage()
    app = create_app(
        "testing",
        storage=storage,
        config_overrides={"UPLOAD_FOLDER": str(tmp_path), "MAX_SUBMISSION_SIZE": 8},
    )
    client = app.test_client()

    resp = _post(client, "art", FORM, (BytesIO(b"0123456789"), "big.png"))

    assert resp.status_code == 400
    assert "File size must be less than" in resp.get_json()["message"]
    assert app.extensions["db_manager"].get_participants() == []


def test_registration_list_requires_admin(client):
    assert client.get("/api/registrations").status_code == 401


class DecliningGateway:
    key_id = "rzp_test_declined"

    def collect_fee(self, amount, notes=None):
        raise RuntimeError("card declined")


def test_failed_payment_leaves_no_upload_behind(app, client, db, tmp_path):
    app.extensions["payment_gateway"] = DecliningGateway()

    resp = _post(client, "art", FORM, (BytesIO(b"fake image"), "mural.png"))

    assert resp.status_code == 500
    assert db.get_participants() == []
    registrations_dir = tmp_path / "uploads" / "registrations"
    assert not registrations_dir.exists() or not any(registrations_dir.rglob("*.png"))


def test_successful_registration_saves_upload(client, tmp_path):
    resp = _post(client, "art", FORM, (BytesIO(b"fake image"), "mural.png"))

    assert resp.status_code == 201
    saved = list((tmp_path / "uploads" / "registrations" / "art").glob("*.png"))
    assert len(saved) == 1
