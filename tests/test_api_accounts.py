from __future__ import annotations

from models import AgeCategory, ResultEntry
from utils.payment_gateway import compute_signature


def test_signup_returns_token_without_password_hash(signed_up):
    assert signed_up["success"] is True
    assert signed_up["token"]
    assert signed_up["user"]["email"] == "priya@example.com"
    assert "passwordHash" not in signed_up["user"]


def test_signup_validation_error(client, signup_payload):
    resp = client.post("/api/auth/signup", json=dict(signup_payload, confirmPassword="mismatch1"))
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Passwords do not match"


def test_signup_duplicate_email_conflict(client, signed_up, signup_payload):
    resp = client.post("/api/auth/signup", json=signup_payload)
    assert resp.status_code == 409


def test_signup_requires_json(client):
    resp = client.post("/api/auth/signup", data="fullName=x")
    assert resp.status_code == 400


def test_login_flow(client, signed_up, auth_headers, db):
    assert client.post("/api/auth/logout", headers=auth_headers).status_code == 200
    assert db.get_session_token() is None

    bad = client.post("/api/auth/login", json={"email": "priya@example.com", "password": "nope-nope"})
    assert bad.status_code == 401

    missing = client.post("/api/auth/login", json={"email": "priya@example.com"})
    assert missing.status_code == 400
    assert "password" in missing.get_json()["message"]

    ok = client.post("/api/auth/login", json={"email": "priya@example.com", "password": "supersecret"})
    assert ok.status_code == 200
    assert db.get_session_token() == ok.get_json()["token"]


def test_stale_token_rejected(client, signed_up, auth_headers):
    client.post("/api/auth/logout", headers=auth_headers)
    resp = client.get("/api/users/profile", headers=auth_headers)
    assert resp.status_code == 401


def test_protected_routes_need_bearer(client):
    assert client.get("/api/users/profile").status_code == 401
    assert client.get("/api/users/dashboard").status_code == 401
    assert client.post("/api/auth/logout").status_code == 401


def test_profile_get_and_update(client, auth_headers, db):
    resp = client.get("/api/users/profile", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["user"]["fullName"] == "Priya Sharma"

    resp = client.put("/api/users/profile", json={"city": "Jaipur", "state": "Rajasthan"}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["user"]["city"] == "Jaipur"
    assert db.get_user_by_email("priya@example.com").state == "Rajasthan"


def test_profile_email_is_read_only(client, auth_headers):
    resp = client.put("/api/users/profile", json={"email": "other@example.com"}, headers=auth_headers)
    assert resp.status_code == 400


def test_signup_with_numeric_phone_is_rejected(client, signup_payload):
    resp = client.post("/api/auth/signup", json=dict(signup_payload, phoneNumber=9876543210))
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "All fields must be text"


def test_login_with_non_text_email_is_rejected(client, signed_up):
    resp = client.post("/api/auth/login", json={"email": 5, "password": "supersecret"})
    assert resp.status_code == 400
    assert "email" in resp.get_json()["message"]


def test_new_login_replaces_previous_token(client, signed_up, auth_headers):
    second = client.post("/api/auth/login", json={"email": "priya@example.com", "password": "supersecret"})
    assert second.status_code == 200

    assert client.get("/api/users/profile", headers=auth_headers).status_code == 401
    fresh = {"Authorization": f"Bearer {second.get_json()['token']}"}
    assert client.get("/api/users/profile", headers=fresh).status_code == 200


def test_profile_update_rejects_non_object_and_non_text(client, auth_headers):
    assert client.put("/api/users/profile", json=["city"], headers=auth_headers).status_code == 400
    resp = client.put("/api/users/profile", json={"city": 42}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "All fields must be text"


def test_dashboard_before_participation(client, auth_headers):
    resp = client.get("/api/users/dashboard", headers=auth_headers)
    data = resp.get_json()["data"]
    assert data["hasParticipated"] is False
    assert data["submissions"] == []
    assert data["results"] == []
    assert data["certificateAvailable"] is False


def _participate(client, auth_headers):
    order = client.post(
        "/api/payments/create-order",
        json={"eventType": "art", "numberOfArtworks": 1},
        headers=auth_headers,
    ).get_json()["order"]
    signature = compute_signature("testing-payment-secret", order["id"], "pay_test_1")
    resp = client.post(
        "/api/payments/verify",
        json={"orderId": order["id"], "paymentId": "pay_test_1", "signature": signature, "eventType": "art"},
        headers=auth_headers,
    )
    assert resp.status_code == 200, resp.get_data(as_text=True)
    return resp.get_json()["contestantId"]


def test_dashboard_and_certificate_after_results(client, auth_headers, db, make_result):
    contestant_id = _participate(client, auth_headers)

    no_result = client.get("/api/users/certificate", headers=auth_headers)
    assert no_result.status_code == 404

    db.publish_event_result(make_result(
        adult=[ResultEntry(contestant_id, "Priya Sharma", AgeCategory.ADULT, 3, score=91)],
    ))

    data = client.get("/api/users/dashboard", headers=auth_headers).get_json()["data"]
    assert data["hasParticipated"] is True
    assert data["user"]["contestantId"] == contestant_id
    assert [r["positionText"] for r in data["results"]] == ["3rd Place"]
    assert data["certificateAvailable"] is True

    cert = client.get("/api/users/certificate", headers=auth_headers)
    assert cert.status_code == 200
    assert cert.mimetype == "application/pdf"
    assert cert.data.startswith(b"%PDF")


def test_certificate_needs_contestant_id(client, auth_headers):
    resp = client.get("/api/users/certificate", headers=auth_headers)
    assert resp.status_code == 400
