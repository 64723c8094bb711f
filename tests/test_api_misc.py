from __future__ import annotations

from io import BytesIO


def test_event_catalog(client):
    body = client.get("/api/events").get_json()
    assert body["total"] == 6
    assert {e["type"] for e in body["data"]} == {"art", "photography", "mehndi", "rangoli", "dance", "singing"}
    assert body["registrationFee"] == 150


def test_event_details(client):
    resp = client.get("/api/events/dance")
    data = resp.get_json()["data"]
    assert data["code"] == "D"
    assert [tier["artworks"] for tier in data["pricing"]] == [1, 2, 3]
    assert client.get("/api/events/poetry").status_code == 404


def test_unknown_route_is_json(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_contact_query_lifecycle(client, admin_headers):
    resp = client.post("/api/queries", json={
        "name": "Dolly Panbase",
        "email": "dolly@example.com",
        "subject": "Certificate",
        "message": "When will certificates be available?",
    })
    assert resp.status_code == 201
    query_id = resp.get_json()["data"]["id"]

    assert client.get("/api/queries").status_code == 401
    listed = client.get("/api/queries", headers=admin_headers).get_json()
    assert listed["counts"] == {"total": 1, "pending": 1, "resolved": 0}

    resolved = client.put(f"/api/queries/{query_id}/resolve", headers=admin_headers)
    assert resolved.get_json()["data"]["status"] == "resolved"
    counts = client.get("/api/queries", headers=admin_headers).get_json()["counts"]
    assert counts == {"total": 1, "pending": 0, "resolved": 1}

    assert client.put("/api/queries/Q404/resolve", headers=admin_headers).status_code == 404


def test_contact_query_search_and_order(client, admin_headers, db):
    for name, subject in [("Gauri", "Fees"), ("Yash", "Results")]:
        client.post("/api/queries", json={
            "name": name, "email": f"{name.lower()}@example.com", "subject": subject, "message": "hi",
        })
    # 新的在前
    data = client.get("/api/queries", headers=admin_headers).get_json()["data"]
    assert [q["name"] for q in data] == ["Yash", "Gauri"]

    found = client.get("/api/queries?search=FEES", headers=admin_headers).get_json()["data"]
    assert [q["name"] for q in found] == ["Gauri"]


def test_contact_query_validation(client):
    missing = client.post("/api/queries", json={"name": "x", "email": "x@example.com"})
    assert missing.status_code == 400
    bad_email = client.post("/api/queries", json={
        "name": "x", "email": "nope", "subject": "s", "message": "m",
    })
    assert bad_email.status_code == 400


def test_submission_lifecycle(client, auth_headers, admin_headers):
    resp = client.post(
        "/api/submissions",
        data={
            "eventType": "art",
            "title": "Monsoon",
            "description": "Watercolour",
            "paymentId": "pay_1",
            "orderId": "order_1",
            "files": [(BytesIO(b"one"), "monsoon.png"), (BytesIO(b"two"), "detail.jpg")],
        },
        headers=auth_headers,
        content_type="multipart/form-data",
    )
    assert resp.status_code == 201, resp.get_data(as_text=True)
    submission = resp.get_json()["data"]
    assert submission["status"] == "submitted"
    assert [f["name"] for f in submission["files"]] == ["monsoon.png", "detail.jpg"]
    assert submission["email"] == "priya@example.com"

    mine = client.get("/api/submissions/user", headers=auth_headers).get_json()
    assert mine["total"] == 1

    url = f"/api/submissions/{submission['submissionId']}/status"
    assert client.put(url, json={"status": "accepted"}).status_code == 401
    assert client.put(url, json={"status": "winner"}, headers=admin_headers).status_code == 400
    updated = client.put(url, json={"status": "accepted", "result": "Shortlisted"}, headers=admin_headers)
    assert updated.get_json()["data"]["status"] == "accepted"
    assert updated.get_json()["data"]["result"] == "Shortlisted"

    assert client.put("/api/submissions/SUB404/status", json={"status": "accepted"},
                      headers=admin_headers).status_code == 404


def test_submission_requires_file_and_title(client, auth_headers):
    no_file = client.post(
        "/api/submissions",
        data={"eventType": "art", "title": "Monsoon"},
        headers=auth_headers,
        content_type="multipart/form-data",
    )
    assert no_file.status_code == 400

    no_title = client.post(
        "/api/submissions",
        data={"eventType": "art", "files": [(BytesIO(b"x"), "a.png")]},
        headers=auth_headers,
        content_type="multipart/form-data",
    )
    assert no_title.status_code == 400


def test_contact_query_rejects_non_text_fields(client, db):
    numeric_email = client.post("/api/queries", json={
        "name": "x", "email": 5, "subject": "s", "message": "m",
    })
    assert numeric_email.status_code == 400
    assert numeric_email.get_json()["message"] == "Must be text: email"

    numeric_phone = client.post("/api/queries", json={
        "name": "x", "email": "x@example.com", "phone": 9876543210, "subject": "s", "message": "m",
    })
    assert numeric_phone.status_code == 400
    assert db.get_queries() == []
