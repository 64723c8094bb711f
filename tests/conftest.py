from __future__ import annotations

from io import BytesIO

import pandas as pd
import pytest

from app import create_app
from database import MemoryStorage
from models import AgeCategory, EventResult, ResultEntry

ADMIN_KEY = "test-admin-key"


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def app(tmp_path, storage):
    """Flask app on TestingConfig with in-memory storage and a temp upload folder."""
    app = create_app(
        "testing",
        storage=storage,
        config_overrides={"UPLOAD_FOLDER": str(tmp_path / "uploads")},
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return app.extensions["db_manager"]


@pytest.fixture
def admin_headers() -> dict:
    return {"X-Admin-Key": ADMIN_KEY}


@pytest.fixture
def signup_payload() -> dict:
    return {
        "fullName": "Priya Sharma",
        "email": "priya@example.com",
        "phoneNumber": "9876543210",
        "password": "supersecret",
        "confirmPassword": "supersecret",
    }


@pytest.fixture
def signed_up(client, signup_payload) -> dict:
    resp = client.post("/api/auth/signup", json=signup_payload)
    assert resp.status_code == 201, resp.get_data(as_text=True)
    return resp.get_json()


@pytest.fixture
def auth_headers(signed_up) -> dict:
    return {"Authorization": f"Bearer {signed_up['token']}"}


def _entries(category, names, prefix):
    return [
        ResultEntry(f"{prefix}{i + 1}", name, category, i + 1, score=90 - i)
        for i, name in enumerate(names)
    ]


@pytest.fixture
def make_result():
    """Factory for an EventResult with a few entries per bucket."""
    def _make(event_type="art", season="2024", top100=None, adult=None):
        return EventResult(
            event_type=event_type,
            season=season,
            top_positions={
                AgeCategory.ADULT: adult if adult is not None else _entries(
                    AgeCategory.ADULT, ["Abhishek Kadu", "Punam Wagh"], "ART24-1"
                ),
                AgeCategory.CHILDREN: _entries(AgeCategory.CHILDREN, ["Gauri Dahake"], "ART24-2"),
                AgeCategory.PRESCHOOL: _entries(AgeCategory.PRESCHOOL, ["Rohit Bhise"], "ART24-3"),
            },
            top100=top100 or [],
        )
    return _make


@pytest.fixture
def workbook_bytes():
    """Factory: {sheet name: list of row dicts} -> xlsx bytes."""
    def _build(sheets: dict) -> bytes:
        output = BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            for name, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=name, index=False)
        return output.getvalue()
    return _build
