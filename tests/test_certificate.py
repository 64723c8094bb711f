from __future__ import annotations

from datetime import datetime

import pytest

from database import DatabaseManager, MemoryStorage
from models import AgeCategory, ResultEntry, User
from utils.certificate import CertificateGenerator


@pytest.fixture
def manager() -> DatabaseManager:
    return DatabaseManager(MemoryStorage())


@pytest.fixture
def user() -> User:
    return User(full_name="Priya Sharma", email="priya@example.com", contestant_id="KH1234567890")


def test_renders_pdf_for_ranked_contestant(manager, user, make_result):
    manager.publish_event_result(make_result(
        adult=[ResultEntry("KH1234567890", "Priya S.", AgeCategory.ADULT, 1, score=97)],
    ))

    pdf = CertificateGenerator().generate_for_user(manager, user)

    assert pdf is not None
    assert pdf.startswith(b"%PDF")


def test_context_fields(manager, user, make_result):
    manager.publish_event_result(make_result(
        top100=[ResultEntry("KH1234567890", "Priya S.", AgeCategory.CHILDREN, 23)],
    ))
    lookup = manager.find_entry_for_contestant("KH1234567890")

    context = CertificateGenerator().build_context(user, lookup)

    assert context["name"] == "Priya Sharma"
    assert context["position"] == "23rd"
    assert context["category"] == "Top 100"
    assert context["event_name"] == "Kalakriti Art Event"
    assert context["season"] == "2024"
    assert context["year"] == datetime.now().year
    assert context["contestant_id"] == "KH1234567890"


def test_category_display_name(manager, user, make_result):
    manager.publish_event_result(make_result(
        adult=[ResultEntry("KH1234567890", "Priya S.", AgeCategory.ADULT, 2)],
    ))
    context = CertificateGenerator().build_context(user, manager.find_entry_for_contestant("KH1234567890"))
    assert context["position"] == "2nd"
    assert context["category"] == "Adult (16yr-80yr)"


def test_no_certificate_without_result(manager, user, make_result):
    manager.publish_event_result(make_result())
    assert CertificateGenerator().generate_for_user(manager, user) is None


def test_no_certificate_without_contestant_id(manager):
    assert CertificateGenerator().generate_for_user(manager, User(email="new@example.com")) is None
