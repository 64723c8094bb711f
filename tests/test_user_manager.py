from __future__ import annotations

import pytest

from database import DatabaseManager, MemoryStorage
from user_manager import UserManager

SIGNUP = {
    "fullName": "Kartik Shambharkar",
    "email": "kartik@example.com",
    "phoneNumber": "9988776655",
    "password": "longenough",
    "confirmPassword": "longenough",
}


@pytest.fixture
def manager() -> DatabaseManager:
    return DatabaseManager(MemoryStorage())


@pytest.fixture
def users(manager) -> UserManager:
    return UserManager(manager)


@pytest.mark.parametrize("changes, message", [
    ({"fullName": ""}, "Please fill in all fields"),
    ({"email": "kartik.example.com"}, "Please enter a valid email address"),
    ({"phoneNumber": "99887766"}, "Please enter a valid 10-digit phone number"),
    ({"password": "short", "confirmPassword": "short"}, "Password must be at least 8 characters long"),
    ({"confirmPassword": "different1"}, "Passwords do not match"),
    ({"phoneNumber": 9876543210}, "All fields must be text"),
    ({"email": ["kartik@example.com"]}, "All fields must be text"),
])
def test_signup_validation(users, changes, message):
    user, token, error = users.register_user(dict(SIGNUP, **changes))
    assert user is None and token is None
    assert error == message


def test_signup_signs_in_and_hashes_password(users, manager):
    user, token, _ = users.register_user(SIGNUP)

    assert token and manager.get_session_token() == token
    assert manager.get_current_user().email == "kartik@example.com"
    stored = manager.get_json("kalakriti-users")[0]
    assert stored["passwordHash"] and stored["passwordHash"] != "longenough"


def test_duplicate_email_rejected(users):
    users.register_user(SIGNUP)
    user, _, message = users.register_user(dict(SIGNUP, email="KARTIK@example.com"))
    assert user is None
    assert message == "An account with this email already exists"


def test_login_and_logout(users, manager):
    users.register_user(SIGNUP)
    users.logout()
    assert manager.get_current_user() is None

    user, token, _ = users.login("kartik@example.com", "wrong-password")
    assert user is None and token is None

    user, token, _ = users.login(" kartik@example.com ", "longenough")
    assert user.full_name == "Kartik Shambharkar"
    assert manager.get_session_token() == token


def test_update_profile_syncs_user_list(users, manager):
    user, _, _ = users.register_user(SIGNUP)

    updated, _ = users.update_profile(user, {"city": "Pune", "firstName": "Kartik", "lastName": "S"})

    assert updated.full_name == "Kartik S"
    assert manager.get_current_user().city == "Pune"
    assert manager.get_user_by_email("kartik@example.com").city == "Pune"


def test_update_profile_rejects_bad_phone(users):
    user, _, _ = users.register_user(SIGNUP)
    updated, message = users.update_profile(user, {"phoneNumber": "123"})
    assert updated is None
    assert "10-digit" in message


def test_update_profile_rejects_non_text_values(users, manager):
    user, _, _ = users.register_user(SIGNUP)
    updated, message = users.update_profile(user, {"city": 411001})
    assert updated is None
    assert message == "All fields must be text"
    assert manager.get_user_by_email("kartik@example.com").city is None


def test_mark_participated_assigns_contestant_id_once(users, manager):
    user, _, _ = users.register_user(SIGNUP)

    users.mark_participated(user)
    first_id = manager.get_current_user().contestant_id
    users.mark_participated(manager.get_current_user())

    assert first_id.startswith("KH") and len(first_id) == 12
    assert manager.get_current_user().contestant_id == first_id
    assert manager.get_current_user().has_participated is True
