from __future__ import annotations

import pytest

from src.parcel_intake.parcel_intake.core.exceptions import AuthenticationError
from src.parcel_intake.parcel_intake.users.model import User
from src.parcel_intake.parcel_intake.users.service import AuthService


def test_authenticate_success(users_repo):
    s_user = AuthService(users_repo).authenticate(" OPS@example.com ", "secret123")

    assert s_user.user_id == 1
    assert s_user.email == "ops@example.com"


def test_authenticate_wrong_password(users_repo):
    with pytest.raises(AuthenticationError, match="Error logging in"):
        AuthService(users_repo).authenticate("ops@example.com", "nope")


def test_authenticate_unknown_user(users_repo):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("nobody@example.com", "secret123")


def test_authenticate_inactive_user(users_repo):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("gone@example.com", "secret123")


def test_authenticate_placeholder_hash():
    class Repo:
        def get_by_email(self, email):
            return User(user_id=5, email=email, full_name="", password_hash="CHANGE_ME")

    with pytest.raises(AuthenticationError):
        AuthService(Repo()).authenticate("x@example.com", "whatever")
