"""Tests for UserRepository."""

import pytest

from catalyst_journal.db.repositories.user_repository import UserRepository
from catalyst_journal.exceptions import EmailAlreadyRegisteredError


@pytest.fixture
def user_repo(db):
    return UserRepository(db)


class TestUserCreation:

    def test_create_user(self, user_repo):
        user = user_repo.create_user("ana@example.com", "Ana", "hash")

        assert user.id is not None
        assert user.email == "ana@example.com"
        assert user.name == "Ana"
        assert user.created_at is not None
        assert user.last_login is None

    def test_email_is_lowercased(self, user_repo):
        user = user_repo.create_user("  Ana@Example.COM ", "Ana", "hash")
        assert user.email == "ana@example.com"
        assert user_repo.get_by_email("ANA@example.com").id == user.id

    def test_duplicate_email(self, user_repo):
        user_repo.create_user("ana@example.com", "Ana", "hash")
        with pytest.raises(EmailAlreadyRegisteredError):
            user_repo.create_user("ANA@example.com", "Other", "hash")

    def test_to_dict_hides_password_hash(self, user_repo):
        data = user_repo.create_user("ana@example.com", "Ana", "hash").to_dict()
        assert "password_hash" not in data
        assert data["email"] == "ana@example.com"


class TestUserLookup:

    def test_get_by_id(self, user_repo, user):
        assert user_repo.get_by_id(user.id).email == user.email

    def test_get_missing(self, user_repo):
        assert user_repo.get_by_id(999) is None
        assert user_repo.get_by_email("nobody@example.com") is None

    def test_email_exists(self, user_repo, user):
        assert user_repo.email_exists("ana@example.com") is True
        assert user_repo.email_exists("ben@example.com") is False

    def test_update_last_login(self, user_repo, user):
        updated = user_repo.update_last_login(user.id)
        assert updated.last_login is not None
