"""Tests for JournalDatabase: schema creation and curriculum seeding."""

import pytest

from catalyst_journal.curriculum.definitions import CURRICULUM
from catalyst_journal.db.database import JournalDatabase
from catalyst_journal.db.repositories.response_repository import ResponseRepository
from catalyst_journal.exceptions import DatabaseError, ErrorCode
from catalyst_journal.models.scope import Scope


class TestSchema:

    def test_creates_tables(self, db):
        with db._get_connection() as conn:
            names = {
                row["name"]
                for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            }
        for table in (
            "users",
            "training_days",
            "training_steps",
            "user_progress",
            "user_responses",
            "processes",
            "process_steps",
            "process_responses",
        ):
            assert table in names

    def test_foreign_keys_enabled(self, db):
        with db._get_connection() as conn:
            assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1

    def test_operational_error_becomes_database_error(self, db):
        with pytest.raises(DatabaseError) as exc_info:
            with db._get_connection() as conn:
                conn.execute("SELECT * FROM no_such_table")

        assert exc_info.value.status_code == 500
        assert exc_info.value.code == ErrorCode.DATABASE_ERROR
        assert exc_info.value.details == {"operation": "OperationalError"}


class TestSeeding:

    def test_seeds_full_curriculum(self, db):
        stats = db.get_stats()
        assert stats["training_days"] == 6
        assert stats["training_steps"] == 48
        assert stats["users"] == 0

    def test_step_tools_are_json_lists(self, training, step_at):
        step = training.get_step(step_at(1, 8).id)
        assert step.tools == ["5 Whys", "Ishikawa diagram"]

    def test_reseeding_is_idempotent(self, temp_db_path, db, training):
        before = [(s.id, s.position) for s in training.list_steps()]

        JournalDatabase(temp_db_path)

        with db._get_connection() as conn:
            count = conn.execute("SELECT COUNT(*) FROM training_steps").fetchone()[0]
        after = [(s.id, s.position) for s in training.list_steps()]
        assert count == 48
        assert after == before

    def test_day_titles_match_catalog(self, training):
        titles = [day.title for day in training.list_days()]
        assert titles == [day.title for day in CURRICULUM]


class TestCascade:

    def test_deleting_user_removes_responses(self, db, user, step_at):
        step = step_at(1, 1)
        ResponseRepository(db).upsert(Scope.training(user.id), step.day_id, step.id, "problem_1", "x")

        with db._get_connection() as conn:
            conn.execute("DELETE FROM users WHERE id = ?", (user.id,))

        assert db.get_stats()["user_responses"] == 0
