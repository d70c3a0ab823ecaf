"""Tests for the single-hop resolution engine."""

import pytest

from catalyst_journal.curriculum.fields import SourceRef
from catalyst_journal.db.repositories.response_repository import ResponseRepository
from catalyst_journal.models.scope import Scope
from catalyst_journal.services.resolution import ResolutionEngine


@pytest.fixture
def engine(db, training):
    return ResolutionEngine(ResponseRepository(db), training)


@pytest.fixture
def scope(user):
    return Scope.training(user.id)


@pytest.fixture
def save(store, scope, step_at):
    def _save(day, step, field, value, in_scope=None):
        target = step_at(day, step)
        store.upsert(in_scope or scope, target.day_id, target.id, field, value)
    return _save


class TestDirectLookup:

    def test_own_value(self, engine, scope, save, step_at):
        save(1, 5, "what", "Orders ship late")
        current = step_at(1, 5)
        assert engine.resolve(scope, current.day_id, current.id, "what") == "Orders ship late"

    def test_miss_is_empty_string(self, engine, scope, step_at):
        current = step_at(1, 5)
        assert engine.resolve(scope, current.day_id, current.id, "what") == ""


class TestSourcedLookup:

    def test_earlier_step_same_day(self, engine, scope, save, step_at):
        save(1, 1, "problem_3", "Revenue drop")
        current = step_at(1, 4)
        value = engine.resolve(scope, current.day_id, current.id, "problem_3", source_step=1)
        assert value == "Revenue drop"

    def test_cross_day(self, engine, scope, save, step_at):
        save(1, 8, "root_cause", "No shared plan")
        current = step_at(2, 1)
        value = engine.resolve(scope, current.day_id, current.id, "root_cause", source_day=1, source_step=8)
        assert value == "No shared plan"

    def test_source_day_alone_keeps_step_number(self, engine, scope, save, step_at):
        save(1, 2, "impact_1", "5")
        current = step_at(2, 2)
        assert engine.resolve(scope, current.day_id, current.id, "impact_1", source_day=1) == "5"

    def test_unknown_position_is_empty(self, engine, scope, step_at):
        current = step_at(1, 1)
        assert engine.resolve(scope, current.day_id, current.id, "x", source_day=9, source_step=1) == ""
        assert engine.resolve(scope, current.day_id, current.id, "x", source_step=42) == ""

    def test_resolve_ref(self, engine, scope, save, step_at):
        save(2, 5, "solution_summary", "Weekly planning board")
        current = step_at(3, 1)
        value = engine.resolve_ref(scope, current.day_id, current.id, SourceRef(2, 5, "solution_summary"))
        assert value == "Weekly planning board"


class TestComposedLookups:
    """Indirection and fallback are built from repeated single resolves."""

    def test_indirection(self, engine, scope, save, step_at):
        save(1, 2, "selected_problem_2", "3")
        save(1, 1, "problem_3", "Revenue drop")
        current = step_at(1, 3)

        selector = engine.resolve(scope, current.day_id, current.id, "selected_problem_2", source_step=2)
        value = engine.resolve(scope, current.day_id, current.id, f"problem_{selector}", source_step=1)
        assert value == "Revenue drop"

    def test_fallback_chain(self, engine, scope, save, step_at):
        save(1, 2, "selected_problem_3", "1")
        save(1, 1, "problem_1", "X")
        current = step_at(1, 3)

        selector = ""
        for candidate in (1, 2, 3):
            selector = engine.resolve(
                scope, current.day_id, current.id, f"selected_problem_{candidate}", source_step=2
            )
            if selector:
                break
        assert engine.resolve(scope, current.day_id, current.id, f"problem_{selector}", source_step=1) == "X"


class TestReadOnly:

    def test_resolve_does_not_write(self, db, engine, scope, step_at):
        current = step_at(1, 5)
        for _ in range(3):
            engine.resolve(scope, current.day_id, current.id, "what", source_day=1, source_step=1)
        assert db.get_stats()["user_responses"] == 0

    def test_scopes_do_not_leak(self, engine, save, step_at):
        from_process = Scope.process(1)
        save(1, 8, "root_cause", "user only")
        current = step_at(2, 1)
        assert engine.resolve(from_process, current.day_id, current.id, "root_cause", 1, 8) == ""
