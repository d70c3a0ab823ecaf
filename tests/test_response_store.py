"""Tests for ResponseStore: keyed upserts, blank-skip and scope isolation."""

import pytest

from catalyst_journal.db.repositories.process_repository import ProcessRepository
from catalyst_journal.exceptions import StepNotFoundError, ValidationError
from catalyst_journal.models.scope import Scope
from catalyst_journal.services.response_service import ResponseEntry, is_blank


@pytest.fixture
def scope(user):
    return Scope.training(user.id)


class TestUpsert:

    def test_round_trip(self, store, scope, step_at):
        step = step_at(1, 1)
        store.upsert(scope, step.day_id, step.id, "problem_1", "Deadlines slip")

        records = store.get_by_step(scope, step.id)
        assert [(r.field_name, r.field_value) for r in records] == [("problem_1", "Deadlines slip")]

    def test_second_write_replaces_value(self, store, scope, step_at):
        step = step_at(1, 1)
        store.upsert(scope, step.day_id, step.id, "problem_1", "first")
        record = store.upsert(scope, step.day_id, step.id, "problem_1", "second")

        assert record.field_value == "second"
        assert len(store.get_all(scope)) == 1

    def test_blank_keeps_saved_value(self, store, scope, step_at):
        step = step_at(1, 1)
        store.upsert(scope, step.day_id, step.id, "problem_1", "kept")
        record = store.upsert(scope, step.day_id, step.id, "problem_1", "   ")

        assert record.field_value == "kept"
        assert store.get_value(scope, step.day_id, step.id, "problem_1") == "kept"

    def test_blank_on_empty_key_returns_none(self, store, scope, step_at):
        step = step_at(1, 1)
        assert store.upsert(scope, step.day_id, step.id, "problem_2", "") is None

    def test_values_are_stored_as_text(self, store, scope, step_at):
        step = step_at(1, 2)
        record = store.upsert(scope, step.day_id, step.id, "impact_1", 4)
        assert record.field_value == "4"

    def test_step_outside_day(self, store, scope, step_at):
        wrong_day = step_at(2, 1).day_id
        with pytest.raises(ValidationError):
            store.upsert(scope, wrong_day, step_at(1, 1).id, "problem_1", "x")

    def test_unknown_step(self, store, scope, step_at):
        with pytest.raises(StepNotFoundError):
            store.upsert(scope, step_at(1, 1).day_id, 9999, "problem_1", "x")

    def test_blank_field_name(self, store, scope, step_at):
        step = step_at(1, 1)
        with pytest.raises(ValidationError):
            store.upsert(scope, step.day_id, step.id, " ", "x")


    def test_undeclared_field(self, store, scope, step_at):
        step = step_at(1, 1)
        with pytest.raises(ValidationError, match="has no field 'problem_6'"):
            store.upsert(scope, step.day_id, step.id, "problem_6", "x")

    @pytest.mark.parametrize("value", ["0", "6", "4.5x", "nan"])
    def test_score_outside_range(self, store, scope, step_at, value):
        step = step_at(1, 2)
        with pytest.raises(ValidationError):
            store.upsert(scope, step.day_id, step.id, "impact_1", value)
        assert store.get_by_step(scope, step.id) == []

    def test_wide_score_range(self, store, scope, step_at):
        step = step_at(2, 7)
        record = store.upsert(scope, step.day_id, step.id, "severity_1", "9")
        assert record.field_value == "9"

    def test_select_value_must_be_an_option(self, store, scope, step_at):
        step = step_at(1, 3)
        store.upsert(scope, step.day_id, step.id, "analysis_tool", "Pareto")
        with pytest.raises(ValidationError, match="analysis_tool must be one of"):
            store.upsert(scope, step.day_id, step.id, "analysis_tool", "Gut feeling")

class TestUpsertMany:

    def test_reports_status_per_entry(self, store, scope, step_at):
        s1, s2 = step_at(1, 1), step_at(2, 1)
        results = store.upsert_many(scope, [
            ResponseEntry(s1.day_id, s1.id, "problem_1", "A"),
            ResponseEntry(s1.day_id, s1.id, "problem_2", ""),
            ResponseEntry(s2.day_id, s1.id, "problem_3", "wrong day"),
            ResponseEntry(s1.day_id, s1.id, "problem_4", "D"),
        ])

        assert [r.saved for r in results] == [True, False, False, True]
        assert results[1].skipped is True
        assert "does not belong" in results[2].error
        assert {r.field_name for r in store.get_all(scope)} == {"problem_1", "problem_4"}

    def test_result_dict_without_error(self, store, scope, step_at):
        s1 = step_at(1, 1)
        result = store.upsert_many(scope, [ResponseEntry(s1.day_id, s1.id, "problem_1", "A")])[0]
        assert result.to_dict() == {
            "day_id": s1.day_id,
            "step_id": s1.id,
            "field_name": "problem_1",
            "saved": True,
            "skipped": False,
        }


class TestReads:

    def test_ordered_by_day_step_field(self, store, scope, step_at):
        s11, s12, s21 = step_at(1, 1), step_at(1, 2), step_at(2, 1)
        store.upsert(scope, s21.day_id, s21.id, "how_might_we", "c")
        store.upsert(scope, s12.day_id, s12.id, "impact_1", "3")
        store.upsert(scope, s11.day_id, s11.id, "problem_2", "b")
        store.upsert(scope, s11.day_id, s11.id, "problem_1", "a")

        keys = [(r.step_id, r.field_name) for r in store.get_all(scope)]
        assert keys == [
            (s11.id, "problem_1"),
            (s11.id, "problem_2"),
            (s12.id, "impact_1"),
            (s21.id, "how_might_we"),
        ]
        assert len(store.get_by_day(scope, s11.day_id)) == 3

    def test_missing_value_is_empty_string(self, store, scope, step_at):
        step = step_at(1, 1)
        assert store.get_value(scope, step.day_id, step.id, "problem_5") == ""


class TestClearField:

    def test_clear_removes_record(self, store, scope, step_at):
        step = step_at(1, 1)
        store.upsert(scope, step.day_id, step.id, "problem_1", "x")

        assert store.clear_field(scope, step.day_id, step.id, "problem_1") is True
        assert store.get_value(scope, step.day_id, step.id, "problem_1") == ""
        assert store.clear_field(scope, step.day_id, step.id, "problem_1") is False


class TestScopeIsolation:

    def test_training_and_process_scopes_are_separate(self, db, store, user, step_at):
        process_id = ProcessRepository(db).create(user.id, "Pilot", None, [])
        step = step_at(1, 1)
        training_scope = Scope.training(user.id)
        process_scope = Scope.process(process_id)

        store.upsert(training_scope, step.day_id, step.id, "problem_1", "training answer")
        store.upsert(process_scope, step.day_id, step.id, "problem_1", "process answer")

        assert store.get_value(training_scope, step.day_id, step.id, "problem_1") == "training answer"
        assert store.get_value(process_scope, step.day_id, step.id, "problem_1") == "process answer"


def test_is_blank():
    assert is_blank(None)
    assert is_blank(" \n")
    assert not is_blank(0)
    assert not is_blank("x")
