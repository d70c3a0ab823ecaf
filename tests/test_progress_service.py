"""Tests for the progress state machine and step submission."""

from unittest.mock import patch

import pytest

from catalyst_journal.curriculum.catalog import Catalog
from catalyst_journal.db.repositories.progress_repository import ProgressRepository
from catalyst_journal.db.repositories.response_repository import ResponseRepository
from catalyst_journal.exceptions import InvalidTransitionError, StepNotFoundError, ValidationError
from catalyst_journal.models.scope import Scope
from catalyst_journal.services.progress_service import ProgressService
from catalyst_journal.services.resolution import ResolutionEngine
from catalyst_journal.services.step_form_service import StepFormService


@pytest.fixture
def progress(db, training, store):
    forms = StepFormService(Catalog(), ResolutionEngine(ResponseRepository(db), training), training)
    return ProgressService(ProgressRepository(db), training, store, forms)


FIVE_PROBLEMS = {f"problem_{i}": f"Problem {i}" for i in range(1, 6)}


class TestTransitions:

    def test_fresh_step_is_not_started(self, progress, user, step_at):
        assert progress.get_status(user.id, step_at(1, 1).id) == "not_started"

    def test_save_then_complete_keeps_started_at(self, progress, user, step_at):
        step_id = step_at(1, 1).id

        saved = progress.set_status(user.id, step_id, "in_progress")
        assert saved.status == "in_progress"
        assert saved.started_at is not None
        assert saved.completed_at is None

        done = progress.set_status(user.id, step_id, "completed")
        assert done.status == "completed"
        assert done.completed_at is not None
        assert done.started_at == saved.started_at

    def test_completing_again_refreshes_completed_at(self, progress, user, step_at):
        step_id = step_at(1, 1).id
        stamps = [
            "2026-01-01T09:00:00+00:00",
            "2026-01-01T10:00:00+00:00",
            "2026-01-02T09:00:00+00:00",
        ]
        with patch(
            "catalyst_journal.db.repositories.progress_repository.utc_now",
            side_effect=stamps,
        ):
            first = progress.set_status(user.id, step_id, "completed")
            progress.set_status(user.id, step_id, "in_progress")
            second = progress.set_status(user.id, step_id, "completed")

        assert first.completed_at == stamps[0]
        assert second.completed_at == stamps[2]
        assert second.started_at == stamps[1]

    def test_reopening_keeps_started_at(self, progress, user, step_at):
        step_id = step_at(1, 1).id
        first = progress.set_status(user.id, step_id, "in_progress")
        progress.set_status(user.id, step_id, "completed")
        again = progress.set_status(user.id, step_id, "in_progress")
        assert again.started_at == first.started_at

    def test_complete_directly(self, progress, user, step_at):
        record = progress.set_status(user.id, step_at(1, 1).id, "completed")
        assert record.status == "completed"
        assert record.started_at is None

    @pytest.mark.parametrize("current", ["in_progress", "completed"])
    def test_cannot_return_to_not_started(self, progress, user, step_at, current):
        step_id = step_at(1, 1).id
        progress.set_status(user.id, step_id, current)
        with pytest.raises(InvalidTransitionError):
            progress.set_status(user.id, step_id, "not_started")

    def test_unknown_status(self, progress, user, step_at):
        with pytest.raises(ValidationError, match="Invalid status"):
            progress.set_status(user.id, step_at(1, 1).id, "done")

    def test_day_must_own_step(self, progress, user, step_at):
        with pytest.raises(ValidationError):
            progress.set_status(user.id, step_at(1, 1).id, "in_progress", day_id=step_at(2, 1).day_id)

    def test_unknown_step(self, progress, user):
        with pytest.raises(StepNotFoundError):
            progress.set_status(user.id, 9999, "in_progress")


class TestListing:

    def test_joined_with_titles_in_curriculum_order(self, progress, user, step_at):
        progress.set_status(user.id, step_at(2, 1).id, "in_progress")
        progress.set_status(user.id, step_at(1, 3).id, "in_progress")

        records = progress.list_progress(user.id)
        assert [(r.day_id, r.step_number) for r in records] == [
            (step_at(1, 3).day_id, 3),
            (step_at(2, 1).day_id, 1),
        ]
        assert records[0].step_title == "Problem analysis"
        assert records[0].to_dict()["day_title"].startswith("Day 1")

    def test_filter_by_day(self, progress, user, step_at):
        progress.set_status(user.id, step_at(2, 1).id, "in_progress")
        progress.set_status(user.id, step_at(1, 3).id, "in_progress")
        assert len(progress.list_progress(user.id, day_id=step_at(2, 1).day_id)) == 1


class TestSubmit:

    def test_save_action(self, progress, store, user, step_at):
        step = step_at(1, 1)
        result = progress.submit(user.id, step.id, {"problem_1": "A", "problem_2": ""}, action="save")

        assert result["count"] == 1
        assert result["progress"]["status"] == "in_progress"
        assert store.get_value(Scope.training(user.id), step.day_id, step.id, "problem_1") == "A"

    def test_complete_action(self, progress, user, step_at):
        result = progress.submit(user.id, step_at(1, 1).id, FIVE_PROBLEMS, action="complete")
        assert result["progress"]["status"] == "completed"
        assert result["progress"]["completed_at"] is not None

    def test_invalid_action(self, progress, user, step_at):
        with pytest.raises(ValidationError):
            progress.submit(user.id, step_at(1, 1).id, {}, action="publish")

    def test_complete_uses_stored_answers(self, progress, user, step_at):
        step_id = step_at(1, 1).id
        progress.submit(user.id, step_id, FIVE_PROBLEMS, action="save")

        result = progress.submit(user.id, step_id, {}, action="complete")
        assert result["progress"]["status"] == "completed"

    def test_complete_with_empty_required_fields(self, progress, store, user, step_at):
        step = step_at(1, 1)
        with pytest.raises(ValidationError) as exc_info:
            progress.submit(user.id, step.id, {"problem_1": "A", "problem_2": "B"}, action="complete")

        assert exc_info.value.details["missing"] == ["problem_3", "problem_4", "problem_5"]
        assert progress.get_status(user.id, step.id) == "not_started"
        # Valid answers from the rejected submission are still kept
        assert store.get_value(Scope.training(user.id), step.day_id, step.id, "problem_1") == "A"

    def test_prefill_does_not_satisfy_required(self, progress, store, user, step_at):
        source, step = step_at(2, 8), step_at(6, 8)
        store.upsert(Scope.training(user.id), source.day_id, source.id, "elevator_pitch", "Ship on time")

        assert "final_pitch" in progress.missing_required(user.id, step.id)

    def test_save_does_not_check_required(self, progress, user, step_at):
        result = progress.submit(user.id, step_at(1, 1).id, {"problem_1": "A"}, action="save")
        assert result["progress"]["status"] == "in_progress"


class TestSubmitFieldChecks:

    def test_out_of_range_and_non_numeric_scores(self, progress, store, user, step_at):
        step = step_at(1, 2)
        result = progress.submit(
            user.id,
            step.id,
            {"impact_1": "99", "frequency_1": "not a number", "impact_2": "4"},
        )

        by_name = {r["field_name"]: r for r in result["results"]}
        assert by_name["impact_1"]["error"] == "impact_1 must be between 1 and 5"
        assert by_name["frequency_1"]["error"] == "frequency_1 must be a number"
        assert by_name["impact_2"]["saved"] is True
        assert result["count"] == 1
        scope = Scope.training(user.id)
        assert store.get_value(scope, step.day_id, step.id, "impact_1") == ""
        assert store.get_value(scope, step.day_id, step.id, "frequency_1") == ""

    def test_undeclared_field(self, progress, store, user, step_at):
        step = step_at(1, 1)
        result = progress.submit(user.id, step.id, {"problem_9": "x", "nickname": "y"})

        assert [r["saved"] for r in result["results"]] == [False, False]
        assert "has no field 'problem_9'" in result["results"][0]["error"]
        assert store.get_by_step(Scope.training(user.id), step.id) == []

    def test_select_outside_options(self, progress, user, step_at):
        step = step_at(1, 2)
        result = progress.submit(user.id, step.id, {"tool_1": "Guesswork", "selected_problem_1": "7"})

        errors = [r["error"] for r in result["results"]]
        assert errors[0].startswith("tool_1 must be one of: CBA, FMEA")
        assert errors[1] == "selected_problem_1 must be one of: 1, 2, 3, 4, 5"
