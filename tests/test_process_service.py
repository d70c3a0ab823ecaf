"""Tests for ProcessService and ExportService."""

import pytest

from catalyst_journal.db.repositories.process_repository import ProcessRepository
from catalyst_journal.db.repositories.response_repository import ResponseRepository
from catalyst_journal.db.repositories.user_repository import UserRepository
from catalyst_journal.curriculum.catalog import Catalog
from catalyst_journal.exceptions import ProcessNotFoundError, StepNotFoundError, ValidationError
from catalyst_journal.models.scope import Scope
from catalyst_journal.services.export_service import ExportService
from catalyst_journal.services.process_service import ProcessService, parse_response_key
from catalyst_journal.services.resolution import ResolutionEngine
from catalyst_journal.services.step_form_service import StepFormService


@pytest.fixture
def processes(db, training, store):
    forms = StepFormService(Catalog(), ResolutionEngine(ResponseRepository(db), training), training)
    return ProcessService(ProcessRepository(db), training, store, forms)


@pytest.fixture
def other_user(db):
    return UserRepository(db).create_user("ben@example.com", "Ben", "hash")


@pytest.fixture
def process(processes, user):
    return processes.create_process(user.id, "Cut delivery delays", "Warehouse pilot")


class TestParseResponseKey:

    def test_simple_key(self):
        assert parse_response_key("1-2-problem_1") == (1, 2, "problem_1")

    def test_field_name_with_hyphens(self):
        assert parse_response_key("3-17-swot-strengths-extra") == (3, 17, "swot-strengths-extra")

    @pytest.mark.parametrize("key", ["1-2", "a-2-field", "1-b-field", "1-2-", "nohyphens"])
    def test_malformed(self, key):
        with pytest.raises(ValidationError):
            parse_response_key(key)


class TestCreateAndList:

    def test_create_materializes_every_step(self, processes, process, user):
        assert process.status == "active"
        assert process.current_day == 1
        assert process.current_step == 1
        assert process.total_steps == 48
        assert process.completed_steps == 0
        assert process.progress == 0

        _, steps = processes.get_process(user.id, process.id)
        assert len(steps) == 48
        assert not any(s.completed for s in steps)
        assert (steps[0].day_number, steps[0].step_number) == (1, 1)
        assert steps[-1].step_title is not None

    def test_blank_title(self, processes, user):
        with pytest.raises(ValidationError):
            processes.create_process(user.id, "   ")

    def test_progress_after_one_completion(self, processes, process, user, step_at):
        processes.complete_step(user.id, process.id, step_at(1, 1).id)
        listed = processes.list_processes(user.id)[0]
        assert listed.completed_steps == 1
        assert listed.progress == 2

    def test_complete_does_not_advance_position(self, processes, process, user, step_at):
        processes.complete_step(user.id, process.id, step_at(1, 1).id)
        updated, _ = processes.get_process(user.id, process.id)
        assert (updated.current_day, updated.current_step) == (1, 1)

    def test_complete_unknown_step(self, processes, process, user):
        with pytest.raises(StepNotFoundError):
            processes.complete_step(user.id, process.id, 9999)

    def test_list_is_per_user(self, processes, process, other_user):
        assert processes.list_processes(other_user.id) == []


class TestOwnership:

    def test_foreign_process_is_not_found(self, processes, process, other_user):
        with pytest.raises(ProcessNotFoundError):
            processes.get_process(other_user.id, process.id)
        with pytest.raises(ProcessNotFoundError):
            processes.delete_process(other_user.id, process.id)
        with pytest.raises(ProcessNotFoundError):
            processes.save_responses(other_user.id, process.id, {"1-1-problem_1": "x"})

    def test_missing_process(self, processes, user):
        with pytest.raises(ProcessNotFoundError):
            processes.get_process(user.id, 9999)


class TestUpdate:

    def test_partial_update(self, processes, process, user):
        updated = processes.update_process(user.id, process.id, {"title": "Renamed", "current_day": 2})
        assert updated.title == "Renamed"
        assert updated.current_day == 2
        assert updated.description == "Warehouse pilot"

    def test_completing_stamps_completed_at(self, processes, process, user):
        updated = processes.update_process(user.id, process.id, {"status": "completed"})
        assert updated.completed_at is not None

    def test_empty_update(self, processes, process, user):
        with pytest.raises(ValidationError, match="No fields to update"):
            processes.update_process(user.id, process.id, {"title": None})

    def test_invalid_status(self, processes, process, user):
        with pytest.raises(ValidationError):
            processes.update_process(user.id, process.id, {"status": "paused"})

    def test_null_description_clears_it(self, processes, process, user):
        updated = processes.update_process(user.id, process.id, {"description": None})
        assert updated.description is None
        assert updated.title == process.title

    @pytest.mark.parametrize("changes", [
        {"current_day": 0},
        {"current_day": 7},
        {"current_step": 9},
        {"current_step": 99},
    ])
    def test_position_outside_curriculum(self, processes, process, user, changes):
        with pytest.raises(ValidationError, match="must be between 1 and"):
            processes.update_process(user.id, process.id, changes)

    def test_last_position_is_accepted(self, processes, process, user):
        updated = processes.update_process(user.id, process.id, {"current_day": 6, "current_step": 8})
        assert (updated.current_day, updated.current_step) == (6, 8)


class TestResponses:

    def test_save_and_read_in_process_scope(self, processes, process, user, store, step_at):
        step = step_at(1, 1)
        results = processes.save_responses(user.id, process.id, {
            f"{step.day_id}-{step.id}-problem_1": "Process answer",
            f"{step.day_id}-{step.id}-problem_2": "",
            "garbage": "x",
        })

        assert [r.saved for r in results] == [True, False, False]
        assert results[1].skipped is True
        assert "Malformed" in results[2].error

        records = processes.get_responses(user.id, process.id)
        assert [(r.field_name, r.field_value) for r in records] == [("problem_1", "Process answer")]
        assert store.get_all(Scope.training(user.id)) == []

    def test_field_checks_apply_in_process_scope(self, processes, process, user, step_at):
        step = step_at(1, 2)
        results = processes.save_responses(user.id, process.id, {
            f"{step.day_id}-{step.id}-impact_1": "3",
            f"{step.day_id}-{step.id}-impact_2": "12",
            f"{step.day_id}-{step.id}-unknown_field": "x",
        })

        assert [r.saved for r in results] == [True, False, False]
        assert results[1].error == "impact_2 must be between 1 and 5"
        assert "has no field" in results[2].error

    def test_delete_cascades(self, db, processes, process, user, step_at):
        step = step_at(1, 1)
        processes.save_responses(user.id, process.id, {f"{step.day_id}-{step.id}-problem_1": "x"})
        processes.delete_process(user.id, process.id)

        stats = db.get_stats()
        assert stats["processes"] == 0
        assert stats["process_steps"] == 0
        assert stats["process_responses"] == 0

    def test_step_form_uses_process_scope(self, processes, process, user, store, step_at):
        step1, step4 = step_at(1, 1), step_at(1, 4)
        store.upsert(Scope.training(user.id), step1.day_id, step1.id, "problem_1", "training only")
        processes.save_responses(user.id, process.id, {f"{step4.day_id}-{step4.id}-selected_priority_problem": "1"})

        form = processes.get_step_form(user.id, process.id, step_at(1, 5).id)
        assert form["scope"] == {"kind": "process", "owner_id": process.id}
        assert form["context"][0]["value"] == ""
        assert [(w["day"], w["step"]) for w in form["warnings"]] == [(1, 1)]


class TestExport:

    def test_export_document(self, db, processes, process, user, training, store, step_at):
        step = step_at(1, 1)
        processes.save_responses(user.id, process.id, {f"{step.day_id}-{step.id}-problem_1": "Late"})
        processes.complete_step(user.id, process.id, step.id)

        document = ExportService(processes, training, store).export_process(user.id, process.id)

        assert document["process"]["id"] == process.id
        assert len(document["days"]) == 6
        first = document["days"][0]["steps"][0]
        assert first["responses"] == {"problem_1": "Late"}
        assert first["completed"] is True
        assert first["tools"] == ["Brainstorming"]
        assert document["days"][0]["steps"][1]["completed"] is False
        assert document["exported_at"]

    def test_export_foreign_process(self, processes, process, training, store, other_user):
        with pytest.raises(ProcessNotFoundError):
            ExportService(processes, training, store).export_process(other_user.id, process.id)
