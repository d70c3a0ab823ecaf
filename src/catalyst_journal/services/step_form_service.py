"""Generic step-form renderer.

Turns a catalog StepDefinition into a concrete form for one scope: repeated
groups are expanded, context values are resolved (including selector
indirection and fallback chains), every field gets its current or prefilled
value, and missing prerequisites become soft warnings.
"""

import logging
from typing import Any, Optional

from ..curriculum.catalog import Catalog
from ..curriculum.fields import (
    ContextSpec,
    FieldGroup,
    FieldSpec,
    RowSource,
    SourceRef,
    StepDefinition,
)
from ..db.repositories.training_repository import TrainingRepository, TrainingStep
from ..exceptions import StepNotFoundError
from ..models.scope import Scope
from .resolution import ResolutionEngine

logger = logging.getLogger(__name__)


class _Render:
    """State for rendering one form."""

    def __init__(self, scope: Scope, step: TrainingStep, definition: StepDefinition):
        self.scope = scope
        self.step = step
        self.definition = definition
        self.warnings: dict[tuple[int, int], dict] = {}


class StepFormService:
    """Renders any catalog step for any scope."""

    def __init__(self, catalog: Catalog, engine: ResolutionEngine, training: TrainingRepository):
        self._catalog = catalog
        self._engine = engine
        self._training = training

    def render(self, scope: Scope, step_id: int) -> dict[str, Any]:
        """Build the form for ``step_id`` with values from ``scope``.

        Raises:
            StepNotFoundError: If the step id is unknown.
        """
        step = self._training.step_index().get(step_id)
        if step is None:
            raise StepNotFoundError(step_id)
        definition = self._catalog.require(step.day_number, step.step_number)
        state = _Render(scope, step, definition)

        context = [self._render_context(state, ctx) for ctx in definition.context]

        fields: list[dict] = []
        for item in definition.items:
            if isinstance(item, FieldGroup):
                fields.extend(self._render_group(state, item))
            else:
                fields.append(self._render_field(state, item))

        warnings = list(state.warnings.values())
        locked = definition.lock_when_missing and bool(warnings)
        if locked:
            logger.debug(f"Form for step {step_id} locked in {scope}")

        return {
            "scope": scope.to_dict(),
            "step": step.to_dict(),
            "intro": definition.description,
            "context": context,
            "fields": [] if locked else fields,
            "warnings": warnings,
            "locked": locked,
        }

    # ------------------------------------------------------------------

    def _resolve(self, state: _Render, source: SourceRef) -> str:
        return self._engine.resolve_ref(state.scope, state.step.day_id, state.step.id, source)

    def _warn(self, state: _Render, source: SourceRef) -> None:
        if source.position == state.definition.position or source.position in state.warnings:
            return
        prerequisite = self._catalog.get(source.day, source.step)
        target = self._training.step_index().at(source.day, source.step)
        title = f" ({prerequisite.title})" if prerequisite else ""
        state.warnings[source.position] = {
            "day": source.day,
            "step": source.step,
            "step_id": target.id if target else None,
            "message": f"Complete day {source.day} step {source.step}{title} first.",
        }

    def _render_context(self, state: _Render, ctx: ContextSpec) -> dict[str, Any]:
        chosen = ""
        chosen_from: Optional[SourceRef] = None
        for selector in ctx.selectors:
            candidate = self._resolve(state, selector).strip()
            if candidate:
                chosen, chosen_from = candidate, selector
                break

        value = chosen
        source = chosen_from
        if chosen and ctx.target:
            source = ctx.target.expand(value=chosen)
            value = self._resolve(state, source)

        if not value.strip() and ctx.required:
            missing = source if chosen else ctx.selectors[0]
            self._warn(state, missing)

        return {
            "name": ctx.name,
            "label": ctx.label,
            "value": value,
            "source": source.to_dict() if source else None,
        }

    def _rows(self, state: _Render, rows: RowSource) -> list[tuple[int, str]]:
        """Indices whose slot in the row source is non-empty, with the slot text."""
        found = []
        for index in rows.indices:
            text = self._resolve(state, rows.ref.expand(i=index))
            if text.strip():
                found.append((index, text))
        return found

    def _render_group(self, state: _Render, group: FieldGroup) -> list[dict]:
        rendered: list[dict] = []
        if group.rows_from is not None:
            rows = self._rows(state, group.rows_from)
            if not rows:
                self._warn(state, group.rows_from.ref)
            for index, text in rows:
                for spec in group.fields:
                    rendered.append(
                        self._render_field(state, spec.expand(index), row=index, row_label=text)
                    )
        else:
            for position, index in enumerate(group.indices):
                label = group.row_label(position)
                for spec in group.fields:
                    rendered.append(
                        self._render_field(state, spec.expand(index), row=index, row_label=label)
                    )
        return rendered

    def _render_field(
        self,
        state: _Render,
        spec: FieldSpec,
        row: Optional[int] = None,
        row_label: Optional[str] = None,
    ) -> dict[str, Any]:
        value = self._engine.resolve(state.scope, state.step.day_id, state.step.id, spec.name)
        prefilled = False
        if not value.strip() and spec.prefill is not None:
            value = self._resolve(state, spec.prefill)
            prefilled = bool(value.strip())

        options = [option.to_dict() for option in spec.options]
        if spec.options_from is not None:
            derived = self._rows(state, spec.options_from)
            if not derived and spec.required:
                self._warn(state, spec.options_from.ref)
            options.extend({"value": str(index), "label": text} for index, text in derived)

        return {
            "name": spec.name,
            "label": spec.label,
            "type": spec.type.value,
            "required": spec.required,
            "value": value,
            "prefilled": prefilled,
            "min": spec.min_value,
            "max": spec.max_value,
            "options": options,
            "help": spec.help,
            "row": row,
            "row_label": row_label,
        }
