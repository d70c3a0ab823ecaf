"""Read-only lookup over the curriculum definitions.

The catalog is pure data: it never touches storage. ``validate`` checks that
every cross-step reference points at a real, earlier step which declares the
referenced field, so a typo in a field name fails at startup instead of
silently rendering an empty value.
"""

import logging
from functools import lru_cache
from typing import Iterable, Iterator, Optional

from ..exceptions import CatalogError, StepNotFoundError
from .definitions import CURRICULUM
from .fields import (
    ContextSpec,
    DayDefinition,
    FieldGroup,
    FieldSpec,
    SourceRef,
    StepDefinition,
)
from .tools import TOOL_LIBRARY, ToolCard

logger = logging.getLogger(__name__)

DAYS_IN_CURRICULUM = 6
STEPS_PER_DAY = 8


class Catalog:
    """Index of step definitions keyed by (day number, step number)."""

    def __init__(
        self,
        days: Iterable[DayDefinition] = CURRICULUM,
        tools: Optional[dict[str, ToolCard]] = None,
    ):
        self.days: tuple[DayDefinition, ...] = tuple(days)
        self.tools = TOOL_LIBRARY if tools is None else tools
        self._steps: dict[tuple[int, int], StepDefinition] = {}
        for day in self.days:
            for step in day.steps:
                self._steps[step.position] = step

    def get(self, day: int, step: int) -> Optional[StepDefinition]:
        return self._steps.get((day, step))

    def require(self, day: int, step: int) -> StepDefinition:
        definition = self.get(day, step)
        if definition is None:
            raise StepNotFoundError(f"day {day} step {step}")
        return definition

    def get_day(self, number: int) -> Optional[DayDefinition]:
        for day in self.days:
            if day.number == number:
                return day
        return None

    def steps(self) -> Iterator[StepDefinition]:
        for day in self.days:
            yield from day.steps

    def __len__(self) -> int:
        return len(self._steps)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def problems(self, expected_days: int = DAYS_IN_CURRICULUM, expected_steps: int = STEPS_PER_DAY) -> list[str]:
        """Collect every structural problem in the catalog."""
        problems: list[str] = []

        for day in range(1, expected_days + 1):
            for step in range(1, expected_steps + 1):
                if (day, step) not in self._steps:
                    problems.append(f"day {day} step {step}: missing definition")

        for definition in self.steps():
            where = f"day {definition.day} step {definition.step}"

            seen: set[str] = set()
            for spec in definition.field_templates():
                if spec.name in seen:
                    problems.append(f"{where}: duplicate field '{spec.name}'")
                seen.add(spec.name)

            for tool in definition.tools:
                if tool not in self.tools:
                    problems.append(f"{where}: unknown tool '{tool}'")

            for label, source, same_step_ok in self._references(definition):
                problem = self._check_reference(definition, source, same_step_ok)
                if problem:
                    problems.append(f"{where}: {label} -> {problem}")

        return problems

    def validate(self) -> None:
        """Raise CatalogError listing every problem, if any."""
        problems = self.problems()
        if problems:
            for problem in problems:
                logger.error(f"Catalog problem: {problem}")
            raise CatalogError(problems)
        logger.info(f"Catalog validated: {len(self)} steps, {len(self.tools)} tools")

    def _references(self, definition: StepDefinition) -> Iterator[tuple[str, SourceRef, bool]]:
        for ctx in definition.context:
            yield from self._context_references(ctx)
        for item in definition.items:
            if isinstance(item, FieldGroup):
                if item.rows_from:
                    yield ("rows", item.rows_from.ref, False)
                for spec in item.fields:
                    yield from self._field_references(spec)
            else:
                yield from self._field_references(item)

    @staticmethod
    def _context_references(ctx: ContextSpec) -> Iterator[tuple[str, SourceRef, bool]]:
        for selector in ctx.selectors:
            yield (f"context '{ctx.name}'", selector, False)
        if ctx.target:
            yield (f"context '{ctx.name}' target", ctx.target, False)

    @staticmethod
    def _field_references(spec: FieldSpec) -> Iterator[tuple[str, SourceRef, bool]]:
        if spec.prefill:
            yield (f"field '{spec.name}' prefill", spec.prefill, False)
        if spec.options_from:
            yield (f"field '{spec.name}' options", spec.options_from.ref, True)

    def _check_reference(self, definition: StepDefinition, source: SourceRef, same_step_ok: bool) -> Optional[str]:
        target = self.get(source.day, source.step)
        if target is None:
            return f"{source.describe()} does not exist"
        if source.position > definition.position:
            return f"{source.describe()} comes later in the curriculum"
        if source.position == definition.position and not same_step_ok:
            return f"{source.describe()} is the same step"
        if not target.declares(source.field):
            return f"{source.describe()} has no field '{source.field}'"
        return None


@lru_cache
def get_catalog() -> Catalog:
    """Get the shared catalog instance."""
    return Catalog()
