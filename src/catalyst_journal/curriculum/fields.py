"""Typed descriptors for exercise step forms.

A step form is described entirely by data: plain fields, repeated field
groups, context values pulled from earlier steps, and the source references
that tie them together. Field and reference names may be templates such as
``problem_{i}`` or ``problem_{value}``; they are expanded with ``str.format``
at render time.
"""

import math
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union


_PLACEHOLDER = re.compile(r"\{[a-z_]+\}")


def normalize_template(name: str) -> str:
    """Collapse every ``{placeholder}`` in a name to ``{}``."""
    return _PLACEHOLDER.sub("{}", name)


def template_pattern(name: str) -> re.Pattern:
    """Regex that matches concrete names produced by a field template."""
    parts = _PLACEHOLDER.split(name)
    return re.compile(r"[0-9A-Za-z]+".join(re.escape(p) for p in parts) + "$")


def is_template(name: str) -> bool:
    return bool(_PLACEHOLDER.search(name))


class FieldType(str, Enum):
    """How a field is captured."""

    SHORT_TEXT = "short_text"
    LONG_TEXT = "long_text"
    NUMBER = "number"
    SELECT = "select"


@dataclass(frozen=True)
class SourceRef:
    """Pointer to a field on an earlier (day, step) of the curriculum."""

    day: int
    step: int
    field: str

    def expand(self, **values) -> "SourceRef":
        return replace(self, field=self.field.format(**values))

    @property
    def position(self) -> tuple[int, int]:
        return (self.day, self.step)

    def describe(self) -> str:
        return f"day {self.day} step {self.step}"

    def to_dict(self) -> dict:
        return {"day": self.day, "step": self.step, "field": self.field}


@dataclass(frozen=True)
class Option:
    value: str
    label: str

    def to_dict(self) -> dict:
        return {"value": self.value, "label": self.label}


@dataclass(frozen=True)
class RowSource:
    """The non-empty slots of an earlier repeated field.

    Used to derive the rows of a variable-cardinality group or the options
    of a select: each index ``i`` whose ``ref.expand(i=i)`` resolves to a
    non-empty value becomes one row or option.
    """

    ref: SourceRef
    indices: tuple[int, ...]


@dataclass(frozen=True)
class FieldSpec:
    """A single input on a step form."""

    name: str
    label: str
    type: FieldType = FieldType.LONG_TEXT
    required: bool = False
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    options: tuple[Option, ...] = ()
    options_from: Optional[RowSource] = None
    prefill: Optional[SourceRef] = None
    help: str = ""

    def expand(self, index: int) -> "FieldSpec":
        """Concrete copy of a templated field for one row index."""
        return replace(
            self,
            name=self.name.format(i=index),
            label=self.label.format(i=index),
            prefill=self.prefill.expand(i=index) if self.prefill else None,
        )

    def allowed_values(self) -> list[str]:
        """Option values a select accepts. Row-derived options are addressed by row index."""
        values = [option.value for option in self.options]
        if self.options_from is not None:
            values.extend(str(index) for index in self.options_from.indices)
        return values

    def check(self, value) -> Optional[str]:
        """Why ``value`` cannot be stored in this field, or None when it can."""
        text = str(value).strip()
        if self.type is FieldType.NUMBER:
            try:
                number = float(text)
            except ValueError:
                return f"{self.name} must be a number"
            if not math.isfinite(number):
                return f"{self.name} must be a number"
            too_low = self.min_value is not None and number < self.min_value
            too_high = self.max_value is not None and number > self.max_value
            if too_low or too_high:
                return f"{self.name} must be between {self.min_value} and {self.max_value}"
        elif self.type is FieldType.SELECT:
            allowed = self.allowed_values()
            if allowed and text not in allowed:
                return f"{self.name} must be one of: {', '.join(allowed)}"
        return None


@dataclass(frozen=True)
class FieldGroup:
    """Repeated fields addressed as ``base_{i}``.

    Either ``indices`` gives a fixed row set, or ``rows_from`` derives the
    rows from the non-empty slots of an earlier repeated field.
    """

    fields: tuple[FieldSpec, ...]
    indices: tuple[int, ...] = ()
    rows_from: Optional[RowSource] = None
    row_labels: tuple[str, ...] = ()
    label: str = ""

    @property
    def row_indices(self) -> tuple[int, ...]:
        """Every index a row of this group can take."""
        if self.rows_from is not None:
            return self.rows_from.indices
        return self.indices

    def row_label(self, position: int) -> Optional[str]:
        if position < len(self.row_labels):
            return self.row_labels[position]
        return None


@dataclass(frozen=True)
class ContextSpec:
    """Read-only value shown above a form.

    ``selectors`` are tried in order and the first non-empty one wins. With
    no ``target`` that value is the context. With a ``target`` the winning
    value is substituted into the target template (``{value}``) and the
    target field is resolved, giving selector indirection.
    """

    name: str
    label: str
    selectors: tuple[SourceRef, ...]
    target: Optional[SourceRef] = None
    required: bool = True


FormItem = Union[FieldSpec, FieldGroup]


@dataclass(frozen=True)
class StepDefinition:
    """Display content and form schema for one (day, step)."""

    day: int
    step: int
    title: str
    description: str
    tools: tuple[str, ...] = ()
    importance: str = ""
    limitations: str = ""
    instructions: str = ""
    items: tuple[FormItem, ...] = ()
    context: tuple[ContextSpec, ...] = ()
    lock_when_missing: bool = False

    @property
    def position(self) -> tuple[int, int]:
        return (self.day, self.step)

    def field_templates(self) -> list[FieldSpec]:
        """Every declared field, templates left unexpanded."""
        specs: list[FieldSpec] = []
        for item in self.items:
            if isinstance(item, FieldGroup):
                specs.extend(item.fields)
            else:
                specs.append(item)
        return specs

    def field_for(self, name: str) -> Optional[FieldSpec]:
        """The concrete field stored under ``name``, or None if the step has none."""
        for item in self.items:
            if isinstance(item, FieldGroup):
                for index in item.row_indices:
                    for spec in item.fields:
                        if spec.name.format(i=index) == name:
                            return spec.expand(index)
            elif item.name == name:
                return item
        return None

    def declares(self, name: str) -> bool:
        """Whether this step writes a field called ``name``.

        ``name`` may be concrete (``problem_3``) or a template
        (``problem_{value}``).
        """
        wanted = normalize_template(name)
        for spec in self.field_templates():
            if normalize_template(spec.name) == wanted:
                return True
            if is_template(spec.name) and not is_template(name):
                if template_pattern(spec.name).match(name):
                    return True
        return False


@dataclass(frozen=True)
class DayDefinition:
    number: int
    title: str
    subtitle: str
    description: str
    steps: tuple[StepDefinition, ...] = field(default_factory=tuple)
