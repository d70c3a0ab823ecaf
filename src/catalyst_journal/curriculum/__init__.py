"""Static curriculum: days, steps, form schemas and tool cards."""

from .catalog import Catalog, get_catalog
from .fields import (
    ContextSpec,
    DayDefinition,
    FieldGroup,
    FieldSpec,
    FieldType,
    Option,
    RowSource,
    SourceRef,
    StepDefinition,
)
from .tools import TOOL_LIBRARY, ToolCard, get_tool

__all__ = [
    "Catalog",
    "get_catalog",
    "ContextSpec",
    "DayDefinition",
    "FieldGroup",
    "FieldSpec",
    "FieldType",
    "Option",
    "RowSource",
    "SourceRef",
    "StepDefinition",
    "TOOL_LIBRARY",
    "ToolCard",
    "get_tool",
]
