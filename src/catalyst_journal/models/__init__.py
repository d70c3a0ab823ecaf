"""Domain value objects shared across layers."""

from .scope import Scope, ScopeKind

__all__ = ["Scope", "ScopeKind"]
