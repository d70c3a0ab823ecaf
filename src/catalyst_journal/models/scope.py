"""Response namespaces.

Every read and write of exercise answers happens inside a scope: either a
user's own training run or one of their processes. The scope is passed
explicitly through the response store, the resolution engine and the form
renderer so the two namespaces can never bleed into each other.
"""

from dataclasses import dataclass
from enum import Enum


class ScopeKind(str, Enum):
    """Which response table a scope addresses."""

    TRAINING = "training"
    PROCESS = "process"


@dataclass(frozen=True)
class Scope:
    """An owner of response records."""

    kind: ScopeKind
    owner_id: int

    @classmethod
    def training(cls, user_id: int) -> "Scope":
        return cls(ScopeKind.TRAINING, int(user_id))

    @classmethod
    def process(cls, process_id: int) -> "Scope":
        return cls(ScopeKind.PROCESS, int(process_id))

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "owner_id": self.owner_id}

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.owner_id}"
