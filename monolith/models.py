"""Data models for the monolith calculation.

GlobalState, the two TransformResult shapes and RunOutcome: all
the typed structures that flow through calculator -> report -> CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Union

from monolith.intmath import wrap32


@dataclass(frozen=True)
class GlobalState:
    """Process-lifetime counter and mode label.

    Passed into a run and returned advanced; callers thread it between runs.
    """

    counter: int = 0
    mode: str = "default"

    def advance(self, seed: int, name: Optional[str]) -> GlobalState:
        """Return the state after one run with this seed and name."""
        return replace(
            self,
            counter=wrap32(self.counter + seed),
            mode=name if name is not None else self.mode,
        )

    def to_dict(self) -> dict:
        return {"counter": self.counter, "mode": self.mode}


@dataclass(frozen=True)
class EmptyTransform:
    """Per-item record taken while nothing has been accumulated yet."""

    index: int
    when: datetime
    note: str = "empty"

    kind = "empty"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "index": self.index,
            "timestamp": self.when.isoformat(),
            "note": self.note,
        }

    def __str__(self) -> str:
        return f"{{ Index = {self.index}, Timestamp = {self.when.isoformat()}, Note = {self.note} }}"


@dataclass(frozen=True)
class SnippetTransform:
    """Per-item record carrying the head of the accumulated text."""

    index: int
    length: int
    snippet: str
    when: datetime

    kind = "snippet"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "index": self.index,
            "len": self.length,
            "snippet": self.snippet,
            "when": self.when.isoformat(),
        }

    def __str__(self) -> str:
        return (
            f"{{ index = {self.index}, len = {self.length}, "
            f"snippet = {self.snippet}, when = {self.when.isoformat()} }}"
        )


TransformResult = Union[EmptyTransform, SnippetTransform]


@dataclass
class RunOutcome:
    """Complete result of a single run."""

    final: int
    result: int
    global_state: GlobalState
    state: dict[str, TransformResult] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    accumulated: str = ""
    depth: int = 0

    # Calculator fields after the run
    a: int = 0
    b: int = 0
    c: int = 0
    mode: str = "unset"

    def state_sample(self, limit: int = 5) -> list[tuple[str, TransformResult]]:
        """First `limit` state entries in insertion order."""
        return list(self.state.items())[:limit]

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "final": self.final,
            "result": self.result,
            "global": self.global_state.to_dict(),
            "state": {key: value.to_dict() for key, value in self.state.items()},
            "errors": list(self.errors),
            "accumulated": self.accumulated,
            "depth": self.depth,
            "fields": {"a": self.a, "b": self.b, "c": self.c, "mode": self.mode},
        }
