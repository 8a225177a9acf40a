"""Core data models for path-expression generalization."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .errors import EmptyPathError

__all__ = [
    "WILDCARD",
    "NodeStep",
    "PathExpression",
    "ExtractionRule",
    "WeightedRule",
]

WILDCARD = "*"


@dataclass(frozen=True, slots=True)
class NodeStep:
    """One segment of a path expression: an element tag and optional sibling position."""

    tag: str
    position: int | None = None

    def __post_init__(self) -> None:
        if not self.tag:
            raise ValueError("Node step tag must be non-empty")
        if self.position is not None:
            if self.tag == WILDCARD:
                raise ValueError("Wildcard steps never carry a position")
            if self.position < 0:
                raise ValueError(f"Node step position must be non-negative, got {self.position}")

    @property
    def is_wildcard(self) -> bool:
        return self.tag == WILDCARD

    def __str__(self) -> str:
        if self.position is None:
            return self.tag
        return f"{self.tag}[{self.position}]"


@dataclass(frozen=True, slots=True)
class PathExpression:
    """Rooted, non-empty sequence of node steps."""

    steps: tuple[NodeStep, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(self.steps))
        if not self.steps:
            raise EmptyPathError("/")

    @property
    def tags(self) -> tuple[str, ...]:
        """Tag-only projection used for structural comparison."""

        return tuple(step.tag for step in self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[NodeStep]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> NodeStep:
        return self.steps[index]

    def __str__(self) -> str:
        return "/" + "/".join(str(step) for step in self.steps)


@dataclass(frozen=True, slots=True)
class ExtractionRule:
    """Pair of locators pinpointing a subject and an object inside one document."""

    subject: PathExpression
    object: PathExpression

    def __str__(self) -> str:
        return f"({self.subject}, {self.object})"


@dataclass(frozen=True, slots=True)
class WeightedRule:
    """Generalized rule paired with the number of raw rules it was built from."""

    rule: ExtractionRule
    support: int

    def __post_init__(self) -> None:
        if self.support < 1:
            raise ValueError(f"Support weight must be a positive integer, got {self.support}")
