"""Error types raised by the path generalization toolkit."""
from __future__ import annotations

__all__ = [
    "XPathGeneralizationError",
    "MalformedStepError",
    "EmptyPathError",
    "LengthMismatchError",
    "EmptyInputError",
    "RuleCollisionError",
]


class XPathGeneralizationError(ValueError):
    """Base class for every failure raised while tokenizing or generalizing paths."""


class MalformedStepError(XPathGeneralizationError):
    """Raised when a segment carries an invalid bracketed position."""

    def __init__(self, segment: str, expression: str) -> None:
        super().__init__(f"Malformed step '{segment}' in path expression '{expression}'")
        self.segment = segment
        self.expression = expression


class EmptyPathError(XPathGeneralizationError):
    """Raised when a path expression contains no steps."""

    def __init__(self, expression: str) -> None:
        super().__init__(f"Path expression '{expression}' contains no steps")
        self.expression = expression


class LengthMismatchError(XPathGeneralizationError):
    """Raised when two paths of different depth are generalized together."""

    def __init__(self, first_length: int, second_length: int) -> None:
        super().__init__(
            f"Cannot generalize path expressions of different length ({first_length} != {second_length})"
        )
        self.first_length = first_length
        self.second_length = second_length


class EmptyInputError(XPathGeneralizationError):
    """Raised when an operation requiring at least one input receives none."""


class RuleCollisionError(XPathGeneralizationError):
    """Raised when weighted rules collide under the ``error`` policy."""

    def __init__(self, rule: object) -> None:
        super().__init__(f"Weighted rules collide on {rule}")
        self.rule = rule
