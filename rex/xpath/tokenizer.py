"""Tokenizer turning path-expression strings into typed node steps."""
from __future__ import annotations

from . import WILDCARD, ExtractionRule, NodeStep, PathExpression
from .errors import EmptyPathError, MalformedStepError

__all__ = ["tokenize", "tag_sequence", "render", "parse_rule", "coerce_path"]

_SEPARATOR = "/"


def _split_segments(expression: str) -> list[str]:
    segments: list[str] = []
    for raw in expression.split(_SEPARATOR):
        segment = raw.strip()
        if segment:
            segments.append(segment)
    return segments


def _parse_step(segment: str, expression: str) -> NodeStep:
    # Wildcards drop anything trailing the star, positions included.
    if segment.startswith(WILDCARD):
        return NodeStep(WILDCARD)

    tag, bracket, remainder = segment.partition("[")
    tag = tag.strip()
    if WILDCARD in tag:
        raise MalformedStepError(segment, expression)

    if not bracket:
        if "]" in segment:
            raise MalformedStepError(segment, expression)
        return NodeStep(tag)

    if not tag or not remainder.endswith("]"):
        raise MalformedStepError(segment, expression)
    index = remainder[:-1].strip()
    if not (index.isascii() and index.isdigit()):
        raise MalformedStepError(segment, expression)
    try:
        position = int(index)
    except ValueError:
        # Digit strings beyond the interpreter's conversion limit.
        raise MalformedStepError(segment, expression) from None
    return NodeStep(tag, position)


def tokenize(expression: str) -> PathExpression:
    """Parse ``expression`` into a :class:`PathExpression`.

    Empty segments produced by leading, trailing or doubled separators are
    discarded and each segment is stripped of surrounding whitespace. A
    segment may carry a ``[n]`` suffix with a non-negative integer position.
    """

    segments = _split_segments(expression)
    if not segments:
        raise EmptyPathError(expression)
    return PathExpression(tuple(_parse_step(segment, expression) for segment in segments))


def tag_sequence(expression: str | PathExpression) -> tuple[str, ...]:
    """Return the tag-only shape of ``expression``."""

    return coerce_path(expression).tags


def render(path: PathExpression) -> str:
    """Render ``path`` back to its canonical string form."""

    return str(path)


def coerce_path(value: str | PathExpression) -> PathExpression:
    if isinstance(value, PathExpression):
        return value
    return tokenize(value)


def parse_rule(subject: str | PathExpression, object_: str | PathExpression) -> ExtractionRule:
    """Build an :class:`ExtractionRule` from two path strings."""

    return ExtractionRule(coerce_path(subject), coerce_path(object_))
