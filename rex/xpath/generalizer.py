"""Step-wise generalization of aligned path expressions."""
from __future__ import annotations

from typing import Iterable

from . import PathExpression
from .errors import EmptyInputError, LengthMismatchError
from .steps import generalize_step
from .tokenizer import coerce_path

__all__ = [
    "generalize_paths",
    "generalize_path_sequence",
    "generalize_xpath_expressions",
]


def generalize_paths(
    first: str | PathExpression,
    second: str | PathExpression,
) -> PathExpression:
    """Generalize two paths of equal depth position by position.

    Paths of different length are never aligned, truncated or padded; they
    raise :class:`LengthMismatchError`.
    """

    left = coerce_path(first)
    right = coerce_path(second)
    if left == right:
        return left
    if len(left) != len(right):
        raise LengthMismatchError(len(left), len(right))
    return PathExpression(tuple(generalize_step(a, b) for a, b in zip(left, right)))


def generalize_path_sequence(paths: Iterable[str | PathExpression]) -> PathExpression:
    """Left-fold :func:`generalize_paths` over ``paths`` in the given order."""

    iterator = iter(paths)
    try:
        accumulated = coerce_path(next(iterator))
    except StopIteration:
        raise EmptyInputError("At least one path expression is required for generalization") from None

    for path in iterator:
        accumulated = generalize_paths(accumulated, path)
    return accumulated


def generalize_xpath_expressions(*expressions: str | PathExpression) -> str:
    """String-level convenience wrapper returning the rendered generalization."""

    return str(generalize_path_sequence(expressions))
