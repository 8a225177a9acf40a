"""Generalization of single node steps."""
from __future__ import annotations

from . import WILDCARD, NodeStep

__all__ = ["WILDCARD_STEP", "generalize_step"]

WILDCARD_STEP = NodeStep(WILDCARD)


def generalize_step(first: NodeStep, second: NodeStep) -> NodeStep:
    """Return the least specific step consistent with both inputs.

    Identical steps are kept as-is. A wildcard on either side, or differing
    tags, yields the wildcard. Equal tags at different (or missing) positions
    keep the tag and drop the position.
    """

    if first == second:
        return first
    if first.is_wildcard or second.is_wildcard:
        return WILDCARD_STEP
    if first.tag == second.tag:
        return NodeStep(first.tag)
    return WILDCARD_STEP
