"""Grouping of extraction rules by structural signature."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from . import ExtractionRule, PathExpression
from .errors import EmptyInputError
from .tokenizer import parse_rule

__all__ = [
    "RuleInput",
    "StructuralSignature",
    "Cluster",
    "structural_signature",
    "coerce_rule",
    "cluster_rules",
]

RuleInput = ExtractionRule | Sequence[str | PathExpression]


@dataclass(frozen=True, slots=True)
class StructuralSignature:
    """Tag-only shapes of a rule's subject and object paths."""

    subject_tags: tuple[str, ...]
    object_tags: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Cluster:
    """Insertion-ordered group of rules sharing one structural signature."""

    signature: StructuralSignature
    members: tuple[ExtractionRule, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", tuple(self.members))
        if not self.members:
            raise ValueError("A cluster requires at least one member")

    @property
    def representative(self) -> ExtractionRule:
        return self.members[0]

    @property
    def size(self) -> int:
        return len(self.members)

    def __len__(self) -> int:
        return len(self.members)


def structural_signature(rule: ExtractionRule) -> StructuralSignature:
    return StructuralSignature(rule.subject.tags, rule.object.tags)


def coerce_rule(value: RuleInput) -> ExtractionRule:
    """Accept an :class:`ExtractionRule` or a ``(subject, object)`` pair."""

    if isinstance(value, ExtractionRule):
        return value
    if isinstance(value, (str, bytes)) or len(value) != 2:
        raise ValueError(f"Extraction rule must be a (subject, object) pair, got {value!r}")
    subject, object_ = value
    return parse_rule(subject, object_)


def cluster_rules(rules: Iterable[RuleInput]) -> tuple[Cluster, ...]:
    """Partition ``rules`` into clusters of identical subject/object tag shapes.

    Assignment is first-fit in input order: a rule joins the earliest cluster
    whose representative shares its signature, otherwise it opens a new
    cluster. Since distinct clusters never share a signature, a lookup keyed
    by signature gives the same membership and ordering as a linear scan.
    """

    index: dict[StructuralSignature, int] = {}
    signatures: list[StructuralSignature] = []
    buckets: list[list[ExtractionRule]] = []

    for item in rules:
        rule = coerce_rule(item)
        signature = structural_signature(rule)
        position = index.get(signature)
        if position is None:
            index[signature] = len(buckets)
            signatures.append(signature)
            buckets.append([rule])
        else:
            buckets[position].append(rule)

    if not buckets:
        raise EmptyInputError("Cannot cluster an empty collection of extraction rules")

    return tuple(Cluster(signature, tuple(members)) for signature, members in zip(signatures, buckets))
