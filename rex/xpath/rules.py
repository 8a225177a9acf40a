"""Cluster-wise generalization of raw extraction rules."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

from . import ExtractionRule, WeightedRule
from .clustering import Cluster, RuleInput, cluster_rules
from .errors import LengthMismatchError, RuleCollisionError
from .generalizer import generalize_path_sequence

__all__ = [
    "COLLISION_POLICIES",
    "generalize_cluster",
    "generalize_rules",
    "generalize_rules_with_support",
    "generalize_rules_weighted",
    "merge_weighted_rules",
]

logger = logging.getLogger(__name__)

COLLISION_SUM = "sum"
COLLISION_REPLACE = "replace"
COLLISION_ERROR = "error"
COLLISION_POLICIES = (COLLISION_SUM, COLLISION_REPLACE, COLLISION_ERROR)


def generalize_cluster(cluster: Cluster) -> ExtractionRule:
    """Fold the subject and object projections of ``cluster`` independently."""

    logger.debug("Processing cluster with size %d", cluster.size)
    if cluster.size == 1:
        return cluster.representative

    try:
        subject = generalize_path_sequence(rule.subject for rule in cluster.members)
        object_ = generalize_path_sequence(rule.object for rule in cluster.members)
    except LengthMismatchError:
        # Signature equality implies equal depth; reaching this is a clustering fault.
        logger.error(
            "Cluster with signature %s holds paths of different length",
            cluster.signature,
        )
        raise

    logger.debug("Generalized XPath for subjects: %s", subject)
    logger.debug("Generalized XPath for objects: %s", object_)
    return ExtractionRule(subject, object_)


def _generalize_clusters(
    clusters: tuple[Cluster, ...],
    max_workers: int | None,
) -> list[ExtractionRule]:
    if max_workers is not None and max_workers < 1:
        raise ValueError(f"max_workers must be a positive integer, got {max_workers}")

    if max_workers is None or max_workers == 1 or len(clusters) < 2:
        return [generalize_cluster(cluster) for cluster in clusters]

    with ThreadPoolExecutor(max_workers=min(max_workers, len(clusters))) as executor:
        return list(executor.map(generalize_cluster, clusters))


def generalize_rules(
    rules: Iterable[RuleInput],
    *,
    max_workers: int | None = None,
) -> tuple[ExtractionRule, ...]:
    """Return one generalized rule per structural cluster, in cluster order."""

    clusters = cluster_rules(rules)
    return tuple(_generalize_clusters(clusters, max_workers))


def generalize_rules_with_support(
    rules: Iterable[RuleInput],
    *,
    max_workers: int | None = None,
) -> tuple[WeightedRule, ...]:
    """Return one ``(rule, support)`` entry per cluster without merging duplicates."""

    clusters = cluster_rules(rules)
    generalized = _generalize_clusters(clusters, max_workers)
    return tuple(
        WeightedRule(rule, cluster.size) for rule, cluster in zip(generalized, clusters)
    )


def generalize_rules_weighted(
    rules: Iterable[RuleInput],
    *,
    on_collision: str = COLLISION_SUM,
    max_workers: int | None = None,
) -> dict[ExtractionRule, int]:
    """Map each generalized rule to the number of raw rules supporting it."""

    _check_policy(on_collision)
    entries = generalize_rules_with_support(rules, max_workers=max_workers)
    return merge_weighted_rules(entries, on_collision=on_collision)


def _check_policy(on_collision: str) -> None:
    if on_collision not in COLLISION_POLICIES:
        raise ValueError(
            f"Unknown collision policy '{on_collision}'. Expected one of: {', '.join(COLLISION_POLICIES)}"
        )


def merge_weighted_rules(
    entries: Iterable[WeightedRule],
    *,
    on_collision: str = COLLISION_SUM,
) -> dict[ExtractionRule, int]:
    """Collapse weighted rules into a mapping keyed by rule.

    Entries sharing an identical rule are resolved by ``on_collision``:
    ``sum`` adds the weights, ``replace`` keeps the later weight and ``error``
    raises :class:`RuleCollisionError`. Clusters from a single batch never
    collide; this matters when batches learned separately are combined.
    """

    _check_policy(on_collision)
    weighted: dict[ExtractionRule, int] = {}
    for entry in entries:
        previous = weighted.get(entry.rule)
        if previous is None:
            weighted[entry.rule] = entry.support
            continue

        logger.warning(
            "Weighted rules collide on %s (weights %d and %d, policy '%s')",
            entry.rule,
            previous,
            entry.support,
            on_collision,
        )
        if on_collision == COLLISION_ERROR:
            raise RuleCollisionError(entry.rule)
        if on_collision == COLLISION_SUM:
            weighted[entry.rule] = previous + entry.support
        else:
            weighted[entry.rule] = entry.support
    return weighted
