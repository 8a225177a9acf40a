"""Tests for the cluster-wise rule generalization driver."""
from __future__ import annotations

import logging

import pytest

from rex.xpath import WeightedRule
from rex.xpath.clustering import Cluster, cluster_rules, structural_signature
from rex.xpath.errors import EmptyInputError, LengthMismatchError, RuleCollisionError
from rex.xpath.rules import (
    generalize_cluster,
    generalize_rules,
    generalize_rules_weighted,
    generalize_rules_with_support,
    merge_weighted_rules,
)
from rex.xpath.tokenizer import parse_rule

SCENARIO_RULES = [
    ("/a/b[1]/c", "/a/d[1]"),
    ("/a/b[2]/c", "/a/d[2]"),
    ("/x/y[1]", "/x/z[1]"),
]

MIXED_RULES = [
    ("/html/body/div[1]/h1", "/html/body/div[1]/table/tr[2]/td[2]"),
    ("/html/body/div[1]/h1", "/html/body/div[1]/table/tr[4]/td[2]"),
    ("/html/body/div[2]/h1", "/html/body/div[2]/table/tr[3]/td[1]"),
    ("/html/body/h2[1]", "/html/body/ul/li[1]"),
    ("/html/body/h2[1]", "/html/body/ul/li[5]"),
    ("/html/body/div[3]/h1", "/html/body/div[3]/table/tr[1]/td[2]"),
]


def test_generalize_rules_returns_one_rule_per_cluster() -> None:
    generalized = generalize_rules(SCENARIO_RULES)

    assert generalized == (
        parse_rule("/a/b/c", "/a/d"),
        parse_rule("/x/y[1]", "/x/z[1]"),
    )


def test_weighted_generalization_matches_cluster_sizes() -> None:
    weighted = generalize_rules_weighted(SCENARIO_RULES)

    assert weighted == {
        parse_rule("/a/b/c", "/a/d"): 2,
        parse_rule("/x/y[1]", "/x/z[1]"): 1,
    }


def test_weights_sum_to_input_count() -> None:
    weighted = generalize_rules_weighted(MIXED_RULES)

    assert sum(weighted.values()) == len(MIXED_RULES)
    assert weighted[parse_rule("/html/body/div/h1", "/html/body/div/table/tr/td")] == 4
    assert weighted[parse_rule("/html/body/h2[1]", "/html/body/ul/li")] == 2


def test_support_entries_follow_cluster_order() -> None:
    entries = generalize_rules_with_support(MIXED_RULES)

    assert [entry.support for entry in entries] == [4, 2]
    assert all(isinstance(entry, WeightedRule) for entry in entries)


def test_single_member_cluster_keeps_positions() -> None:
    (cluster,) = cluster_rules([("/html/div[3]/a[1]", "/html/div[3]/b[2]")])

    assert generalize_cluster(cluster) == parse_rule("/html/div[3]/a[1]", "/html/div[3]/b[2]")


def test_parallel_folding_preserves_order_and_values() -> None:
    sequential = generalize_rules_with_support(MIXED_RULES + SCENARIO_RULES)
    parallel = generalize_rules_with_support(MIXED_RULES + SCENARIO_RULES, max_workers=4)

    assert parallel == sequential


def test_invalid_worker_count_is_rejected() -> None:
    with pytest.raises(ValueError):
        generalize_rules(SCENARIO_RULES, max_workers=0)


def test_empty_rules_are_rejected() -> None:
    with pytest.raises(EmptyInputError):
        generalize_rules([])
    with pytest.raises(EmptyInputError):
        generalize_rules_weighted([])


def test_inconsistent_cluster_propagates_length_mismatch(caplog: pytest.LogCaptureFixture) -> None:
    first = parse_rule("/a/b", "/c")
    second = parse_rule("/a/b/c", "/c")
    broken = Cluster(structural_signature(first), (first, second))

    with caplog.at_level(logging.ERROR, logger="rex.xpath.rules"):
        with pytest.raises(LengthMismatchError):
            generalize_cluster(broken)

    assert "different length" in caplog.text


def test_merge_sums_colliding_weights_by_default(caplog: pytest.LogCaptureFixture) -> None:
    rule = parse_rule("/a/b", "/a/c")
    other = parse_rule("/x", "/y")
    entries = [WeightedRule(rule, 2), WeightedRule(other, 1), WeightedRule(rule, 3)]

    with caplog.at_level(logging.WARNING, logger="rex.xpath.rules"):
        merged = merge_weighted_rules(entries)

    assert merged == {rule: 5, other: 1}
    assert list(merged) == [rule, other]
    assert "collide" in caplog.text


def test_merge_replace_policy_keeps_later_weight() -> None:
    # Mirrors the overwrite behaviour of a plain key-unique mapping.
    rule = parse_rule("/a/b", "/a/c")

    merged = merge_weighted_rules([WeightedRule(rule, 2), WeightedRule(rule, 3)], on_collision="replace")

    assert merged == {rule: 3}


def test_merge_error_policy_raises() -> None:
    rule = parse_rule("/a/b", "/a/c")

    with pytest.raises(RuleCollisionError) as excinfo:
        merge_weighted_rules([WeightedRule(rule, 2), WeightedRule(rule, 3)], on_collision="error")

    assert excinfo.value.rule == rule


def test_unknown_collision_policy_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown collision policy"):
        generalize_rules_weighted(SCENARIO_RULES, on_collision="average")


def test_weighted_rule_requires_positive_support() -> None:
    with pytest.raises(ValueError):
        WeightedRule(parse_rule("/a", "/b"), 0)
