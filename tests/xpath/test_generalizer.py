"""Tests for pairwise and folded path generalization."""
from __future__ import annotations

import pytest

from rex.xpath.errors import EmptyInputError, LengthMismatchError
from rex.xpath.generalizer import (
    generalize_path_sequence,
    generalize_paths,
    generalize_xpath_expressions,
)
from rex.xpath.tokenizer import tokenize


def test_positions_differing_collapse_to_tag() -> None:
    assert generalize_xpath_expressions("/html/body/div[1]/a", "/html/body/div[2]/a") == "/html/body/div/a"


def test_differing_tags_collapse_to_wildcard() -> None:
    assert generalize_xpath_expressions("/html/body/span", "/html/body/div") == "/html/body/*"


def test_length_mismatch_is_rejected() -> None:
    with pytest.raises(LengthMismatchError) as excinfo:
        generalize_xpath_expressions("/a/b/c", "/a/b")

    assert (excinfo.value.first_length, excinfo.value.second_length) == (3, 2)


def test_identity() -> None:
    path = tokenize("/html/body/table[2]/tr[5]/td[1]")

    assert generalize_paths(path, path) == path


def test_commutativity() -> None:
    first = tokenize("/html/body/div[1]/span[2]")
    second = tokenize("/html/body/div[3]/p")

    assert generalize_paths(first, second) == generalize_paths(second, first)
    assert str(generalize_paths(first, second)) == "/html/body/div/*"


def test_associativity() -> None:
    first = tokenize("/html/body/div[1]/a[1]")
    second = tokenize("/html/body/div[1]/a[2]")
    third = tokenize("/html/body/section[1]/a[2]")

    left = generalize_paths(generalize_paths(first, second), third)
    right = generalize_paths(first, generalize_paths(second, third))

    assert left == right
    assert str(left) == "/html/body/*/a"


def test_wildcard_is_absorbing_across_folds() -> None:
    paths = ["/html/span[1]", "/html/div[1]", "/html/span[1]", "/html/span[1]"]

    assert generalize_xpath_expressions(*paths) == "/html/*"
    assert generalize_path_sequence(paths)[1].is_wildcard


def test_result_has_input_length_and_no_empty_segments() -> None:
    result = generalize_paths("/a/b[1]/c", "/x/b[2]/d")

    assert len(result) == 3
    assert str(result) == "/*/b/*"
    assert "//" not in str(result)
    assert not str(result).endswith("/")


def test_single_path_sequence_is_returned_unchanged() -> None:
    path = tokenize("/html/div[7]")

    assert generalize_path_sequence([path]) is path
    assert generalize_xpath_expressions("/html/div[7]") == "/html/div[7]"


def test_empty_sequence_is_rejected() -> None:
    with pytest.raises(EmptyInputError):
        generalize_path_sequence([])


def test_fold_fails_at_first_mismatching_pair() -> None:
    with pytest.raises(LengthMismatchError) as excinfo:
        generalize_path_sequence(["/a/b", "/a/c", "/a/b/c", "/a"])

    assert excinfo.value.second_length == 3
