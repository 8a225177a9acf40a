"""Models and collaborator contracts for the relation extraction pipeline."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Protocol, Sequence, runtime_checkable

from rex.xpath import ExtractionRule

ExamplePair = tuple[str, str]


class PipelineError(RuntimeError):
    """Raised when the extraction pipeline cannot continue."""


@dataclass(frozen=True, slots=True)
class Triple:
    """Subject-predicate-object statement produced from extracted values."""

    subject: str
    predicate: str
    object: str


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Subject and object values extracted from one document by one rule."""

    subject: str
    object: str
    source_url: str
    rule: ExtractionRule | None = None


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Aggregate outcome of a pipeline run."""

    property_uri: str
    domain: str
    raw_rules: Sequence[ExtractionRule] = field(default_factory=tuple)
    generalized_rules: Mapping[ExtractionRule, int] = field(default_factory=dict)
    results: Sequence[ExtractionResult] = field(default_factory=tuple)
    triples: frozenset[Triple] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_rules", tuple(self.raw_rules))
        object.__setattr__(self, "generalized_rules", dict(self.generalized_rules))
        object.__setattr__(self, "results", tuple(self.results))
        object.__setattr__(self, "triples", frozenset(self.triples))


@runtime_checkable
class ExampleGenerator(Protocol):
    """Supplies known subject/object pairs for a property."""

    def positive_examples(self) -> Sequence[ExamplePair]:
        ...

    def negative_examples(self) -> Sequence[ExamplePair]:
        ...


@runtime_checkable
class DomainIdentifier(Protocol):
    """Picks the web site most likely to describe a property."""

    def identify(
        self,
        property_uri: str,
        positives: Sequence[ExamplePair],
        negatives: Sequence[ExamplePair],
    ) -> str:
        ...


@runtime_checkable
class RuleLearner(Protocol):
    """Harvests document-specific extraction rules from a site."""

    def learn(
        self,
        positives: Sequence[ExamplePair],
        negatives: Sequence[ExamplePair],
        domain: str,
    ) -> Sequence[ExtractionRule]:
        ...


@runtime_checkable
class RuleEvaluator(Protocol):
    """Applies generalized rules to documents and collects extracted values."""

    def evaluate(self, rules: Mapping[ExtractionRule, int]) -> Sequence[ExtractionResult]:
        ...


@runtime_checkable
class TripleGenerator(Protocol):
    """Turns extracted strings into triples for a property."""

    def generate(self, results: Sequence[ExtractionResult], property_uri: str) -> set[Triple]:
        ...


@runtime_checkable
class ConsistencyChecker(Protocol):
    """Drops triples that contradict the target ontology."""

    def filter(self, triples: set[Triple]) -> set[Triple]:
        ...
