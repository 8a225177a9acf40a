"""Orchestration of the relation extraction workflow."""
from __future__ import annotations

import logging

from rex.xpath.rules import COLLISION_SUM, generalize_rules_weighted

from .models import (
    ConsistencyChecker,
    DomainIdentifier,
    ExampleGenerator,
    PipelineError,
    PipelineResult,
    RuleEvaluator,
    RuleLearner,
    TripleGenerator,
)

logger = logging.getLogger(__name__)


class RexPipeline:
    """Runs example generation, rule learning, generalization and triple filtering."""

    def __init__(
        self,
        property_uri: str,
        *,
        examples: ExampleGenerator,
        domain_identifier: DomainIdentifier,
        learner: RuleLearner,
        evaluator: RuleEvaluator,
        triple_generator: TripleGenerator,
        consistency: ConsistencyChecker,
        collision_policy: str = COLLISION_SUM,
        max_workers: int | None = None,
    ) -> None:
        if not property_uri:
            raise ValueError("RexPipeline requires a property URI")
        self.property_uri = property_uri
        self.examples = examples
        self.domain_identifier = domain_identifier
        self.learner = learner
        self.evaluator = evaluator
        self.triple_generator = triple_generator
        self.consistency = consistency
        self.collision_policy = collision_policy
        self.max_workers = max_workers

    def run(self) -> PipelineResult:
        """Execute the pipeline and return the consistent triples with provenance."""

        positives = tuple(self.examples.positive_examples())
        negatives = tuple(self.examples.negative_examples())
        logger.info(
            "Running extraction for %s with %d positive and %d negative examples",
            self.property_uri,
            len(positives),
            len(negatives),
        )

        domain = self.domain_identifier.identify(self.property_uri, positives, negatives)
        logger.info("Domain: %s", domain)

        raw_rules = tuple(self.learner.learn(positives, negatives, domain))
        if not raw_rules:
            raise PipelineError(f"No extraction rules learned for {self.property_uri} on {domain}")

        generalized = generalize_rules_weighted(
            raw_rules,
            on_collision=self.collision_policy,
            max_workers=self.max_workers,
        )
        logger.info("Generalized %d raw rules into %d rules", len(raw_rules), len(generalized))

        results = tuple(self.evaluator.evaluate(generalized))
        triples = set(self.triple_generator.generate(results, self.property_uri))
        consistent = set(self.consistency.filter(triples))
        if len(consistent) < len(triples):
            logger.info("Consistency check removed %d triples", len(triples) - len(consistent))

        return PipelineResult(
            property_uri=self.property_uri,
            domain=domain,
            raw_rules=raw_rules,
            generalized_rules=generalized,
            results=results,
            triples=frozenset(consistent),
        )
