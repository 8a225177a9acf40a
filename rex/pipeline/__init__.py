"""Relation extraction pipeline built around rule generalization."""

from .controller import RexPipeline
from .models import (
    ConsistencyChecker,
    DomainIdentifier,
    ExamplePair,
    ExampleGenerator,
    ExtractionResult,
    PipelineError,
    PipelineResult,
    RuleEvaluator,
    RuleLearner,
    Triple,
    TripleGenerator,
)

__all__ = [
    "ConsistencyChecker",
    "DomainIdentifier",
    "ExamplePair",
    "ExampleGenerator",
    "ExtractionResult",
    "PipelineError",
    "PipelineResult",
    "RexPipeline",
    "RuleEvaluator",
    "RuleLearner",
    "Triple",
    "TripleGenerator",
]
