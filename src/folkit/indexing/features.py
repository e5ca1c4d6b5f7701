"""Clause features for the feature vector index.

Every feature here is defined so that a clause that subsumes another has a
magnitude no greater than the other's for each feature, provided the
subsuming substitution does not merge literals. Features missing from a
vector have magnitude zero.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from folkit.core.clauses import Clause
from folkit.core.logic import Variable, SkolemFunctionIdentifier, StandardisedVariableIdentifier


def identifier_sort_key(identifier) -> Tuple:
    """Total ordering over identifiers of any type.

    Identifiers that compare by identity are ordered by id() after their
    text, which is stable for the lifetime of the process.
    """
    by_identity = isinstance(identifier, (SkolemFunctionIdentifier, StandardisedVariableIdentifier))
    return type(identifier).__name__, str(identifier), id(identifier) if by_identity else 0


@dataclass(frozen=True)
class OccurrenceCountFeature:
    """
    Number of occurrences of a symbol within literals of one polarity.

    A feature with identifier None counts the literals of that polarity.
    """
    identifier: Any
    is_in_positive_literal: bool

    @staticmethod
    def make_feature_vector(clause: Clause) -> Dict['OccurrenceCountFeature', int]:
        vector: Dict[OccurrenceCountFeature, int] = {}

        def add(identifier, positive):
            feature = OccurrenceCountFeature(identifier, positive)
            vector[feature] = vector.get(feature, 0) + 1

        for literal in clause:
            add(None, literal.is_positive)
            stack = [literal.predicate]
            while stack:
                current = stack.pop()
                if not isinstance(current, Variable):
                    add(current.identifier, literal.is_positive)
                stack.extend(current.arguments)
        return vector

    @staticmethod
    def sort_key(feature: 'OccurrenceCountFeature') -> Tuple:
        # Literal counts are the least informative, so they come first
        if feature.identifier is None:
            return (0, (), feature.is_in_positive_literal)
        return (1, identifier_sort_key(feature.identifier), feature.is_in_positive_literal)


@dataclass(frozen=True)
class MaxDepthFeature:
    """Greatest depth at which a symbol occurs within literals of one polarity; predicates are at depth 1."""
    identifier: Any
    is_in_positive_literal: bool

    @staticmethod
    def make_feature_vector(clause: Clause) -> Dict['MaxDepthFeature', int]:
        vector: Dict[MaxDepthFeature, int] = {}
        for literal in clause:
            stack = [(literal.predicate, 1)]
            while stack:
                current, depth = stack.pop()
                if not isinstance(current, Variable):
                    feature = MaxDepthFeature(current.identifier, literal.is_positive)
                    if depth > vector.get(feature, 0):
                        vector[feature] = depth
                stack.extend((argument, depth + 1) for argument in current.arguments)
        return vector

    @staticmethod
    def sort_key(feature: 'MaxDepthFeature') -> Tuple:
        return identifier_sort_key(feature.identifier), feature.is_in_positive_literal
