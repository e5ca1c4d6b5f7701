"""Binary resolution of two clauses."""

from dataclasses import dataclass
from itertools import chain
from typing import Iterator, List, Optional

from folkit.core.clauses import Clause
from folkit.core.logic import Literal
from folkit.core.substitution import Substitution
from folkit.core.unification import unify


@dataclass(frozen=True)
class ClauseResolution:
    """Result of resolving two clauses on one complementary pair of literals."""
    clause1: Clause
    clause2: Clause
    substitution: Substitution
    resolvent: Clause


def resolve(clause1: Clause, clause2: Clause) -> Iterator[ClauseResolution]:
    """
    Resolve two clauses on every pair of complementary, unifiable literals.

    The unifier is applied to the remaining literals, which are then factored.
    Resolvents that are tautologies are not returned. If the parents share
    variables (a clause paired with itself or with one derived from it), the
    second parent is restandardised first.

    Args:
        clause1: First parent clause
        clause2: Second parent clause

    Yields:
        One ClauseResolution per resolved literal pair
    """
    renamed = clause2.restandardise() if clause1.variables() & clause2.variables() else clause2
    for literal1 in clause1:
        for literal2 in renamed:
            unifier = unify(literal1, literal2.negate())
            if unifier is None:
                continue

            remaining = [
                unifier.apply_to(literal)
                for literal in chain(
                    (literal for literal in clause1 if literal != literal1),
                    (literal for literal in renamed if literal != literal2))
            ]
            factored = _factor(remaining)
            if factored is not None:
                yield ClauseResolution(clause1, clause2, unifier, Clause(*factored))


def _factor(literals: List[Literal]) -> Optional[List[Literal]]:
    """Unify literals of the same polarity until none remain; None if the result is a tautology."""
    literals = list(dict.fromkeys(literals))
    factored = True
    while factored:
        factored = False
        for i, first in enumerate(literals):
            for second in literals[i + 1:]:
                if first.predicate == second.predicate and first.polarity != second.polarity:
                    return None
                unifier = unify(first, second)
                if unifier is not None:
                    literals = list(dict.fromkeys(unifier.apply_to(literal) for literal in literals))
                    factored = True
                    break
            if factored:
                break
    return literals
