"""Explanations of the terms introduced by normalisation."""

from typing import List

from folkit.core.clauses import Clause
from folkit.core.logic import (
    Term, Variable, Function, Literal, Predicate, SkolemFunctionIdentifier, StandardisedVariableIdentifier,
)
from .formatter import Formatter


def find_normalisation_terms(*items) -> List[Term]:
    """
    Find the standardised variables and Skolem functions in clauses, literals or predicates.

    Returns:
        Each such term once, in order of first appearance
    """
    found: List[Term] = []
    for item in items:
        if isinstance(item, Clause):
            predicates = [literal.predicate for literal in item]
        elif isinstance(item, Literal):
            predicates = [item.predicate]
        elif isinstance(item, Predicate):
            predicates = [item]
        else:
            raise TypeError(f"Expected Clause, Literal or Predicate, got {item!r}")

        for predicate in predicates:
            stack = list(reversed(predicate.arguments))
            while stack:
                term = stack.pop()
                if isinstance(term, Function):
                    if isinstance(term.identifier, SkolemFunctionIdentifier) and term not in found:
                        found.append(term)
                    stack.extend(reversed(term.arguments))
                elif isinstance(term, Variable):
                    if isinstance(term.identifier, StandardisedVariableIdentifier) and term not in found:
                        found.append(term)
    return found


class CNFExplainer:
    """Describes standardised variables and Skolem functions in terms of the formula they came from."""

    def __init__(self, formatter: Formatter):
        self.formatter = formatter

    def explain(self, term: Term) -> str:
        """
        Args:
            term: A standardised variable or a Skolem function application

        Raises:
            ValueError: If the term is neither
        """
        identifier = getattr(term, 'identifier', None)
        if isinstance(term, Function) and isinstance(identifier, SkolemFunctionIdentifier):
            return f"some {self.formatter.format(identifier.standardised_variable_identifier)}" \
                + self._source(identifier.original_formula)
        if isinstance(term, Variable) and isinstance(identifier, StandardisedVariableIdentifier):
            return f"a standardisation of {identifier.original_identifier}" \
                + self._source(identifier.original_formula)
        raise ValueError(f"{term!r} is not a standardised variable or Skolem function")

    def _source(self, formula) -> str:
        return "" if formula is None else f" from {self.formatter.format(formula)}"
