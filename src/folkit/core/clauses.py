"""Clauses and clause sets in conjunctive normal form."""

from typing import Dict, Iterator, Set, Tuple

from folkit.exceptions import NotDefiniteClauseError
from .logic import Literal, Predicate, Variable, StandardisedVariableIdentifier
from .substitution import Substitution
from .transformations import substitute
from .unification import match, unify


class Clause:
    """A disjunction of literals.

    Literals are kept in insertion order for iteration and display, but a
    clause behaves as a set: duplicates are dropped and equality ignores order.
    """

    EMPTY: 'Clause' = None

    def __init__(self, *literals):
        if len(literals) == 1 and isinstance(literals[0], Clause):
            literals = literals[0].literals
        for literal in literals:
            if not isinstance(literal, Literal):
                raise TypeError(f"Expected Literal, got {literal!r}")
        self.literals: Tuple[Literal, ...] = tuple(dict.fromkeys(literals))
        self._literal_set = frozenset(self.literals)

    @property
    def is_empty(self) -> bool:
        return not self.literals

    @property
    def is_unit(self) -> bool:
        return len(self.literals) == 1

    @property
    def is_horn(self) -> bool:
        return self._positive_count() <= 1

    @property
    def is_definite(self) -> bool:
        return self._positive_count() == 1

    @property
    def is_goal(self) -> bool:
        return self._positive_count() == 0

    def _positive_count(self) -> int:
        return sum(1 for literal in self.literals if literal.is_positive)

    def variables(self) -> Set[Variable]:
        variables = set()
        for literal in self.literals:
            variables |= literal.variables()
        return variables

    def depth(self) -> int:
        return max((literal.depth() for literal in self.literals), default=0)

    def substitute(self, bindings) -> 'Clause':
        return type(self)(*[substitute(literal, bindings) for literal in self.literals])

    def restandardise(self) -> 'Clause':
        """Copy of this clause with fresh variables in place of its own."""
        mapping: Dict[Variable, Variable] = {}
        for variable in self.variables():
            identifier = variable.identifier
            if isinstance(identifier, StandardisedVariableIdentifier):
                mapping[variable] = Variable(StandardisedVariableIdentifier(
                    identifier.original_identifier, identifier.original_formula))
            else:
                mapping[variable] = Variable(StandardisedVariableIdentifier(identifier))
        return self.substitute(mapping)

    def subsumes(self, other: 'Clause') -> bool:
        """Whether some substitution maps every literal of this clause onto a literal of ``other``.

        The empty clause subsumes nothing.
        """
        if self.is_empty:
            return False
        return _subsumes(self.literals, other.literals, Substitution())

    def is_subsumed_by(self, other: 'Clause') -> bool:
        return other.subsumes(self)

    @property
    def has_unifiable_literals(self) -> bool:
        """Whether some substitution would merge two of this clause's literals into one."""
        return any(
            unify(first, second) is not None
            for i, first in enumerate(self.literals)
            for second in self.literals[i + 1:])

    def is_variant_of(self, other: 'Clause') -> bool:
        if len(self) != len(other):
            return False
        if self.is_empty:
            return True
        return self.subsumes(other) and other.subsumes(self)

    def __iter__(self) -> Iterator[Literal]:
        return iter(self.literals)

    def __len__(self):
        return len(self.literals)

    def __contains__(self, literal):
        return literal in self._literal_set

    def __eq__(self, other):
        if not isinstance(other, Clause):
            return False
        return self._literal_set == other._literal_set

    def __hash__(self):
        return hash(self._literal_set)

    def __repr__(self):
        if self.is_empty:
            return "[]"
        return " | ".join(map(repr, self.literals))


Clause.EMPTY = Clause()


def _subsumes(literals, targets, substitution) -> bool:
    if not literals:
        return True
    first, rest = literals[0], literals[1:]
    for target in targets:
        extended = match(first, target, substitution)
        if extended is not None and _subsumes(rest, targets, extended):
            return True
    return False


class DefiniteClause(Clause):
    """A clause with exactly one positive literal, read as ``antecedents => consequent``."""

    def __init__(self, *literals):
        super().__init__(*literals)
        if not self.is_definite:
            raise NotDefiniteClauseError(Clause(*self.literals))
        self.consequent: Predicate = next(
            literal.predicate for literal in self.literals if literal.is_positive)
        self.antecedents: Tuple[Predicate, ...] = tuple(
            literal.predicate for literal in self.literals if literal.is_negated)

    @property
    def is_fact(self) -> bool:
        return not self.antecedents


class CNFFormula:
    """A conjunction of clauses."""

    def __init__(self, *clauses):
        for clause in clauses:
            if not isinstance(clause, Clause):
                raise TypeError(f"Expected Clause, got {clause!r}")
        self.clauses: Tuple[Clause, ...] = tuple(dict.fromkeys(clauses))

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)

    def __len__(self):
        return len(self.clauses)

    def __eq__(self, other):
        if not isinstance(other, CNFFormula):
            return False
        return frozenset(self.clauses) == frozenset(other.clauses)

    def __hash__(self):
        return hash(frozenset(self.clauses))

    def __repr__(self):
        return " & ".join(f"({clause!r})" for clause in self.clauses)
