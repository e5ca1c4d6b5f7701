"""Knowledge base decorators that add axioms for equality and unique names."""

import logging
import threading
from typing import Optional, Set

from folkit.core.logic import (
    Formula, Variable, Constant, Function, Predicate, Equality, Negation,
    Conjunction, Implication, Equivalence, for_all, EQUALITY,
)
from folkit.core.transformations import FormulaVisitor
from .base import KnowledgeBase, Query


logger = logging.getLogger(__name__)

X, Y, Z = Variable("x"), Variable("y"), Variable("z")


def _congruence(identifier, arity, build_consequent) -> Formula:
    """∀ l0, r0, ... [l0 = r0 ∧ ...] ⇒ consequent(left arguments, right arguments)"""
    left = [Variable(f"l{i}") for i in range(arity)]
    right = [Variable(f"r{i}") for i in range(arity)]

    antecedent = Equality(left[0], right[0])
    for i in range(1, arity):
        antecedent = Conjunction(Equality(left[i], right[i]), antecedent)

    formula = Implication(antecedent, build_consequent(identifier, left, right))
    for i in reversed(range(arity)):
        formula = for_all(left[i], right[i], formula)
    return formula


class _EqualityAxiomiser(FormulaVisitor):
    def __init__(self, knowledge_base: KnowledgeBase):
        self.knowledge_base = knowledge_base
        self.known_predicates: Set[object] = {EQUALITY}
        self.known_functions: Set[object] = set()

    def predicate(self, predicate: Predicate):
        # Keyed on identifier only; one identifier is assumed to have one arity
        if predicate.identifier in self.known_predicates or not predicate.arguments:
            return
        self.known_predicates.add(predicate.identifier)
        self.knowledge_base.tell(_congruence(
            predicate.identifier, len(predicate.arguments),
            lambda identifier, left, right: Equivalence(Predicate(identifier, *left), Predicate(identifier, *right))))

    def function(self, function: Function):
        if function.identifier in self.known_functions or not function.arguments:
            return
        self.known_functions.add(function.identifier)
        self.knowledge_base.tell(_congruence(
            function.identifier, len(function.arguments),
            lambda identifier, left, right: Equality(Function(identifier, *left), Function(identifier, *right))))


class EqualityAxiomisingKnowledgeBase(KnowledgeBase):
    """
    Decorator that makes equality behave as such in the inner knowledge base.

    On creation, tells the inner knowledge base that equality is reflexive,
    commutative and transitive. On each tell, also tells it the substitution
    axiom of every predicate and function symbol not seen before.
    """

    def __init__(self, inner: KnowledgeBase):
        self.inner = inner
        inner.tell(for_all(X, Equality(X, X)))
        inner.tell(for_all(X, Y, Implication(Equality(X, Y), Equality(Y, X))))
        inner.tell(for_all(X, Y, Z, Implication(Conjunction(Equality(X, Y), Equality(Y, Z)), Equality(X, Z))))
        self._axiomiser = _EqualityAxiomiser(inner)
        self._lock = threading.Lock()

    def tell(self, formula: Formula):
        self.inner.tell(formula)
        with self._lock:
            self._axiomiser.visit(formula)

    def create_query(self, formula: Formula) -> Query:
        return self.inner.create_query(formula)

    def ask(self, formula: Formula, cancellation: Optional[threading.Event] = None) -> bool:
        return self.inner.ask(formula, cancellation)


class _UniqueNamesAxiomiser(FormulaVisitor):
    def __init__(self, knowledge_base: KnowledgeBase):
        self.knowledge_base = knowledge_base
        self.known_constants: Set[Constant] = set()

    def constant(self, constant: Constant):
        if constant in self.known_constants:
            return
        for known in self.known_constants:
            self.knowledge_base.tell(Negation(Equality(constant, known)))
        self.known_constants.add(constant)
        logger.debug(f"Added unique name axioms for {constant!r}")


class UniqueNamesAxiomisingKnowledgeBase(KnowledgeBase):
    """Decorator that tells the inner knowledge base that all distinct constants are unequal."""

    def __init__(self, inner: KnowledgeBase):
        self.inner = inner
        self._axiomiser = _UniqueNamesAxiomiser(inner)
        self._lock = threading.Lock()

    def tell(self, formula: Formula):
        self.inner.tell(formula)
        with self._lock:
            self._axiomiser.visit(formula)

    def create_query(self, formula: Formula) -> Query:
        return self.inner.create_query(formula)

    def ask(self, formula: Formula, cancellation: Optional[threading.Event] = None) -> bool:
        return self.inner.ask(formula, cancellation)
