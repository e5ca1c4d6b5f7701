"""Recursive transformers and visitors over formulas and terms.

Both classes dispatch on the ``kind`` of each node, in the same way a lark
``Transformer`` dispatches on rule names: a subclass overrides the methods for
the node kinds it is interested in and inherits the structural recursion for
everything else.
"""

from typing import Dict

from .logic import (
    Variable, Constant, Negation, Conjunction,
    Disjunction, Implication, Equivalence, UniversalQuantification,
    ExistentialQuantification, Literal,
)


class FormulaTransformer:
    """Rebuilds a formula or term bottom-up."""

    def transform(self, node):
        if isinstance(node, Literal):
            return Literal(self.transform(node.predicate), node.polarity)
        return getattr(self, node.kind)(node)

    def variable(self, variable):
        return variable

    def constant(self, constant):
        return constant

    def function(self, function):
        return function.with_arguments([self.transform(argument) for argument in function.arguments])

    def predicate(self, predicate):
        return predicate.with_arguments([self.transform(argument) for argument in predicate.arguments])

    def negation(self, negation):
        return Negation(self.transform(negation.formula))

    def conjunction(self, conjunction):
        return Conjunction(self.transform(conjunction.left), self.transform(conjunction.right))

    def disjunction(self, disjunction):
        return Disjunction(self.transform(disjunction.left), self.transform(disjunction.right))

    def implication(self, implication):
        return Implication(self.transform(implication.antecedent), self.transform(implication.consequent))

    def equivalence(self, equivalence):
        return Equivalence(self.transform(equivalence.left), self.transform(equivalence.right))

    def universal_quantification(self, quantification):
        return UniversalQuantification(
            self.transform(quantification.variable), self.transform(quantification.formula))

    def existential_quantification(self, quantification):
        return ExistentialQuantification(
            self.transform(quantification.variable), self.transform(quantification.formula))


class FormulaVisitor:
    """Walks a formula or term top-down, calling the method named after each node's kind if defined."""

    def visit(self, node):
        stack = [node]
        while stack:
            current = stack.pop()
            if isinstance(current, Literal):
                current = current.predicate
            callback = getattr(self, current.kind, None)
            if callback is not None:
                callback(current)
            stack.extend(reversed(current.children))


class VariableOrdinaliser(FormulaTransformer):
    def __init__(self):
        self.ordinals: Dict[Variable, Variable] = {}

    def variable(self, variable):
        if variable not in self.ordinals:
            self.ordinals[variable] = Variable(len(self.ordinals))
        return self.ordinals[variable]


def ordinalise(node):
    """Rename variables to Variable(0), Variable(1), ... in order of first appearance."""
    return VariableOrdinaliser().transform(node)


class _Substituter(FormulaTransformer):
    def __init__(self, bindings):
        self.bindings = bindings

    def variable(self, variable):
        bound = self.bindings.get(variable)
        if bound is None or bound == variable:
            return variable
        return self.transform(bound)

    def constant(self, constant):
        return constant

    def _scoped(self, quantification, factory):
        if quantification.variable not in self.bindings:
            return factory(quantification.variable, self.transform(quantification.formula))
        # The quantified variable shadows any binding for it
        inner = _Substituter({
            variable: term for variable, term in self.bindings.items()
            if variable != quantification.variable
        })
        return factory(quantification.variable, inner.transform(quantification.formula))

    def universal_quantification(self, quantification):
        return self._scoped(quantification, UniversalQuantification)

    def existential_quantification(self, quantification):
        return self._scoped(quantification, ExistentialQuantification)


def substitute(node, bindings):
    """Apply variable bindings to a term, formula or literal, following chains of bindings."""
    if isinstance(node, (Variable, Constant)) and not bindings:
        return node
    return _Substituter(bindings).transform(node)


__all__ = [
    'FormulaTransformer', 'FormulaVisitor', 'VariableOrdinaliser',
    'ordinalise', 'substitute',
]
