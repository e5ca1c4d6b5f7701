"""Conversion of arbitrary formulas to conjunctive normal form."""

import logging
from typing import Dict, List

from folkit.core.logic import (
    Formula, Variable, Function, Negation, Conjunction, Disjunction,
    UniversalQuantification, ExistentialQuantification, Literal,
    StandardisedVariableIdentifier, SkolemFunctionIdentifier,
)
from folkit.core.clauses import Clause, CNFFormula
from folkit.core.transformations import FormulaTransformer


logger = logging.getLogger(__name__)


class VariableStandardiser(FormulaTransformer):
    """Give every quantified variable a fresh identity unique to this run.

    Variables that are not bound by any quantifier are treated as implicitly
    universally quantified over the whole formula. They are standardised once
    and recorded in ``free_variables`` in order of first appearance.
    """

    def __init__(self, original_formula: Formula):
        self.original_formula = original_formula
        self.free_variables: List[Variable] = []
        self._scope: Dict[Variable, Variable] = {}

    def _standardise(self, variable: Variable) -> Variable:
        return Variable(StandardisedVariableIdentifier(variable.identifier, self.original_formula))

    def _quantification(self, quantification, factory):
        variable = quantification.variable
        shadowed = self._scope.get(variable)
        standardised = self._scope[variable] = self._standardise(variable)
        formula = self.transform(quantification.formula)
        if shadowed is None:
            del self._scope[variable]
        else:
            self._scope[variable] = shadowed
        return factory(standardised, formula)

    def universal_quantification(self, quantification):
        return self._quantification(quantification, UniversalQuantification)

    def existential_quantification(self, quantification):
        return self._quantification(quantification, ExistentialQuantification)

    def variable(self, variable):
        if variable not in self._scope:
            standardised = self._standardise(variable)
            self._scope[variable] = standardised
            self.free_variables.append(standardised)
        return self._scope[variable]


class ImplicationEliminator(FormulaTransformer):
    """Rewrite A ⇒ B as ¬A ∨ B and A ⇔ B as (¬A ∨ B) ∧ (¬B ∨ A)."""

    def implication(self, implication):
        return Disjunction(
            Negation(self.transform(implication.antecedent)),
            self.transform(implication.consequent))

    def equivalence(self, equivalence):
        left = self.transform(equivalence.left)
        right = self.transform(equivalence.right)
        return Conjunction(
            Disjunction(Negation(left), right),
            Disjunction(Negation(right), left))


class NNFConverter(FormulaTransformer):
    """Push negations inwards until they apply only to atoms."""

    def implication(self, implication):
        return Disjunction(
            self.transform(Negation(implication.antecedent)),
            self.transform(implication.consequent))

    def equivalence(self, equivalence):
        left, right = equivalence.left, equivalence.right
        return Conjunction(
            Disjunction(self.transform(Negation(left)), self.transform(right)),
            Disjunction(self.transform(Negation(right)), self.transform(left)))

    def negation(self, negation):
        formula = negation.formula
        if formula.kind == "predicate":
            return negation
        if formula.kind == "negation":
            return self.transform(formula.formula)
        if formula.kind == "conjunction":
            return Disjunction(
                self.transform(Negation(formula.left)),
                self.transform(Negation(formula.right)))
        if formula.kind == "disjunction":
            return Conjunction(
                self.transform(Negation(formula.left)),
                self.transform(Negation(formula.right)))
        if formula.kind == "implication":
            return Conjunction(
                self.transform(formula.antecedent),
                self.transform(Negation(formula.consequent)))
        if formula.kind == "equivalence":
            return Conjunction(
                Disjunction(self.transform(formula.left), self.transform(formula.right)),
                Disjunction(
                    self.transform(Negation(formula.left)),
                    self.transform(Negation(formula.right))))
        if formula.kind == "universal_quantification":
            return ExistentialQuantification(
                formula.variable, self.transform(Negation(formula.formula)))
        if formula.kind == "existential_quantification":
            return UniversalQuantification(
                formula.variable, self.transform(Negation(formula.formula)))
        raise TypeError(f"Unexpected formula {formula!r}")


class Skolemiser(FormulaTransformer):
    """Replace existentially quantified variables with Skolem functions.

    Each Skolem function takes as arguments the universally quantified
    variables in scope at the point of elimination, including any free
    variables of the original formula.
    """

    def __init__(self, original_formula: Formula, free_variables=()):
        self.original_formula = original_formula
        self._universals: List[Variable] = list(free_variables)
        self._replacements: Dict[Variable, Function] = {}

    def universal_quantification(self, quantification):
        self._universals.append(quantification.variable)
        formula = self.transform(quantification.formula)
        self._universals.pop()
        return UniversalQuantification(quantification.variable, formula)

    def existential_quantification(self, quantification):
        variable = quantification.variable
        identifier = SkolemFunctionIdentifier(variable.identifier, self.original_formula)
        self._replacements[variable] = Function(identifier, *self._universals)
        formula = self.transform(quantification.formula)
        del self._replacements[variable]
        return formula

    def variable(self, variable):
        return self._replacements.get(variable, variable)


class UniversalQuantifierRemover(FormulaTransformer):
    def universal_quantification(self, quantification):
        return self.transform(quantification.formula)


class Distributor(FormulaTransformer):
    """Distribute ∨ over ∧, bottom-up, until no disjunction has a conjunction operand."""

    def disjunction(self, disjunction):
        return _distribute(self.transform(disjunction.left), self.transform(disjunction.right))


def _distribute(left, right):
    if isinstance(left, Conjunction):
        return Conjunction(_distribute(left.left, right), _distribute(left.right, right))
    if isinstance(right, Conjunction):
        return Conjunction(_distribute(left, right.left), _distribute(left, right.right))
    return Disjunction(left, right)


def extract_clauses(formula: Formula) -> List[Clause]:
    """Split a formula already in CNF into its clauses."""
    clauses = []
    conjuncts = [formula]
    while conjuncts:
        conjunct = conjuncts.pop()
        if isinstance(conjunct, Conjunction):
            conjuncts.extend((conjunct.right, conjunct.left))
            continue
        literals = []
        disjuncts = [conjunct]
        while disjuncts:
            disjunct = disjuncts.pop()
            if isinstance(disjunct, Disjunction):
                disjuncts.extend((disjunct.right, disjunct.left))
            else:
                literals.append(Literal.from_formula(disjunct))
        clauses.append(Clause(*literals))
    return clauses


def to_cnf(formula: Formula) -> CNFFormula:
    """Convert a formula to an equisatisfiable conjunction of clauses.

    Args:
        formula: Any well-formed formula

    Returns:
        The clauses, with freshly standardised variables and Skolem functions
        unique to this call
    """
    standardiser = VariableStandardiser(formula)
    converted = standardiser.transform(formula)
    converted = ImplicationEliminator().transform(converted)
    converted = NNFConverter().transform(converted)
    converted = Skolemiser(formula, standardiser.free_variables).transform(converted)
    converted = UniversalQuantifierRemover().transform(converted)
    converted = Distributor().transform(converted)
    cnf = CNFFormula(*extract_clauses(converted))
    logger.debug(f"Converted {formula!r} to CNF: {cnf!r}")
    return cnf
