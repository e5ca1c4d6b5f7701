"""Human-readable rendering of terms, formulas and clauses."""

from typing import Optional

from folkit.core.clauses import Clause, DefiniteClause, CNFFormula
from folkit.core.logic import (
    Term, Formula, Literal, Equality, SkolemFunctionIdentifier, StandardisedVariableIdentifier,
)
from folkit.utils.config import get_config
from .labellers import Labeller, ByTypeLabeller, LabelSetLabeller, SubscriptSuffixLabeller


def default_labeller() -> Labeller:
    """Subscripted names for standardised variables, configured labels for Skolem functions."""
    return ByTypeLabeller({
        StandardisedVariableIdentifier: SubscriptSuffixLabeller(),
        SkolemFunctionIdentifier: LabelSetLabeller(get_config().get("formatting.skolem_labels")),
    })


class Formatter:
    """
    Formats terms, formulas, literals and clauses with logical symbols.

    Compound formulas are wrapped in square brackets so that precedence is
    never ambiguous. All output of one formatter shares a labelling scope,
    so an identifier is labelled the same way every time.

    Args:
        labeller: Labeller for identifiers; see default_labeller if omitted
    """

    def __init__(self, labeller: Optional[Labeller] = None):
        self.labelling_scope = (labeller or default_labeller()).make_labelling_scope()

    def format(self, item) -> str:
        if isinstance(item, DefiniteClause):
            return self._definite_clause(item)
        if isinstance(item, Clause):
            if item.is_empty:
                return "[]"
            return " ∨ ".join(self.format(literal) for literal in item)
        if isinstance(item, CNFFormula):
            return " ∧ ".join(f"[{self.format(clause)}]" for clause in item)
        if isinstance(item, Literal):
            return self._formula(item.to_formula())
        if isinstance(item, Formula):
            return self._formula(item)
        if isinstance(item, Term):
            return self._term(item)
        return self.labelling_scope.get_label(item)

    def _definite_clause(self, clause: DefiniteClause) -> str:
        if clause.is_fact:
            return self.format(clause.consequent)
        antecedents = " ∧ ".join(self.format(antecedent) for antecedent in clause.antecedents)
        return f"{antecedents} ⇒ {self.format(clause.consequent)}"

    def _formula(self, formula: Formula) -> str:
        kind = formula.kind
        if kind == "predicate":
            if isinstance(formula, Equality):
                return f"{self._term(formula.left)} = {self._term(formula.right)}"
            return self._application(formula)
        if kind == "negation":
            inner = self._formula(formula.formula)
            return f"¬[{inner}]" if isinstance(formula.formula, Equality) else f"¬{inner}"
        if kind == "conjunction":
            return f"[{self._formula(formula.left)} ∧ {self._formula(formula.right)}]"
        if kind == "disjunction":
            return f"[{self._formula(formula.left)} ∨ {self._formula(formula.right)}]"
        if kind == "implication":
            return f"[{self._formula(formula.antecedent)} ⇒ {self._formula(formula.consequent)}]"
        if kind == "equivalence":
            return f"[{self._formula(formula.left)} ⇔ {self._formula(formula.right)}]"
        if kind == "universal_quantification":
            return f"[∀ {self._term(formula.variable)}, {self._formula(formula.formula)}]"
        if kind == "existential_quantification":
            return f"[∃ {self._term(formula.variable)}, {self._formula(formula.formula)}]"
        raise TypeError(f"Unsupported formula {formula!r}")

    def _term(self, term: Term) -> str:
        if term.kind == "function":
            return self._application(term)
        return self.labelling_scope.get_label(term.identifier)

    def _application(self, node) -> str:
        label = self.labelling_scope.get_label(node.identifier)
        if not node.arguments:
            return label
        return f"{label}({', '.join(self._term(argument) for argument in node.arguments)})"
