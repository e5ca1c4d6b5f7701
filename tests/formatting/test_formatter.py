"""Tests for formatting, labelling and normalisation explanations."""

import unittest

from folkit.core.clauses import Clause, DefiniteClause, CNFFormula
from folkit.core.logic import (
    Variable, Constant, Function, Predicate, Equality, Negation, Conjunction, Disjunction,
    Implication, Equivalence, Literal, StandardisedVariableIdentifier, SkolemFunctionIdentifier,
    for_all, there_exists,
)
from folkit.exceptions import LabelSetExhaustedError
from folkit.formatting import (
    Formatter, CNFExplainer, Labeller, LabellingScope, LabelSetLabeller, SubscriptSuffixLabeller, ByTypeLabeller,
    find_normalisation_terms,
)
from folkit.normalisation import to_cnf


x = Variable("x")
a, b = Constant("a"), Constant("b")
P, Q = Predicate("P", x), Predicate("Q", x)


class TestFormatter(unittest.TestCase):
    """Test rendering with logical symbols."""

    def setUp(self):
        self.formatter = Formatter()

    def test_terms(self):
        """Test variables, constants and functions."""
        self.assertEqual(self.formatter.format(x), "x")
        self.assertEqual(self.formatter.format(a), "a")
        self.assertEqual(self.formatter.format(Function("f", x, Function("g", a))), "f(x, g(a))")

    def test_predicates(self):
        """Nullary predicates are shown without parentheses."""
        self.assertEqual(self.formatter.format(Predicate("Raining")), "Raining")
        self.assertEqual(self.formatter.format(Predicate("Loves", x, a)), "Loves(x, a)")
        self.assertEqual(self.formatter.format(Equality(x, a)), "x = a")

    def test_connectives(self):
        """Compound formulas are bracketed."""
        self.assertEqual(self.formatter.format(Negation(P)), "¬P(x)")
        self.assertEqual(self.formatter.format(Negation(Equality(a, b))), "¬[a = b]")
        self.assertEqual(self.formatter.format(Conjunction(P, Q)), "[P(x) ∧ Q(x)]")
        self.assertEqual(self.formatter.format(Disjunction(P, Q)), "[P(x) ∨ Q(x)]")
        self.assertEqual(self.formatter.format(Implication(P, Q)), "[P(x) ⇒ Q(x)]")
        self.assertEqual(self.formatter.format(Equivalence(P, Q)), "[P(x) ⇔ Q(x)]")
        self.assertEqual(self.formatter.format(Negation(Conjunction(P, Q))), "¬[P(x) ∧ Q(x)]")

    def test_quantifiers(self):
        """Test quantified formulas."""
        self.assertEqual(self.formatter.format(for_all(x, P)), "[∀ x, P(x)]")
        self.assertEqual(self.formatter.format(there_exists(x, Negation(P))), "[∃ x, ¬P(x)]")

    def test_literals_and_clauses(self):
        """Test literals, clauses and CNF formulas."""
        literal = Literal(Predicate("P", a), False)
        clause = Clause(literal, Literal(Predicate("Q", a)))
        self.assertEqual(self.formatter.format(literal), "¬P(a)")
        self.assertEqual(self.formatter.format(Literal(Equality(a, b), False)), "¬[a = b]")
        self.assertEqual(self.formatter.format(clause), "¬P(a) ∨ Q(a)")
        self.assertEqual(self.formatter.format(Clause.EMPTY), "[]")
        self.assertEqual(
            self.formatter.format(CNFFormula(clause, Clause(Literal(Predicate("R"))))),
            "[¬P(a) ∨ Q(a)] ∧ [R]")

    def test_definite_clauses(self):
        """Definite clauses are shown as implications."""
        rule = DefiniteClause(Literal(P, False), Literal(Q, False), Literal(Predicate("R", x)))
        self.assertEqual(self.formatter.format(rule), "P(x) ∧ Q(x) ⇒ R(x)")
        self.assertEqual(self.formatter.format(DefiniteClause(Literal(Predicate("R", a)))), "R(a)")

    def test_standardised_variables_are_subscripted(self):
        """Distinct standardisations of a variable get distinct labels."""
        first = Variable(StandardisedVariableIdentifier("x"))
        second = Variable(StandardisedVariableIdentifier("x"))
        self.assertEqual(self.formatter.format(Predicate("P", first, second, first)), "P(x₁, x₂, x₁)")

    def test_skolem_functions_use_label_set(self):
        """Skolem functions are labelled from the configured set, in order of appearance."""
        first = Function(SkolemFunctionIdentifier(StandardisedVariableIdentifier("y")))
        second = Function(SkolemFunctionIdentifier(StandardisedVariableIdentifier("y")), x)
        self.assertEqual(self.formatter.format(Predicate("P", second, first, second)), "P(A(x), B, A(x))")

    def test_labels_persist_across_calls(self):
        """One formatter labels an identifier the same way every time."""
        variable = Variable(StandardisedVariableIdentifier("x"))
        other = Variable(StandardisedVariableIdentifier("x"))
        self.assertEqual(self.formatter.format(other), "x₁")
        self.assertEqual(self.formatter.format(variable), "x₂")
        self.assertEqual(self.formatter.format(other), "x₁")


class TestLabellers(unittest.TestCase):
    """Test the labellers directly."""

    def test_label_set_is_exhausted(self):
        """Running out of labels raises LabelSetExhaustedError."""
        scope = LabelSetLabeller("AB").make_labelling_scope()
        self.assertEqual(scope.get_label("first"), "A")
        self.assertEqual(scope.get_label("second"), "B")
        self.assertEqual(scope.get_label("first"), "A")
        with self.assertRaises(LabelSetExhaustedError) as context:
            scope.get_label("third")
        self.assertEqual(context.exception.label_count, 2)

    def test_scopes_are_independent(self):
        """Test that each scope starts from the first label."""
        labeller = LabelSetLabeller(["alpha", "beta"])
        labeller.make_labelling_scope().get_label("first")
        self.assertEqual(labeller.make_labelling_scope().get_label("second"), "alpha")

    def test_subscript_suffix(self):
        """Test subscripts beyond nine."""
        scope = SubscriptSuffixLabeller().make_labelling_scope()
        identifiers = [StandardisedVariableIdentifier("y") for _ in range(11)]
        labels = [scope.get_label(identifier) for identifier in identifiers]
        self.assertEqual(labels[:2], ["y₁", "y₂"])
        self.assertEqual(labels[-2:], ["y₁₀", "y₁₁"])
        self.assertEqual(scope.get_label(identifiers[0]), "y₁")

    def test_by_type(self):
        """Identifiers of unregistered types fall back to their text."""
        scope = ByTypeLabeller({int: LabelSetLabeller("AB")}).make_labelling_scope()
        self.assertEqual(scope.get_label(7), "A")
        self.assertEqual(scope.get_label("name"), "name")

    def test_custom_labeller(self):
        """A formatter can be given its own labeller."""
        formatter = Formatter(ByTypeLabeller({str: LabelSetLabeller("XYZ")}))
        self.assertEqual(formatter.format(Predicate("Loves", a, b)), "X(Y, Z)")

    def test_incomplete_labellers_cannot_be_created(self):
        """Labellers and scopes must implement their abstract methods."""
        class NoScopes(Labeller):
            pass

        class NoLabels(LabellingScope):
            pass

        class Uppercase(LabellingScope):
            def get_label(self, identifier):
                return str(identifier).upper()

        with self.assertRaises(TypeError):
            NoScopes()
        with self.assertRaises(TypeError):
            NoLabels()
        self.assertEqual(Uppercase().get_label("loves"), "LOVES")


class TestCNFExplainer(unittest.TestCase):
    """Test explanations of standardised variables and Skolem functions."""

    def setUp(self):
        self.formatter = Formatter()
        self.explainer = CNFExplainer(self.formatter)
        self.formula = for_all(x, there_exists(Variable("y"), Predicate("Loves", x, Variable("y"))))
        (self.clause,) = to_cnf(self.formula)

    def test_find_normalisation_terms(self):
        """Skolem terms and standardised variables are found once each, in order."""
        (literal,) = self.clause
        variable, skolem = literal.predicate.arguments
        self.assertEqual(find_normalisation_terms(self.clause), [variable, skolem])
        self.assertEqual(find_normalisation_terms(literal, literal.predicate), [variable, skolem])
        self.assertEqual(find_normalisation_terms(Predicate("P", a, Variable("z"))), [])
        with self.assertRaises(TypeError):
            find_normalisation_terms(self.formula)

    def test_explain(self):
        """Each term is explained by the formula it came from."""
        (literal,) = self.clause
        variable, skolem = literal.predicate.arguments
        source = self.formatter.format(self.formula)
        self.assertEqual(self.explainer.explain(variable), f"a standardisation of x from {source}")
        self.assertEqual(self.explainer.explain(skolem), f"some y₁ from {source}")
        self.assertEqual(self.formatter.format(skolem), "A(x₁)")

    def test_explain_other_terms(self):
        """Test that ordinary terms cannot be explained."""
        with self.assertRaises(ValueError):
            self.explainer.explain(a)
        with self.assertRaises(ValueError):
            self.explainer.explain(x)


if __name__ == '__main__':
    unittest.main()
