"""Tests for conversion to conjunctive normal form."""

import unittest

from domains import Crime
from folkit.core.logic import (
    Variable, Constant, Function, Predicate, Literal, Negation, Implication, Equivalence,
    StandardisedVariableIdentifier, SkolemFunctionIdentifier, for_all, there_exists, all_of, any_of,
)
from folkit.core.clauses import Clause, CNFFormula
from folkit.normalisation import to_cnf


x, y = Variable("x"), Variable("y")
a, b = Constant("a"), Constant("b")
P, Q, R = Predicate("P"), Predicate("Q"), Predicate("R")


def positive(predicate):
    return Literal(predicate)


def negative(predicate):
    return Literal(predicate, False)


def is_skolem(term):
    return isinstance(term, Function) and isinstance(term.identifier, SkolemFunctionIdentifier)


class TestPropositional(unittest.TestCase):
    """Test conversion of formulas without variables."""

    def test_atom(self):
        """An atom becomes a single unit clause."""
        self.assertEqual(to_cnf(P), CNFFormula(Clause(positive(P))))

    def test_implication(self):
        """Test that P ⇒ Q becomes ¬P ∨ Q."""
        self.assertEqual(to_cnf(Implication(P, Q)), CNFFormula(Clause(negative(P), positive(Q))))

    def test_equivalence(self):
        """Test that P ⇔ Q becomes two clauses."""
        self.assertEqual(
            to_cnf(Equivalence(P, Q)),
            CNFFormula(Clause(negative(P), positive(Q)), Clause(negative(Q), positive(P))))

    def test_de_morgan(self):
        """Negations are pushed inwards."""
        self.assertEqual(to_cnf(Negation(all_of(P, Q))), CNFFormula(Clause(negative(P), negative(Q))))
        self.assertEqual(
            to_cnf(Negation(any_of(P, Q))),
            CNFFormula(Clause(negative(P)), Clause(negative(Q))))
        self.assertEqual(to_cnf(Negation(Negation(P))), CNFFormula(Clause(positive(P))))

    def test_negated_implication_and_equivalence(self):
        """Test negations of implications and equivalences."""
        self.assertEqual(
            to_cnf(Negation(Implication(P, Q))),
            CNFFormula(Clause(positive(P)), Clause(negative(Q))))
        # Distribution also produces the tautologies P ∨ ¬P and Q ∨ ¬Q
        clauses = set(to_cnf(Negation(Equivalence(P, Q))))
        self.assertIn(Clause(positive(P), positive(Q)), clauses)
        self.assertIn(Clause(negative(P), negative(Q)), clauses)
        self.assertEqual(len(clauses), 4)

    def test_distribution(self):
        """Disjunction distributes over conjunction on either side."""
        self.assertEqual(
            to_cnf(any_of(P, all_of(Q, R))),
            CNFFormula(Clause(positive(P), positive(Q)), Clause(positive(P), positive(R))))
        self.assertEqual(
            to_cnf(any_of(all_of(P, Q), all_of(R, Predicate("S")))),
            CNFFormula(
                Clause(positive(P), positive(R)), Clause(positive(P), positive(Predicate("S"))),
                Clause(positive(Q), positive(R)), Clause(positive(Q), positive(Predicate("S")))))

    def test_result_has_no_connectives_left(self):
        """Every literal in the output wraps an atom."""
        formula = Negation(Equivalence(Implication(P, Q), any_of(Negation(R), all_of(P, Q))))
        for clause in to_cnf(formula):
            for literal in clause:
                self.assertIsInstance(literal.predicate, Predicate)


class TestQuantifiers(unittest.TestCase):
    """Test standardisation and Skolemisation."""

    def test_universal_variables_are_standardised(self):
        """Universally quantified variables become fresh standardised variables."""
        (clause,) = to_cnf(for_all(x, Predicate("P", x)))
        (literal,) = clause
        (variable,) = literal.variables()
        self.assertIsInstance(variable.identifier, StandardisedVariableIdentifier)
        self.assertEqual(variable.identifier.original_identifier, "x")
        self.assertNotEqual(variable, x)

    def test_standardisation_is_distinct_per_call(self):
        """Converting the same formula twice never shares variables."""
        formula = for_all(x, Predicate("P", x))
        first = next(iter(to_cnf(formula))).variables()
        second = next(iter(to_cnf(formula))).variables()
        self.assertTrue(first.isdisjoint(second))

    def test_same_variable_name_in_different_scopes(self):
        """Separately quantified variables with the same name are kept apart."""
        (clause,) = to_cnf(any_of(for_all(x, Predicate("P", x)), for_all(x, Predicate("Q", x))))
        self.assertEqual(len(clause.variables()), 2)

    def test_existential_becomes_skolem_constant(self):
        """An existential outside any universal becomes a nullary Skolem function."""
        (clause,) = to_cnf(there_exists(x, Predicate("P", x)))
        (literal,) = clause
        (term,) = literal.predicate.arguments
        self.assertTrue(is_skolem(term))
        self.assertEqual(term.arguments, ())
        self.assertEqual(term.identifier.standardised_variable_identifier.original_identifier, "x")

    def test_skolem_function_takes_enclosing_universals(self):
        """A Skolem function's arguments are the universals in scope."""
        (clause,) = to_cnf(for_all(x, there_exists(y, Predicate("P", x, y))))
        (literal,) = clause
        first, second = literal.predicate.arguments
        self.assertIsInstance(first, Variable)
        self.assertTrue(is_skolem(second))
        self.assertEqual(second.arguments, (first,))

    def test_negated_universal_is_skolemised(self):
        """¬∀x P(x) is an existential once negations are pushed inwards."""
        (clause,) = to_cnf(Negation(for_all(x, Predicate("P", x))))
        (literal,) = clause
        self.assertTrue(literal.is_negated)
        self.assertTrue(is_skolem(literal.predicate.arguments[0]))

    def test_free_variables_are_universal(self):
        """Free variables are treated as universally quantified and feed Skolem functions."""
        (clause,) = to_cnf(there_exists(y, Predicate("P", x, y)))
        (literal,) = clause
        first, second = literal.predicate.arguments
        self.assertIsInstance(first.identifier, StandardisedVariableIdentifier)
        self.assertTrue(is_skolem(second))
        self.assertEqual(second.arguments, (first,))

    def test_skolem_functions_are_distinct_per_call(self):
        """Test that Skolem functions from separate conversions differ."""
        formula = there_exists(x, Predicate("P", x))
        self.assertNotEqual(to_cnf(formula), to_cnf(formula))

    def test_everyone_who_loves_all_animals_is_loved(self):
        """∀x [∀y Animal(y) ⇒ Loves(x,y)] ⇒ [∃y Loves(y,x)] yields two clauses."""
        def animal(term):
            return Predicate("Animal", term)

        def loves(lover, loved):
            return Predicate("Loves", lover, loved)

        formula = for_all(x, Implication(
            for_all(y, Implication(animal(y), loves(x, y))),
            there_exists(y, loves(y, x))))
        cnf = to_cnf(formula)
        self.assertEqual(len(cnf), 2)

        first, second = cnf
        shared = set(first) & set(second)
        self.assertEqual(len(shared), 1)
        (loved,) = shared
        lover, person = loved.predicate.arguments
        self.assertTrue(loved.is_positive)
        self.assertTrue(is_skolem(lover))
        self.assertEqual(lover.arguments, (person,))

        (animal_literal,) = set(first) - shared
        (not_loves,) = set(second) - shared
        self.assertEqual(animal_literal.predicate.identifier, "Animal")
        self.assertTrue(animal_literal.is_positive)
        self.assertEqual(not_loves.predicate.identifier, "Loves")
        self.assertTrue(not_loves.is_negated)

        (animal,) = animal_literal.predicate.arguments
        self.assertTrue(is_skolem(animal))
        self.assertEqual(animal.arguments, (person,))
        self.assertEqual(not_loves.predicate.arguments, (person, animal))
        self.assertNotEqual(animal.identifier, lover.identifier)

    def test_crime_axioms_are_definite(self):
        """The crime domain converts to definite clauses only."""
        for axiom in Crime.axioms():
            for clause in to_cnf(axiom):
                self.assertTrue(clause.is_definite, clause)


if __name__ == '__main__':
    unittest.main()
