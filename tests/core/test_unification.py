"""Tests for core.unification module."""

import unittest

from folkit.core.logic import Variable, Constant, Function, Predicate, Equality, Literal
from folkit.core.substitution import Substitution
from folkit.core.unification import (
    unify, try_update, occurs_check, match, is_instance_of, is_generalisation_of,
)


X, Y, Z = Variable("X"), Variable("Y"), Variable("Z")
a, b = Constant("a"), Constant("b")
john = Constant("John")


def knows(first, second):
    return Predicate("Knows", first, second)


def mother(term):
    return Function("Mother", term)


class TestUnify(unittest.TestCase):
    """Test most general unifiers."""

    def assertUnifies(self, first, second):
        unifier = unify(first, second)
        self.assertIsNotNone(unifier)
        self.assertEqual(unifier.apply_to(first), unifier.apply_to(second))
        return unifier

    def test_knows_examples(self):
        """Test the classic Knows(John, x) examples."""
        unifier = self.assertUnifies(knows(john, X), knows(john, Constant("Jane")))
        self.assertEqual(unifier, Substitution({X: Constant("Jane")}))

        unifier = self.assertUnifies(knows(john, X), knows(Y, Constant("Bill")))
        self.assertEqual(unifier, Substitution({Y: john, X: Constant("Bill")}))

        unifier = self.assertUnifies(knows(john, X), knows(Y, mother(Y)))
        self.assertEqual(unifier, Substitution({Y: john, X: mother(john)}))

        self.assertIsNone(unify(knows(john, X), knows(X, Constant("Elizabeth"))))

    def test_identical_terms(self):
        """Identical terms unify with the empty substitution."""
        self.assertEqual(unify(Function("f", X, a), Function("f", X, a)), Substitution())
        self.assertEqual(unify(X, X), Substitution())

    def test_occurs_check(self):
        """A variable never unifies with a term strictly containing it."""
        self.assertIsNone(unify(X, Function("f", X)))
        self.assertIsNone(unify(Function("g", X, X), Function("g", Y, Function("f", Y))))

    def test_clashes(self):
        """Different symbols, arities or kinds do not unify."""
        self.assertIsNone(unify(a, b))
        self.assertIsNone(unify(Function("f", X), Function("g", X)))
        self.assertIsNone(unify(Function("f", X), Function("f", X, Y)))
        self.assertIsNone(unify(a, Function("a")))
        self.assertIsNone(unify(Predicate("P", X), Predicate("Q", X)))

    def test_symmetry(self):
        """Unifiability does not depend on argument order."""
        pairs = [
            (Function("f", X, b), Function("f", a, Y)),
            (Function("f", X, X), Function("f", a, b)),
            (Function("f", X, Function("g", Y)), Function("f", Function("g", Z), X)),
            (X, Function("f", X)),
        ]
        for first, second in pairs:
            forward, backward = unify(first, second), unify(second, first)
            self.assertEqual(forward is None, backward is None)
            if forward is not None:
                self.assertEqual(forward.apply_to(first), forward.apply_to(second))
                self.assertEqual(backward.apply_to(first), backward.apply_to(second))

    def test_unifier_is_idempotent(self):
        """Applying the unifier twice changes nothing further."""
        first = Function("f", X, Function("g", Y), Y)
        second = Function("f", Function("g", Z), X, a)
        unifier = self.assertUnifies(first, second)
        once = unifier.apply_to(first)
        self.assertEqual(unifier.apply_to(once), once)
        self.assertEqual(once, Function("f", Function("g", a), Function("g", a), a))

    def test_unify_literals(self):
        """Literals unify only when their polarities agree."""
        positive = Literal(Predicate("P", X))
        self.assertEqual(unify(positive, Literal(Predicate("P", a))), Substitution({X: a}))
        self.assertIsNone(unify(positive, Literal(Predicate("P", a), False)))
        self.assertIsNone(unify(positive, Predicate("P", a)))

    def test_equality_unifies_in_either_order(self):
        """Equality atoms unify regardless of operand order."""
        unifier = unify(Equality(X, a), Equality(b, Y))
        self.assertIsNotNone(unifier)
        self.assertEqual(unifier.apply_to(Equality(X, a)), unifier.apply_to(Equality(b, Y)))

        unifier = unify(Equality(Function("f", X), a), Equality(a, Function("f", b)))
        self.assertEqual(unifier, Substitution({X: b}))


class TestTryUpdate(unittest.TestCase):
    """Test extending an existing unifier."""

    def test_extends_existing_bindings(self):
        """Existing bindings constrain the new unification."""
        existing = Substitution({X: a})
        self.assertIsNone(try_update(X, b, existing))
        extended = try_update(Function("f", X, Y), Function("f", a, b), existing)
        self.assertEqual(extended, Substitution({X: a, Y: b}))

    def test_does_not_modify_input(self):
        """A failed update leaves no partial bindings behind."""
        existing = Substitution({X: a})
        self.assertIsNone(try_update(Function("f", Y, X), Function("f", b, b), existing))
        self.assertEqual(existing, Substitution({X: a}))


class TestOccursCheck(unittest.TestCase):
    """Test the occurs check."""

    def test_occurs(self):
        """Test direct and nested occurrence."""
        self.assertTrue(occurs_check(X, X))
        self.assertTrue(occurs_check(X, Function("f", Function("g", X))))
        self.assertFalse(occurs_check(X, Function("f", Y, a)))

    def test_occurs_through_bindings(self):
        """Bindings are followed when supplied."""
        self.assertTrue(occurs_check(X, Function("f", Y), Substitution({Y: Function("g", X)})))
        self.assertFalse(occurs_check(X, Function("f", Y), Substitution({Y: a})))


class TestMatch(unittest.TestCase):
    """Test one-way matching."""

    def test_match_binds_only_generalisation_variables(self):
        """Variables of the instance behave like constants."""
        self.assertEqual(match(Predicate("P", X), Predicate("P", a)), Substitution({X: a}))
        self.assertIsNone(match(Predicate("P", a), Predicate("P", X)))
        self.assertEqual(match(Predicate("P", X), Predicate("P", Y)), Substitution({X: Y}))

    def test_match_respects_repeated_variables(self):
        """A repeated variable must match the same term everywhere."""
        self.assertIsNotNone(match(Predicate("P", X, X), Predicate("P", a, a)))
        self.assertIsNone(match(Predicate("P", X, X), Predicate("P", a, b)))

    def test_match_with_shared_variable_names(self):
        """Generalisation and instance may use the same variables."""
        self.assertEqual(match(Predicate("P", X, Y), Predicate("P", Y, X)), Substitution({X: Y, Y: X}))
        self.assertIsNone(match(Predicate("P", X, X), Predicate("P", X, Y)))

    def test_instance_and_generalisation_helpers(self):
        """Test is_instance_of and is_generalisation_of."""
        general, specific = Function("f", X), Function("f", a)
        self.assertTrue(is_instance_of(specific, general))
        self.assertFalse(is_instance_of(general, specific))
        self.assertTrue(is_generalisation_of(general, specific))
        self.assertFalse(is_generalisation_of(specific, general))


if __name__ == '__main__':
    unittest.main()
