"""Tests for resolution refutation."""

import threading
import unittest

import networkx as nx

from domains import Crime, Kinship
from folkit import entails
from folkit.core.clauses import Clause
from folkit.core.logic import Variable, Constant, Function, Predicate, Literal, Implication, for_all
from folkit.exceptions import (
    QueryNotCompleteError, QueryAlreadyExecutedError, QueryCancelledError, NegativeResultExplanationError,
)
from folkit.inference.resolution import (
    ResolutionKnowledgeBase, resolve, get_strategy, list_strategies, DelegateResolutionStrategy,
)


X, Y = Variable("X"), Variable("Y")
a, b = Constant("a"), Constant("b")


def p(*arguments):
    return Predicate("P", *arguments)


def q(*arguments):
    return Predicate("Q", *arguments)


class TestResolve(unittest.TestCase):
    """Test binary resolution of clause pairs."""

    def test_complementary_units_give_empty_clause(self):
        """Test resolving P(X) with ¬P(a)."""
        (resolution,) = resolve(Clause(Literal(p(X))), Clause(Literal(p(a), False)))
        self.assertTrue(resolution.resolvent.is_empty)
        self.assertEqual(resolution.substitution.apply_to(X), a)

    def test_remaining_literals_are_kept(self):
        """The unifier is applied to the literals that were not resolved upon."""
        (resolution,) = resolve(
            Clause(Literal(p(X), False), Literal(q(X))),
            Clause(Literal(p(a))))
        self.assertEqual(resolution.resolvent, Clause(Literal(q(a))))

    def test_same_literal_in_both_parents(self):
        """A literal resolved upon in one parent survives if it also occurs in the other."""
        resolutions = list(resolve(
            Clause(Literal(p(a))),
            Clause(Literal(p(a), False), Literal(p(X)))))
        self.assertEqual([r.resolvent for r in resolutions], [Clause(Literal(p(X)))])

    def test_no_complementary_literals(self):
        """Test that clauses without complementary literals do not resolve."""
        self.assertEqual(list(resolve(Clause(Literal(p(a))), Clause(Literal(p(b), False)))), [])
        self.assertEqual(list(resolve(Clause(Literal(p(a))), Clause(Literal(q(a), False)))), [])

    def test_tautologies_are_dropped(self):
        """Resolvents containing complementary literals are not produced."""
        resolutions = list(resolve(
            Clause(Literal(p(a)), Literal(q(a))),
            Clause(Literal(p(a), False), Literal(q(a), False))))
        self.assertEqual(resolutions, [])

    def test_resolvent_is_factored(self):
        """Unifiable literals of the same polarity are merged."""
        (resolution,) = resolve(
            Clause(Literal(p(X)), Literal(q(X))),
            Clause(Literal(p(a), False), Literal(q(Y))))
        self.assertEqual(resolution.resolvent, Clause(Literal(q(a))))

    def test_clause_resolves_with_itself(self):
        """A clause paired with itself is renamed apart first."""
        clause = Clause(Literal(p(X), False), Literal(p(Function("f", X))))
        expected = Clause(Literal(p(Y), False), Literal(p(Function("f", Function("f", Y)))))
        resolutions = list(resolve(clause, clause))
        self.assertEqual(len(resolutions), 2)
        for resolution in resolutions:
            self.assertTrue(resolution.resolvent.is_variant_of(expected))
            self.assertIs(resolution.clause2, clause)

    def test_parents_sharing_variables(self):
        """Shared variables do not constrain the unifier."""
        first = Clause(Literal(p(X)), Literal(q(X)))
        second = Clause(Literal(p(Function("f", X)), False), Literal(Predicate("R", X)))
        (resolution,) = resolve(first, second)
        self.assertTrue(resolution.resolvent.is_variant_of(
            Clause(Literal(q(Function("f", Y))), Literal(Predicate("R", Y)))))
        self.assertFalse(resolution.resolvent.variables() & first.variables())


class TestStrategies(unittest.TestCase):
    """Test the strategy registry."""

    def test_default_strategies_are_registered(self):
        """Test that every built-in strategy is available by name."""
        for name in ["fifo", "unit_preference", "unit_resolution", "total_literal_count_minimisation"]:
            self.assertIn(name, list_strategies())
            self.assertIsInstance(get_strategy(name), DelegateResolutionStrategy)

    def test_strategies_are_fresh(self):
        """Each lookup returns an independent strategy."""
        first = get_strategy("fifo")
        first.add_clause(Clause(Literal(p(a))))
        self.assertEqual(get_strategy("fifo").clauses, [])

    def test_unknown_strategy(self):
        """Test that unknown strategy names are rejected."""
        with self.assertRaises(ValueError):
            get_strategy("breadth_first_search")

    def test_default_from_config(self):
        """The knowledge base uses the configured strategy by default."""
        knowledge_base = ResolutionKnowledgeBase()
        self.assertIsInstance(knowledge_base.strategy, DelegateResolutionStrategy)
        self.assertIsNone(knowledge_base.strategy.priority)


class TestResolutionKnowledgeBase(unittest.TestCase):
    """Test asking the resolution knowledge base."""

    def make_crime_knowledge_base(self, strategy="fifo"):
        knowledge_base = ResolutionKnowledgeBase(strategy)
        knowledge_base.tell_all(Crime.axioms())
        return knowledge_base

    def test_crime_with_every_strategy(self):
        """Colonel West is a criminal, whichever strategy is used."""
        for name in list_strategies():
            with self.subTest(strategy=name):
                knowledge_base = self.make_crime_knowledge_base(name)
                self.assertTrue(knowledge_base.ask(Crime.is_criminal(Crime.west)))

    def test_not_entailed(self):
        """Test queries that do not follow from the knowledge base."""
        knowledge_base = ResolutionKnowledgeBase()
        knowledge_base.tell(p(a))
        self.assertFalse(knowledge_base.ask(p(b)))

        knowledge_base.tell(for_all(X, Implication(p(X), q(X))))
        self.assertTrue(knowledge_base.ask(q(a)))
        self.assertFalse(knowledge_base.ask(q(b)))

    def test_existential_query(self):
        """A query with a variable is read existentially through its negation."""
        knowledge_base = ResolutionKnowledgeBase()
        knowledge_base.tell_all(Kinship.axioms())
        self.assertTrue(knowledge_base.ask(Kinship.is_person(X)))
        self.assertTrue(knowledge_base.ask(Kinship.is_grandparent_of(Kinship.mary, Kinship.richard)))

    def test_duplicate_clauses_are_ignored(self):
        """Telling the same ground sentence twice adds its clause once."""
        knowledge_base = ResolutionKnowledgeBase()
        knowledge_base.tell(p(a))
        knowledge_base.tell(p(a))
        self.assertEqual(len(knowledge_base.strategy.clauses), 1)

    def test_entails(self):
        """Test the top-level entails helper."""
        self.assertTrue(entails(Crime.axioms(), Crime.is_criminal(Crime.west)))
        self.assertTrue(entails(Crime.axioms(), Crime.is_criminal(Crime.west), strategy="unit_preference"))
        with self.assertRaises(ValueError):
            entails(Crime.axioms(), Crime.is_criminal(Crime.west), method="tableaux")


class TestResolutionQuery(unittest.TestCase):
    """Test query lifecycle and proof explanation."""

    def setUp(self):
        self.knowledge_base = ResolutionKnowledgeBase()
        self.knowledge_base.tell_all(Crime.axioms())

    def test_result_before_execution(self):
        """The result is not available until the query completes."""
        query = self.knowledge_base.create_query(Crime.is_criminal(Crime.west))
        self.assertFalse(query.is_complete)
        with self.assertRaises(QueryNotCompleteError):
            query.result

    def test_execute_only_once(self):
        """Test that a query cannot be executed twice."""
        query = self.knowledge_base.create_query(Crime.is_criminal(Crime.west))
        self.assertTrue(query.execute())
        self.assertTrue(query.result)
        with self.assertRaises(QueryAlreadyExecutedError):
            query.execute()

    def test_step_by_step(self):
        """Stepping manually reaches the same result as executing."""
        query = self.knowledge_base.create_query(Crime.is_criminal(Crime.west))
        steps = 0
        while not query.is_complete:
            query.next_step()
            steps += 1
        self.assertTrue(query.result)
        self.assertGreater(steps, 0)

    def test_cancellation(self):
        """A set cancellation event stops execution."""
        query = self.knowledge_base.create_query(Crime.is_criminal(Crime.west))
        cancellation = threading.Event()
        cancellation.set()
        with self.assertRaises(QueryCancelledError):
            query.execute(cancellation)

    def test_discovered_clauses_end_with_empty_clause(self):
        """Test the clauses that contributed to the refutation."""
        query = self.knowledge_base.create_query(Crime.is_criminal(Crime.west))
        query.execute()
        discovered = query.discovered_clauses
        self.assertTrue(discovered[-1].is_empty)
        self.assertEqual(len(discovered), len(set(discovered)))
        for clause in discovered:
            self.assertIn(clause, query.steps)

    def test_to_graph(self):
        """The proof graph is a DAG ending in the empty clause."""
        query = self.knowledge_base.create_query(Crime.is_criminal(Crime.west))
        query.execute()
        graph = query.to_graph()
        self.assertIsInstance(graph, nx.DiGraph)
        self.assertTrue(nx.is_directed_acyclic_graph(graph))
        self.assertIn(Clause.EMPTY, graph)
        self.assertEqual(graph.out_degree(Clause.EMPTY), 0)
        self.assertEqual(graph.nodes[Clause.EMPTY]["source"], "derived")
        sources = {graph.nodes[node]["source"] for node in graph}
        self.assertIn("negated_query", sources)
        self.assertIn("knowledge_base", sources)

    def test_explain(self):
        """The explanation lists every discovered clause with its parents."""
        query = self.knowledge_base.create_query(Crime.is_criminal(Crime.west))
        query.execute()
        explanation = query.explain()
        self.assertIn("#00:", explanation)
        self.assertIn(": []", explanation)
        self.assertIn("¬Q", explanation)
        self.assertIn("KB", explanation)
        self.assertIn("Using", explanation)

    def test_explain_negative_result(self):
        """Negative results cannot be explained."""
        knowledge_base = ResolutionKnowledgeBase()
        knowledge_base.tell(p(a))
        query = knowledge_base.create_query(p(b))
        query.execute()
        self.assertFalse(query.result)
        with self.assertRaises(NegativeResultExplanationError):
            query.explain()

    def test_queries_do_not_change_knowledge_base(self):
        """Clauses derived while answering a query stay with that query."""
        before = len(self.knowledge_base.strategy.clauses)
        self.knowledge_base.ask(Crime.is_criminal(Crime.west))
        self.assertEqual(len(self.knowledge_base.strategy.clauses), before)


if __name__ == '__main__':
    unittest.main()
