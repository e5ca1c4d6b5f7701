"""Semi-naive forward chaining over definite clauses."""

import logging
import threading
from collections import deque
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from folkit.core.clauses import DefiniteClause
from folkit.core.logic import Literal, Predicate
from folkit.core.substitution import Substitution
from folkit.core.unification import unify, match
from folkit.exceptions import QueryNotCompleteError, NegativeResultExplanationError
from folkit.inference.base import Query, raise_if_cancelled
from .base import ChainingKnowledgeBase
from .clause_store import ClauseStore


logger = logging.getLogger(__name__)


class ForwardChainingProofStep:
    """Application of a rule to known facts."""

    def __init__(self, rule: DefiniteClause, known_predicates: Tuple[Predicate, ...] = (),
                 unifier: Optional[Substitution] = None):
        self.rule = rule
        self.known_predicates = tuple(known_predicates)
        self.unifier = unifier or Substitution()

    def extend(self, known_predicate: Predicate, unifier: Substitution) -> 'ForwardChainingProofStep':
        return ForwardChainingProofStep(self.rule, self.known_predicates + (known_predicate,), unifier)

    @property
    def inferred_predicate(self) -> Predicate:
        return self.unifier.apply_to(self.rule.consequent)

    def __repr__(self):
        return f"ForwardChainingProofStep({self.rule!r}, {self.known_predicates!r}, {self.unifier!r})"


class ForwardChainingQuery(Query):
    """
    Forward chaining until the goal is inferred or nothing new can be.

    Runs against its own copy of the clause store, so facts inferred while
    answering one query are not added to the knowledge base. After the first
    iteration, only rules with an antecedent that unifies with a fact
    inferred in the previous iteration are examined.
    """

    def __init__(self, goal: Predicate, clause_store: ClauseStore):
        super().__init__()
        self.goal = goal
        self.clause_store = clause_store
        self.proof: Dict[Predicate, ForwardChainingProofStep] = {}
        self._proven_goal: Optional[Predicate] = None

    def execute(self, cancellation: Optional[threading.Event] = None) -> bool:
        self._begin_execution()

        for fact in self._known_facts(self.goal, Substitution()):
            self._proven_goal = fact
            self._result = True
            return True

        new_facts = [clause.consequent for clause in self.clause_store if clause.is_fact]
        iteration = 0
        while new_facts:
            raise_if_cancelled(cancellation)
            iteration += 1
            rules = list(self._applicable_rules(new_facts))
            new_facts = []

            for rule in rules:
                raise_if_cancelled(cancellation)
                for step in self._match_antecedents(rule):
                    inferred = step.inferred_predicate
                    if self._is_known(inferred) or any(match(fact, inferred) is not None for fact in new_facts):
                        continue

                    self.proof[inferred] = step
                    logger.debug(f"Inferred {inferred!r} by {rule!r}")
                    if unify(inferred, self.goal) is not None:
                        self._proven_goal = inferred
                        self._result = True
                        return True
                    new_facts.append(inferred)

            for fact in new_facts:
                self.clause_store.add(DefiniteClause(Literal(fact)))
            logger.debug(f"Forward chaining iteration {iteration}: {len(new_facts)} new fact(s)")

        self._result = False
        return False

    def _known_facts(self, predicate: Predicate, constraints: Substitution) -> Iterator[Predicate]:
        for clause, _ in self.clause_store.get_clause_applications(predicate, constraints):
            if clause.is_fact:
                yield clause.consequent

    def _is_known(self, predicate: Predicate) -> bool:
        return any(
            clause.is_fact and match(clause.consequent, predicate) is not None
            for clause, _ in self.clause_store.get_clause_applications(predicate))

    def _applicable_rules(self, new_facts: List[Predicate]) -> Iterator[DefiniteClause]:
        for rule in self.clause_store:
            if rule.is_fact:
                continue
            rule = rule.restandardise()
            if any(unify(antecedent, fact) is not None for antecedent in rule.antecedents for fact in new_facts):
                yield rule

    def _match_antecedents(self, rule: DefiniteClause) -> Iterator[ForwardChainingProofStep]:
        return self._match_conjuncts(rule.antecedents, ForwardChainingProofStep(rule))

    def _match_conjuncts(self, conjuncts: Sequence[Predicate], step: ForwardChainingProofStep):
        if not conjuncts:
            yield step
            return

        for clause, unifier in self.clause_store.get_clause_applications(conjuncts[0], step.unifier):
            if clause.is_fact:
                yield from self._match_conjuncts(conjuncts[1:], step.extend(clause.consequent, unifier))

    @property
    def useful_predicates(self) -> List[Predicate]:
        """Inferred predicates that contributed to proving the goal, roughly in the order they were inferred."""
        if not self.is_complete:
            raise QueryNotCompleteError()
        if not self.result:
            raise NegativeResultExplanationError()

        ordered: List[Predicate] = []
        queue = deque([self._proven_goal])
        while queue:
            predicate = queue.popleft()
            if predicate in ordered:
                ordered.remove(predicate)
            step = self.proof.get(predicate)
            if step is not None:
                queue.extend(step.known_predicates)
                ordered.append(predicate)

        ordered.reverse()
        return ordered

    def explain(self, formatter=None) -> str:
        """Human-readable account of the inferences that led to the goal."""
        from folkit.formatting import Formatter, CNFExplainer, find_normalisation_terms

        formatter = formatter or Formatter()
        explainer = CNFExplainer(formatter)
        useful = self.useful_predicates

        def source(predicate):
            return f"#{useful.index(predicate):02d}" if predicate in useful else " KB"

        lines = []
        for i, predicate in enumerate(useful):
            step = self.proof[predicate]
            lines.append(f"#{i:02d}: {formatter.format(predicate)}")
            lines.append(f"     By Rule : {formatter.format(step.rule)}")
            for known in step.known_predicates:
                lines.append(f"     From {source(known)}: {formatter.format(known)}")
            bindings = ", ".join(
                f"{formatter.format(variable)}/{formatter.format(term)}" for variable, term in step.unifier.items())
            lines.append(f"     Using   : {{{bindings}}}")
            for term in find_normalisation_terms(*step.known_predicates, predicate):
                lines.append(f"     ..where {formatter.format(term)} is {explainer.explain(term)}")
            lines.append("")

        return "\n".join(lines)


class ForwardChainingKnowledgeBase(ChainingKnowledgeBase):
    """Chaining knowledge base that answers queries by forward chaining."""

    def _make_query(self, goal: Predicate) -> ForwardChainingQuery:
        return ForwardChainingQuery(goal, self.clause_store.copy())
