"""Goal-directed (SLD-style) backward chaining."""

import logging
import threading
from typing import Dict, Iterator, Optional, Sequence

from folkit.core.clauses import DefiniteClause
from folkit.core.logic import Predicate
from folkit.core.substitution import Substitution
from folkit.exceptions import QueryNotCompleteError, NegativeResultExplanationError
from folkit.inference.base import Query, raise_if_cancelled
from .base import ChainingKnowledgeBase
from .clause_store import ClauseStore


logger = logging.getLogger(__name__)


class BackwardChainingProof:
    """A single proof: one unifier for the whole proof plus the clause used for each proven predicate."""

    def __init__(self, unifier: Optional[Substitution] = None,
                 steps: Optional[Dict[Predicate, DefiniteClause]] = None):
        self.unifier = unifier or Substitution()
        self.steps: Dict[Predicate, DefiniteClause] = dict(steps or {})

    def apply_unifier_to(self, predicate: Predicate) -> Predicate:
        return self.unifier.apply_to(predicate)

    def with_unifier(self, unifier: Substitution) -> 'BackwardChainingProof':
        return BackwardChainingProof(unifier, self.steps)

    def extend(self, predicate: Predicate, clause: DefiniteClause) -> 'BackwardChainingProof':
        steps = dict(self.steps)
        steps[predicate] = clause
        return BackwardChainingProof(self.unifier, steps)

    def explain(self, formatter=None) -> str:
        from folkit.formatting import Formatter, CNFExplainer, find_normalisation_terms

        formatter = formatter or Formatter()
        predicates = list(self.steps)
        lines = []
        for i, (predicate, clause) in enumerate(self.steps.items()):
            lines.append(f"Step #{i:02d}: {formatter.format(predicate)}")
            lines.append(f"  By Rule: {formatter.format(clause)}")
            for antecedent in clause.antecedents:
                antecedent = self.apply_unifier_to(antecedent)
                index = predicates.index(antecedent) if antecedent in predicates else -1
                lines.append(f"  And Step #{index:02d}: {formatter.format(antecedent)}")
            lines.append("")

        bindings = ", ".join(
            f"{formatter.format(variable)}/{formatter.format(term)}" for variable, term in self.unifier.items())
        lines.append(f"Using: {{{bindings}}}")

        terms = find_normalisation_terms(*predicates)
        if terms:
            explainer = CNFExplainer(formatter)
            lines.append("")
            lines.append("Where:")
            for term in terms:
                lines.append(f"  {formatter.format(term)} is {explainer.explain(term)}")

        return "\n".join(lines) + "\n"


class BackwardChainingQuery(Query):
    """
    Depth-first search for proofs of a goal.

    ``proofs`` and ``substitutions`` are lazy and possibly infinite; each
    access starts a fresh search. ``execute`` only searches for the first proof.
    """

    def __init__(self, goal: Predicate, clause_store: ClauseStore):
        super().__init__()
        self.goal = goal
        self.clause_store = clause_store
        self.proof: Optional[BackwardChainingProof] = None

    def execute(self, cancellation: Optional[threading.Event] = None) -> bool:
        self._begin_execution()
        self.proof = next(self.iter_proofs(cancellation), None)
        self._result = self.proof is not None
        logger.debug(f"Backward chaining for {self.goal!r} finished: {self._result}")
        return self._result

    def iter_proofs(self, cancellation: Optional[threading.Event] = None) -> Iterator[BackwardChainingProof]:
        return self._prove_predicate(self.goal, BackwardChainingProof(), cancellation)

    @property
    def proofs(self) -> Iterator[BackwardChainingProof]:
        return self.iter_proofs()

    def iter_substitutions(self, cancellation: Optional[threading.Event] = None) -> Iterator[Substitution]:
        """Distinct bindings of the goal's own variables, one per proof that yields new bindings."""
        variables = self.goal.variables()
        seen = set()
        for proof in self.iter_proofs(cancellation):
            substitution = proof.unifier.restrict(variables)
            if substitution not in seen:
                seen.add(substitution)
                yield substitution

    @property
    def substitutions(self) -> Iterator[Substitution]:
        return self.iter_substitutions()

    def _prove_predicate(self, goal: Predicate, proof: BackwardChainingProof, cancellation):
        for clause, unifier in self.clause_store.get_clause_applications(goal, proof.unifier):
            raise_if_cancelled(cancellation)
            for clause_proof in self._prove_predicates(clause.antecedents, proof.with_unifier(unifier), cancellation):
                yield clause_proof.extend(clause_proof.apply_unifier_to(goal), clause)

    def _prove_predicates(self, goals: Sequence[Predicate], proof: BackwardChainingProof, cancellation):
        if not goals:
            yield proof
            return

        raise_if_cancelled(cancellation)
        for first_goal_proof in self._prove_predicate(proof.apply_unifier_to(goals[0]), proof, cancellation):
            yield from self._prove_predicates(goals[1:], first_goal_proof, cancellation)

    def explain(self, formatter=None) -> str:
        """Explanation of the proof found by ``execute``."""
        if not self.is_complete:
            raise QueryNotCompleteError()
        if not self.result:
            raise NegativeResultExplanationError()
        return self.proof.explain(formatter)


class BackwardChainingKnowledgeBase(ChainingKnowledgeBase):
    """Chaining knowledge base that answers queries by backward chaining."""

    def _make_query(self, goal: Predicate) -> BackwardChainingQuery:
        return BackwardChainingQuery(goal, self.clause_store)
