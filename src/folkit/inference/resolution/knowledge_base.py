"""Knowledge base that answers queries by resolution refutation."""

import logging
from collections import deque
from typing import Dict, List, Optional, Union

import networkx as nx

from folkit.core.clauses import Clause
from folkit.core.logic import Formula, Negation
from folkit.exceptions import QueryNotCompleteError, NegativeResultExplanationError
from folkit.inference.base import KnowledgeBase, SteppableQuery
from folkit.normalisation.cnf import to_cnf
from folkit.utils.config import get_config
from .clause_resolution import ClauseResolution
from .strategies import DelegateResolutionStrategy, get_strategy


logger = logging.getLogger(__name__)


class ResolutionKnowledgeBase(KnowledgeBase):
    """
    Knowledge base that refutes the negation of each query.

    Args:
        strategy: A strategy instance, the name of a registered strategy, or
            None to use ``resolution.strategy`` from the configuration
    """

    def __init__(self, strategy: Optional[Union[str, DelegateResolutionStrategy]] = None):
        if strategy is None:
            strategy = get_config().get("resolution.strategy", "fifo")
        if isinstance(strategy, str):
            strategy = get_strategy(strategy)
        self.strategy = strategy

    def tell(self, formula: Formula):
        added = sum(1 for clause in to_cnf(formula) if self.strategy.add_clause(clause))
        logger.debug(f"Told {formula!r}: {added} new clause(s)")

    def create_query(self, formula: Formula) -> 'ResolutionQuery':
        logger.debug(f"Creating resolution query for {formula!r}")
        return ResolutionQuery(formula, self.strategy)


class ResolutionQuery(SteppableQuery):
    """
    Refutation of the negation of a query, one resolution per step.

    Each step dequeues one pending resolution. If its resolvent is the empty
    clause the query is entailed; if it is a clause not seen before it is added
    and paired with every known clause. When no resolutions remain the query
    is not entailed. On theories with function symbols this may never happen.
    """

    def __init__(self, query: Formula, strategy: DelegateResolutionStrategy):
        super().__init__()
        self.query = query
        self.negated_query = to_cnf(Negation(query))
        self.steps: Dict[Clause, ClauseResolution] = {}
        self._strategy = strategy.make_query_strategy(self)
        self._strategy.enqueue_initial_resolutions()
        if self._strategy.is_queue_empty:
            self._result = False

    def next_step(self) -> ClauseResolution:
        if self.is_complete:
            raise RuntimeError("Query is already complete")

        resolution = self._strategy.dequeue_resolution()
        resolvent = resolution.resolvent

        if resolvent not in self.steps and resolvent not in self._strategy:
            self.steps[resolvent] = resolution
            logger.debug(f"Resolved {resolution.clause1!r} and {resolution.clause2!r} to {resolvent!r}")
            if resolvent.is_empty:
                self._result = True
                return resolution
            self._strategy.enqueue_resolutions(resolvent)

        if self._strategy.is_queue_empty:
            self._result = False

        return resolution

    def _check_explainable(self):
        if not self.is_complete:
            raise QueryNotCompleteError()
        if not self.result:
            raise NegativeResultExplanationError()

    @property
    def discovered_clauses(self) -> List[Clause]:
        """Derived clauses that contributed to the refutation, roughly in the order they were found."""
        self._check_explainable()

        ordered: List[Clause] = []
        queue = deque([Clause.EMPTY])
        while queue:
            clause = queue.popleft()
            if clause in ordered:
                # Keep only the encounter closest to the empty clause
                ordered.remove(clause)
            resolution = self.steps.get(clause)
            if resolution is not None:
                queue.append(resolution.clause1)
                queue.append(resolution.clause2)
                ordered.append(clause)

        ordered.reverse()
        return ordered

    def _source(self, clause: Clause, discovered: List[Clause]) -> str:
        if clause in discovered:
            return f"#{discovered.index(clause):02d}"
        if clause in self.negated_query.clauses:
            return " ¬Q"
        return " KB"

    def explain(self, formatter=None) -> str:
        """
        Human-readable account of the refutation.

        Args:
            formatter: Formatter to use; a fresh one by default

        Returns:
            One paragraph per discovered clause, naming its parents, the
            unifier used and the origin of any Skolem functions or
            standardised variables involved
        """
        from folkit.formatting import Formatter, CNFExplainer, find_normalisation_terms

        formatter = formatter or Formatter()
        explainer = CNFExplainer(formatter)
        discovered = self.discovered_clauses

        lines = []
        for i, clause in enumerate(discovered):
            resolution = self.steps[clause]
            bindings = ", ".join(
                f"{formatter.format(variable)}/{formatter.format(term)}"
                for variable, term in resolution.substitution.items())

            lines.append(f"#{i:02d}: {formatter.format(clause)}")
            lines.append(f"     From {self._source(resolution.clause1, discovered)}: {formatter.format(resolution.clause1)}")
            lines.append(f"     And  {self._source(resolution.clause2, discovered)}: {formatter.format(resolution.clause2)}")
            lines.append(f"     Using   : {{{bindings}}}")
            for term in find_normalisation_terms(clause, resolution.clause1, resolution.clause2):
                lines.append(f"     ..where {formatter.format(term)} is {explainer.explain(term)}")
            lines.append("")

        return "\n".join(lines)

    def to_graph(self) -> nx.DiGraph:
        """Proof DAG: an edge from each parent clause to the resolvent it contributed to."""
        discovered = self.discovered_clauses
        graph = nx.DiGraph()
        for clause in discovered:
            resolution = self.steps[clause]
            graph.add_node(clause, source='derived')
            for parent in (resolution.clause1, resolution.clause2):
                if parent not in discovered:
                    graph.add_node(parent, source='negated_query' if parent in self.negated_query.clauses else 'knowledge_base')
                graph.add_edge(parent, clause, substitution=resolution.substitution)
        return graph
