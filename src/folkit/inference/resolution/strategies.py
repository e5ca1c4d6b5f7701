"""Resolution strategies: which clause pairs to resolve, and in which order."""

import heapq
import itertools
import logging
import threading
from functools import partial
from typing import Any, Callable, Dict, List, Optional

from folkit.core.clauses import Clause
from .clause_resolution import ClauseResolution, resolve


logger = logging.getLogger(__name__)


# Filters decide whether a resolution is queued at all
def no_filter(resolution: ClauseResolution) -> bool:
    return True


def unit_resolution(resolution: ClauseResolution) -> bool:
    return resolution.clause1.is_unit or resolution.clause2.is_unit


# Priorities: higher values are dequeued first, ties in insertion order
def unit_preference(resolution: ClauseResolution) -> int:
    return 1 if resolution.clause1.is_unit or resolution.clause2.is_unit else 0


def total_literal_count_minimisation(resolution: ClauseResolution) -> int:
    return -(len(resolution.clause1) + len(resolution.clause2))


class DelegateResolutionStrategy:
    """
    Resolution strategy configured by a filter and a priority function.

    Owns the clauses of the knowledge base. Each query gets its own
    QueryStrategy holding a copy of those clauses plus the clauses derived
    during that query.
    """

    def __init__(self,
                 clause_filter: Optional[Callable[[ClauseResolution], bool]] = None,
                 priority: Optional[Callable[[ClauseResolution], Any]] = None):
        self.clause_filter = clause_filter or no_filter
        self.priority = priority
        self._clauses: Dict[Clause, None] = {}
        self._lock = threading.Lock()

    def add_clause(self, clause: Clause) -> bool:
        """Add a knowledge base clause; returns False if it was already present."""
        with self._lock:
            if clause in self._clauses:
                return False
            self._clauses[clause] = None
            return True

    @property
    def clauses(self) -> List[Clause]:
        with self._lock:
            return list(self._clauses)

    def make_query_strategy(self, query) -> 'QueryStrategy':
        return QueryStrategy(self.clauses, query.negated_query.clauses, self.clause_filter, self.priority)


class QueryStrategy:
    """Priority queue of pending resolutions for a single query."""

    def __init__(self, clauses, negated_query_clauses, clause_filter, priority):
        self.clauses: Dict[Clause, None] = dict.fromkeys(clauses)
        self.negated_query_clauses = list(negated_query_clauses)
        self.clause_filter = clause_filter
        self.priority = priority
        self._queue = []
        self._counter = itertools.count()

    @property
    def is_queue_empty(self) -> bool:
        return not self._queue

    def __contains__(self, clause: Clause) -> bool:
        return clause in self.clauses

    def _enqueue(self, resolution: ClauseResolution):
        if not self.clause_filter(resolution):
            return
        priority = self.priority(resolution) if self.priority is not None else 0
        heapq.heappush(self._queue, (-priority, next(self._counter), resolution))

    def dequeue_resolution(self) -> ClauseResolution:
        return heapq.heappop(self._queue)[2]

    def enqueue_initial_resolutions(self):
        """Queue every pairing of the knowledge base and negated query clauses."""
        for clause in self.negated_query_clauses:
            self.clauses.setdefault(clause, None)

        clauses = list(self.clauses)
        for i, clause1 in enumerate(clauses):
            for clause2 in clauses[i:]:
                for resolution in resolve(clause1, clause2):
                    self._enqueue(resolution)

        logger.debug(f"Queued {len(self._queue)} initial resolutions over {len(clauses)} clauses")

    def enqueue_resolutions(self, clause: Clause) -> bool:
        """Add a derived clause and queue its resolutions; returns False if it was already known."""
        if clause in self.clauses:
            return False
        self.clauses[clause] = None
        for other in list(self.clauses):
            for resolution in resolve(clause, other):
                self._enqueue(resolution)
        return True


class StrategyRegistry:
    """Registry for managing named resolution strategies."""

    def __init__(self):
        self._strategies: Dict[str, Callable[..., DelegateResolutionStrategy]] = {}
        self._register_default_strategies()

    def _register_default_strategies(self):
        """Register default strategies."""
        self.register('fifo', DelegateResolutionStrategy)
        self.register('unit_preference', partial(DelegateResolutionStrategy, priority=unit_preference))
        self.register('unit_resolution', partial(DelegateResolutionStrategy, clause_filter=unit_resolution))
        self.register('total_literal_count_minimisation',
                      partial(DelegateResolutionStrategy, priority=total_literal_count_minimisation))

    def register(self, name: str, factory: Callable[..., DelegateResolutionStrategy]):
        """Register a new strategy factory."""
        self._strategies[name.lower()] = factory

    def create_strategy(self, name: str, **kwargs: Any) -> DelegateResolutionStrategy:
        """Create a strategy instance."""
        name = name.lower()
        if name not in self._strategies:
            raise ValueError(f"Unknown resolution strategy: {name}")

        return self._strategies[name](**kwargs)

    def list_strategies(self) -> List[str]:
        """List available strategy names."""
        return list(self._strategies.keys())


_registry = StrategyRegistry()


def get_strategy(name: str, **kwargs: Any) -> DelegateResolutionStrategy:
    """Get a fresh strategy instance by name."""
    return _registry.create_strategy(name, **kwargs)


def list_strategies() -> List[str]:
    return _registry.list_strategies()
