"""Storage of definite clauses for the chaining knowledge bases."""

import threading
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from folkit.core.clauses import DefiniteClause
from folkit.core.logic import Predicate
from folkit.core.substitution import Substitution
from folkit.core.unification import try_update


class ClauseStore(ABC):
    """Abstract store of definite clauses."""

    @abstractmethod
    def add(self, clause: DefiniteClause) -> bool:
        """
        Add a clause to the store.

        Returns:
            True if the clause was not already present
        """
        pass

    @abstractmethod
    def get_clause_applications(
            self, goal: Predicate,
            constraints: Optional[Substitution] = None) -> Iterator[Tuple[DefiniteClause, Substitution]]:
        """
        Find the stored clauses whose consequent unifies with a goal.

        Args:
            goal: The predicate to prove
            constraints: Bindings that any unifier must be consistent with

        Yields:
            Pairs of restandardised clause and the unifier of its consequent
            with the goal, extending the constraints
        """
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[DefiniteClause]:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def copy(self) -> 'ClauseStore':
        """Independent store with the same clauses."""
        pass


class DictionaryClauseStore(ClauseStore):
    """
    Clauses bucketed by the identifier of their consequent.

    Each bucket is an insertion-ordered dict used as a set. All access to the
    buckets happens under a lock, and enumeration works on snapshots, so
    clauses may be added while other threads are enumerating. An enumeration
    in progress may or may not see clauses added after it started.
    """

    def __init__(self, clauses: Iterable[DefiniteClause] = ()):
        self._buckets: Dict[object, Dict[DefiniteClause, None]] = {}
        self._lock = threading.Lock()
        for clause in clauses:
            self.add(clause)

    def add(self, clause: DefiniteClause) -> bool:
        if not isinstance(clause, DefiniteClause):
            clause = DefiniteClause(clause)
        with self._lock:
            bucket = self._buckets.setdefault(clause.consequent.identifier, {})
            if clause in bucket:
                return False
            bucket[clause] = None
            return True

    def _snapshot(self, identifier=None) -> List[DefiniteClause]:
        with self._lock:
            if identifier is not None:
                return list(self._buckets.get(identifier, ()))
            return [clause for bucket in self._buckets.values() for clause in bucket]

    def get_clause_applications(self, goal, constraints=None):
        constraints = constraints or Substitution()
        for clause in self._snapshot(goal.identifier):
            restandardised = clause.restandardise()
            substitution = try_update(restandardised.consequent, goal, constraints)
            if substitution is not None:
                yield restandardised, substitution

    def __iter__(self):
        return iter(self._snapshot())

    def __len__(self):
        with self._lock:
            return sum(len(bucket) for bucket in self._buckets.values())

    def copy(self) -> 'DictionaryClauseStore':
        return DictionaryClauseStore(self._snapshot())
