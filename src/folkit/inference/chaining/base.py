"""Shared behaviour of the forward and backward chaining knowledge bases."""

import logging
from abc import abstractmethod
from typing import Optional

from folkit.core.clauses import DefiniteClause
from folkit.core.logic import Formula, Predicate
from folkit.exceptions import NotAPredicateError
from folkit.inference.base import KnowledgeBase, Query
from folkit.normalisation.cnf import to_cnf
from .clause_store import ClauseStore, DictionaryClauseStore


logger = logging.getLogger(__name__)


class ChainingKnowledgeBase(KnowledgeBase):
    """
    Knowledge base restricted to sentences expressible as definite clauses.

    Args:
        clause_store: Where to keep the clauses; an empty DictionaryClauseStore by default
    """

    def __init__(self, clause_store: Optional[ClauseStore] = None):
        self.clause_store = clause_store if clause_store is not None else DictionaryClauseStore()

    def tell(self, formula: Formula):
        """
        Add a sentence whose clausal form consists of definite clauses only.

        Raises:
            NotDefiniteClauseError: If any clause is not definite; nothing is added in that case
        """
        clauses = [DefiniteClause(clause) for clause in to_cnf(formula)]
        added = sum(1 for clause in clauses if self.clause_store.add(clause))
        logger.debug(f"Told {formula!r}: {added} new definite clause(s)")

    def create_query(self, formula: Formula) -> Query:
        """
        Raises:
            NotAPredicateError: If the query is not a single predicate
        """
        if not isinstance(formula, Predicate):
            raise NotAPredicateError(formula)
        logger.debug(f"Creating {type(self).__name__} query for {formula!r}")
        return self._make_query(formula)

    @abstractmethod
    def _make_query(self, goal: Predicate) -> Query:
        pass
