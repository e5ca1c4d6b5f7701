"""Base classes for knowledge bases and the queries they create."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from tqdm import tqdm

from folkit.core.logic import Formula
from folkit.exceptions import QueryNotCompleteError, QueryAlreadyExecutedError, QueryCancelledError
from folkit.utils.config import get_config


logger = logging.getLogger(__name__)


def raise_if_cancelled(cancellation: Optional[threading.Event]):
    """Raise QueryCancelledError if the cancellation signal has been set."""
    if cancellation is not None and cancellation.is_set():
        logger.info("Query cancelled")
        raise QueryCancelledError()


class Query(ABC):
    """A single entailment question posed to a knowledge base."""

    def __init__(self):
        self._execution_lock = threading.Lock()
        self._executed = False
        self._result: Optional[bool] = None

    @property
    def is_complete(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> bool:
        """Whether the query is entailed.

        Raises:
            QueryNotCompleteError: If the query has not finished executing
        """
        if not self.is_complete:
            raise QueryNotCompleteError()
        return self._result

    def _begin_execution(self):
        with self._execution_lock:
            if self._executed:
                raise QueryAlreadyExecutedError()
            self._executed = True

    @abstractmethod
    def execute(self, cancellation: Optional[threading.Event] = None) -> bool:
        """
        Run the query to completion. May only be called once.

        Args:
            cancellation: Optional event; when set, execution raises QueryCancelledError

        Returns:
            The result of the query
        """
        pass


class SteppableQuery(Query):
    """A query that is executed as a sequence of discrete steps."""

    @abstractmethod
    def next_step(self):
        """Execute the next step of the query, returning whatever that step produced."""
        pass

    def execute(self, cancellation: Optional[threading.Event] = None,
                show_progress: Optional[bool] = None) -> bool:
        self._begin_execution()
        if show_progress is None:
            show_progress = get_config().get("resolution.show_progress", False)

        with tqdm(desc=type(self).__name__, unit="step", disable=not show_progress) as progress:
            while not self.is_complete:
                raise_if_cancelled(cancellation)
                self.next_step()
                progress.update(1)

        return self.result


class KnowledgeBase(ABC):
    """A store of sentences that can be asked whether a sentence is entailed."""

    @abstractmethod
    def tell(self, formula: Formula):
        """Add a sentence to the knowledge base."""
        pass

    def tell_all(self, formulas: Iterable[Formula]):
        for formula in formulas:
            self.tell(formula)

    @abstractmethod
    def create_query(self, formula: Formula) -> Query:
        """Create a query for whether the knowledge base entails a sentence."""
        pass

    def ask(self, formula: Formula, cancellation: Optional[threading.Event] = None) -> bool:
        """
        Determine whether the knowledge base entails a sentence.

        Args:
            formula: The sentence to check
            cancellation: Optional event that cancels the query when set

        Returns:
            True if the sentence is entailed
        """
        query = self.create_query(formula)
        return query.execute(cancellation)
