"""Forward and backward chaining over definite clauses."""

from .clause_store import ClauseStore, DictionaryClauseStore
from .base import ChainingKnowledgeBase
from .backward import BackwardChainingKnowledgeBase, BackwardChainingQuery, BackwardChainingProof
from .forward import ForwardChainingKnowledgeBase, ForwardChainingQuery, ForwardChainingProofStep

__all__ = [
    'ClauseStore', 'DictionaryClauseStore', 'ChainingKnowledgeBase',
    'BackwardChainingKnowledgeBase', 'BackwardChainingQuery', 'BackwardChainingProof',
    'ForwardChainingKnowledgeBase', 'ForwardChainingQuery', 'ForwardChainingProofStep',
]
