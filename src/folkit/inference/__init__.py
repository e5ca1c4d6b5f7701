"""Knowledge bases and the queries they answer."""

from .base import KnowledgeBase, Query, SteppableQuery, raise_if_cancelled
from .resolution import (
    ResolutionKnowledgeBase, ResolutionQuery, ClauseResolution, resolve,
    DelegateResolutionStrategy, get_strategy, list_strategies,
)
from .chaining import (
    ClauseStore, DictionaryClauseStore,
    BackwardChainingKnowledgeBase, BackwardChainingQuery, BackwardChainingProof,
    ForwardChainingKnowledgeBase, ForwardChainingQuery, ForwardChainingProofStep,
)
from .axiomising import EqualityAxiomisingKnowledgeBase, UniqueNamesAxiomisingKnowledgeBase

__all__ = [
    'KnowledgeBase', 'Query', 'SteppableQuery', 'raise_if_cancelled',
    'ResolutionKnowledgeBase', 'ResolutionQuery', 'ClauseResolution', 'resolve',
    'DelegateResolutionStrategy', 'get_strategy', 'list_strategies',
    'ClauseStore', 'DictionaryClauseStore',
    'BackwardChainingKnowledgeBase', 'BackwardChainingQuery', 'BackwardChainingProof',
    'ForwardChainingKnowledgeBase', 'ForwardChainingQuery', 'ForwardChainingProofStep',
    'EqualityAxiomisingKnowledgeBase', 'UniqueNamesAxiomisingKnowledgeBase',
]
