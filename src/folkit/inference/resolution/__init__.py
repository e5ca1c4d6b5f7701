"""Resolution refutation."""

from .clause_resolution import ClauseResolution, resolve
from .strategies import (
    DelegateResolutionStrategy, QueryStrategy, StrategyRegistry,
    get_strategy, list_strategies,
    no_filter, unit_resolution, unit_preference, total_literal_count_minimisation,
)
from .knowledge_base import ResolutionKnowledgeBase, ResolutionQuery

__all__ = [
    'ClauseResolution', 'resolve',
    'DelegateResolutionStrategy', 'QueryStrategy', 'StrategyRegistry',
    'get_strategy', 'list_strategies',
    'no_filter', 'unit_resolution', 'unit_preference', 'total_literal_count_minimisation',
    'ResolutionKnowledgeBase', 'ResolutionQuery',
]
