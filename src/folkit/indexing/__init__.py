"""Term and clause indexes."""

from .discrimination_tree import DiscriminationTree, FunctionInfo, ConstantInfo, VariableInfo, element_infos
from .path_tree import PathTree
from .feature_vector_index import FeatureVectorIndex
from .features import OccurrenceCountFeature, MaxDepthFeature, identifier_sort_key

__all__ = [
    'DiscriminationTree', 'FunctionInfo', 'ConstantInfo', 'VariableInfo', 'element_infos',
    'PathTree',
    'FeatureVectorIndex',
    'OccurrenceCountFeature', 'MaxDepthFeature', 'identifier_sort_key',
]
