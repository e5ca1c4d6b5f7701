"""Formatting of formulas and explanations for display."""

from .labellers import Labeller, LabellingScope, LabelSetLabeller, SubscriptSuffixLabeller, ByTypeLabeller
from .formatter import Formatter, default_labeller
from .explainer import CNFExplainer, find_normalisation_terms

__all__ = [
    'Labeller', 'LabellingScope', 'LabelSetLabeller', 'SubscriptSuffixLabeller', 'ByTypeLabeller',
    'Formatter', 'default_labeller',
    'CNFExplainer', 'find_normalisation_terms',
]
