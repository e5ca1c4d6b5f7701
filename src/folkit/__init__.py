"""
folkit: a first-order logic reasoning core.

folkit represents first-order formulas, normalises them to clausal form and
decides entailment. It includes:

- Terms, formulas, literals and clauses
- Conversion to conjunctive normal form with Skolemisation
- Unification with occurs check, and one-way matching
- Resolution refutation with pluggable strategies
- Forward and backward chaining over definite clauses
- Discrimination tree, path tree and feature vector indexes
- A TPTP-syntax parser and a formatter for explanations

Basic usage:
    >>> from folkit import *
    >>> x = Variable("x")
    >>> socrates = Constant("socrates")
    >>> kb = ResolutionKnowledgeBase()
    >>> kb.tell(for_all(x, Implication(Predicate("man", x), Predicate("mortal", x))))
    >>> kb.tell(Predicate("man", socrates))
    >>> kb.ask(Predicate("mortal", socrates))
    True
"""

import logging
from typing import Iterable

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core logic structures
from folkit.core import (
    # Identifiers
    StandardisedVariableIdentifier, SkolemFunctionIdentifier, EQUALITY,
    # Terms
    Term, Variable, Constant, Function,
    # Formulas
    Formula, Predicate, Equality, Negation, Conjunction, Disjunction,
    Implication, Equivalence, UniversalQuantification, ExistentialQuantification,
    for_all, there_exists, all_of, any_of,
    Literal, Clause, DefiniteClause, CNFFormula, ordinalise,
    # Substitution and unification
    Substitution, SubstitutionBuilder, unify, try_update, occurs_check, match,
    is_instance_of, is_generalisation_of,
)

# Normalisation
from folkit.normalisation import to_cnf

# Inference
from folkit.inference import (
    KnowledgeBase, Query, SteppableQuery,
    ResolutionKnowledgeBase, ResolutionQuery, resolve, get_strategy, list_strategies,
    DictionaryClauseStore,
    BackwardChainingKnowledgeBase, ForwardChainingKnowledgeBase,
    EqualityAxiomisingKnowledgeBase, UniqueNamesAxiomisingKnowledgeBase,
)

# Indexes
from folkit.indexing import (
    DiscriminationTree, PathTree, FeatureVectorIndex,
    OccurrenceCountFeature, MaxDepthFeature,
)

# Formatting and parsing
from folkit.formatting import Formatter, CNFExplainer
from folkit.fileformats import parse_formula, parse_term, read_fof

# Errors
from folkit.exceptions import (
    NotDefiniteClauseError, NotAPredicateError, QueryNotCompleteError,
    QueryAlreadyExecutedError, QueryCancelledError, NegativeResultExplanationError,
    LabelSetExhaustedError,
)

# Configuration
from folkit.utils import get_config, setup_logging


_KNOWLEDGE_BASES = {
    "resolution": ResolutionKnowledgeBase,
    "forward_chaining": ForwardChainingKnowledgeBase,
    "backward_chaining": BackwardChainingKnowledgeBase,
}


def entails(axioms: Iterable[Formula], query: Formula, method: str = "resolution", **kwargs) -> bool:
    """
    Decide whether a set of axioms entails a query.

    Args:
        axioms: Formulas to tell the knowledge base
        query: Formula to ask
        method: One of "resolution", "forward_chaining" or "backward_chaining"
        **kwargs: Passed to the knowledge base constructor (e.g. strategy="unit_preference")

    Returns:
        True if the query was proven. Resolution may not terminate on
        non-entailed queries over theories with function symbols.
    """
    if method not in _KNOWLEDGE_BASES:
        raise ValueError(f"Unknown method '{method}'. Available: {list(_KNOWLEDGE_BASES)}")

    knowledge_base = _KNOWLEDGE_BASES[method](**kwargs)
    knowledge_base.tell_all(axioms)
    return knowledge_base.ask(query)


__all__ = [
    # Version
    "__version__",

    # Core logic
    "StandardisedVariableIdentifier", "SkolemFunctionIdentifier", "EQUALITY",
    "Term", "Variable", "Constant", "Function",
    "Formula", "Predicate", "Equality", "Negation", "Conjunction", "Disjunction",
    "Implication", "Equivalence", "UniversalQuantification", "ExistentialQuantification",
    "for_all", "there_exists", "all_of", "any_of",
    "Literal", "Clause", "DefiniteClause", "CNFFormula", "ordinalise",

    # Unification
    "Substitution", "SubstitutionBuilder", "unify", "try_update", "occurs_check", "match",
    "is_instance_of", "is_generalisation_of",

    # Normalisation
    "to_cnf",

    # Inference
    "KnowledgeBase", "Query", "SteppableQuery",
    "ResolutionKnowledgeBase", "ResolutionQuery", "resolve", "get_strategy", "list_strategies",
    "DictionaryClauseStore",
    "BackwardChainingKnowledgeBase", "ForwardChainingKnowledgeBase",
    "EqualityAxiomisingKnowledgeBase", "UniqueNamesAxiomisingKnowledgeBase",

    # Indexes
    "DiscriminationTree", "PathTree", "FeatureVectorIndex",
    "OccurrenceCountFeature", "MaxDepthFeature",

    # Formatting and parsing
    "Formatter", "CNFExplainer", "parse_formula", "parse_term", "read_fof",

    # Errors
    "NotDefiniteClauseError", "NotAPredicateError", "QueryNotCompleteError",
    "QueryAlreadyExecutedError", "QueryCancelledError", "NegativeResultExplanationError",
    "LabelSetExhaustedError",

    # Configuration
    "get_config", "setup_logging",

    # High-level API
    "entails",
]
