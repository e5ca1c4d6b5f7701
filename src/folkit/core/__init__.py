"""Core first-order logic data structures."""

from .logic import (
    # Identifiers
    StandardisedVariableIdentifier, SkolemFunctionIdentifier, EQUALITY,
    # Terms
    Term, Variable, Constant, Function,
    # Formulas
    Formula, Predicate, Equality, Negation, Conjunction, Disjunction,
    Implication, Equivalence, UniversalQuantification, ExistentialQuantification,
    for_all, there_exists, all_of, any_of,
    Literal,
)
from .transformations import (
    FormulaTransformer, FormulaVisitor, ordinalise
)
from .substitution import (
    Substitution, SubstitutionBuilder
)
from .unification import (
    unify, try_update, occurs_check, match,
    is_instance_of, is_generalisation_of
)
from .clauses import (
    Clause, DefiniteClause, CNFFormula
)

__all__ = [
    # Identifiers
    'StandardisedVariableIdentifier', 'SkolemFunctionIdentifier', 'EQUALITY',
    # Terms
    'Term', 'Variable', 'Constant', 'Function',
    # Formulas
    'Formula', 'Predicate', 'Equality', 'Negation', 'Conjunction', 'Disjunction',
    'Implication', 'Equivalence', 'UniversalQuantification', 'ExistentialQuantification',
    'for_all', 'there_exists', 'all_of', 'any_of',
    'Literal',
    # Transformations
    'FormulaTransformer', 'FormulaVisitor', 'ordinalise',
    # Substitution and unification
    'Substitution', 'SubstitutionBuilder',
    'unify', 'try_update', 'occurs_check', 'match',
    'is_instance_of', 'is_generalisation_of',
    # Clauses
    'Clause', 'DefiniteClause', 'CNFFormula',
]
