"""Normalisation of formulas to clausal form."""

from .cnf import (
    to_cnf, extract_clauses,
    VariableStandardiser, ImplicationEliminator, NNFConverter,
    Skolemiser, UniversalQuantifierRemover, Distributor,
)

__all__ = [
    'to_cnf', 'extract_clauses',
    'VariableStandardiser', 'ImplicationEliminator', 'NNFConverter',
    'Skolemiser', 'UniversalQuantifierRemover', 'Distributor',
]
