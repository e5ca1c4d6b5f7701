"""Reading formulas from text."""

from .parser import FormulaBuilder, parse_formula, parse_term, read_fof, read_fof_file

__all__ = ['FormulaBuilder', 'parse_formula', 'parse_term', 'read_fof', 'read_fof_file']
