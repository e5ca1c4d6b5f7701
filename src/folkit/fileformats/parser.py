"""Parser for first-order formulas in TPTP syntax.

Upper-case words are variables; other words are constants, functions or
predicates depending on where they appear::

    ![X]: (man(X) => mortal(X))
    ?[Y]: (loves(Y, mother(Y)) & Y != bob)
"""

import logging
import os
from typing import List, Tuple

from lark import Lark, Token, Transformer

from folkit.core.logic import (
    Formula, Term, Variable, Constant, Function, Predicate, Equality, Negation, Conjunction,
    Disjunction, Implication, Equivalence, for_all, there_exists, all_of, any_of,
)


logger = logging.getLogger(__name__)

fof_parser = Lark(r"""
    %import common.WS
    %ignore WS
    %ignore COMMENT_LINE
    %ignore COMMENT_BLOCK

    tptp_file : (annotated_formula | include)*

    ?annotated_formula : fof | cnf

    include : "include(" FILE_NAME formula_selection? ")."
    formula_selection : "," "[" NAME ("," NAME)* "]"

    fof : "fof(" NAME "," FORMULA_ROLE "," fof_formula ")."
    cnf : "cnf(" NAME "," FORMULA_ROLE "," cnf_formula ")."

    FORMULA_ROLE : "axiom" | "hypothesis" | "definition" | "assumption" | "lemma" | "theorem" | "corollary" | "conjecture" | "negated_conjecture" | "plain" | "unknown"

    ?fof_formula : fof_binary_nonassoc | fof_or_formula | fof_and_formula | fof_unary
    fof_binary_nonassoc : fof_unary NONASSOC_CONNECTIVE fof_unary
    fof_or_formula : fof_unary ("|" fof_unary)+
    fof_and_formula : fof_unary ("&" fof_unary)+
    ?fof_unary : fof_quantified_formula | fof_negation | fof_atom | "(" fof_formula ")"

    fof_quantified_formula : FOF_QUANTIFIER "[" VARIABLE ("," VARIABLE)* "]" ":" fof_unary
    fof_negation : "~" fof_unary
    fof_atom : FUNCTOR | FUNCTOR "(" fof_term ("," fof_term)* ")" | fof_term DEFINED_BINARY_PREDICATE fof_term
    fof_term : FUNCTOR | FUNCTOR "(" fof_term ("," fof_term)* ")" | VARIABLE

    FOF_QUANTIFIER : "!" | "?"
    NONASSOC_CONNECTIVE : "<=>" | "=>" | "<=" | "<~>" | "~|" | "~&"
    DEFINED_BINARY_PREDICATE : "=" | "!="

    ?cnf_formula : disjunction | "(" disjunction ")"
    disjunction : literal ("|" literal)*
    ?literal : fof_atom | fof_negated_atom
    fof_negated_atom : "~" fof_atom

    FUNCTOR : ATOMIC_WORD
    VARIABLE : UPPER_WORD

    NAME : ATOMIC_WORD | "0".."9"+
    ATOMIC_WORD : LOWER_WORD | SINGLE_QUOTED
    FILE_NAME : SINGLE_QUOTED
    COMMENT_LINE : /%[^\n]*/
    COMMENT_BLOCK : /\/\*(.|\n)*?\*\//
    SINGLE_QUOTED : "'" SQ_CHAR+ "'"
    UPPER_WORD : UPPER_ALPHA ALPHA_NUMERIC*
    LOWER_WORD : LOWER_ALPHA ALPHA_NUMERIC*
    SQ_CHAR : " ".."&" | "(".."~"
    LOWER_ALPHA : "a".."z"
    UPPER_ALPHA : "A".."Z"
    ALPHA_NUMERIC : LOWER_ALPHA | UPPER_ALPHA | "0".."9" | "_"
""", start=["tptp_file", "fof_formula", "fof_term"])


def _symbol(token: Token) -> str:
    value = token.value
    if value.startswith("'") and value.endswith("'"):
        return value[1:-1]
    return value


class FormulaBuilder(Transformer):
    """Turns a parse tree into folkit terms and formulas."""

    def __init__(self, include_path: str = '.'):
        super().__init__()
        self.include_path = include_path

    def fof_term(self, children):
        head = children[0]
        if head.type == "VARIABLE":
            return Variable(head.value)
        if len(children) == 1:
            return Constant(_symbol(head))
        return Function(_symbol(head), *children[1:])

    def fof_atom(self, children):
        if isinstance(children[0], Token) and children[0].type == "FUNCTOR":
            return Predicate(_symbol(children[0]), *children[1:])
        left, operator, right = children
        if operator.value == "!=":
            return Negation(Equality(left, right))
        return Equality(left, right)

    def fof_negation(self, children):
        return Negation(children[0])

    def fof_negated_atom(self, children):
        return Negation(children[0])

    def fof_quantified_formula(self, children):
        quantifier, *variables, formula = children
        variables = [Variable(variable.value) for variable in variables]
        if quantifier.value == "!":
            return for_all(*variables, formula)
        return there_exists(*variables, formula)

    def fof_binary_nonassoc(self, children):
        left, connective, right = children
        connective = connective.value
        if connective == "<=>":
            return Equivalence(left, right)
        if connective == "=>":
            return Implication(left, right)
        if connective == "<=":
            return Implication(right, left)
        if connective == "<~>":
            return Negation(Equivalence(left, right))
        if connective == "~|":
            return Negation(Disjunction(left, right))
        return Negation(Conjunction(left, right))

    def fof_or_formula(self, children):
        return any_of(*children)

    def fof_and_formula(self, children):
        return all_of(*children)

    def disjunction(self, children):
        return any_of(*children)

    def fof(self, children):
        name, role, formula = children
        return [(_symbol(name), role.value, formula)]

    cnf = fof

    def formula_selection(self, children):
        return [_symbol(name) for name in children]

    def include(self, children):
        path = os.path.join(self.include_path, _symbol(children[0]))
        logger.debug(f"Including {path}")
        entries = read_fof_file(path, include_path=self.include_path)
        if len(children) > 1:
            selection = set(children[1])
            entries = [entry for entry in entries if entry[0] in selection]
        return entries

    def tptp_file(self, children):
        return [entry for entries in children for entry in entries]


def parse_formula(text: str) -> Formula:
    """Parse a single formula, e.g. ``![X]: (p(X) => q(X))``."""
    return FormulaBuilder().transform(fof_parser.parse(text, start="fof_formula"))


def parse_term(text: str) -> Term:
    """Parse a single term, e.g. ``f(X, a)``."""
    return FormulaBuilder().transform(fof_parser.parse(text, start="fof_term"))


def read_fof(text: str, include_path: str = '.') -> List[Tuple[str, str, Formula]]:
    """
    Read the annotated formulas of a TPTP problem.

    Args:
        text: Problem text containing ``fof(...)`` and ``cnf(...)`` entries
        include_path: Directory that ``include('...')`` paths are relative to

    Returns:
        (name, role, formula) for each entry, in order, with included files
        expanded in place. Conjectures keep their role; they are not negated.
    """
    return FormulaBuilder(include_path).transform(fof_parser.parse(text, start="tptp_file"))


def read_fof_file(path: str, include_path: str = None) -> List[Tuple[str, str, Formula]]:
    with open(path, "r") as f:
        data = f.read()
    return read_fof(data, include_path or os.path.dirname(path) or '.')
