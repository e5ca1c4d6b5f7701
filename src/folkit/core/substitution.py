"""Variable substitutions: a mutable builder and its frozen, hashable form."""

from typing import Dict, Iterable, Iterator, Optional

from .logic import Term, Variable
from .transformations import substitute


def _apply(bindings: Dict[Variable, Term], target):
    if hasattr(target, 'substitute') and not isinstance(target, Term):
        return target.substitute(bindings)
    return substitute(target, bindings)


class SubstitutionBuilder:
    """Mutable set of variable bindings, built up during unification."""

    def __init__(self, bindings: Optional[Dict[Variable, Term]] = None):
        self._bindings: Dict[Variable, Term] = dict(bindings or {})

    def bind(self, variable: Variable, term: Term):
        """Bind an unbound variable to a term.

        Raises:
            ValueError: If the variable is already bound.
        """
        if variable in self._bindings:
            raise ValueError(f"{variable} is already bound to {self._bindings[variable]}")
        self._bindings[variable] = term

    def is_bound(self, variable: Variable) -> bool:
        return variable in self._bindings

    def get(self, variable: Variable, default=None):
        return self._bindings.get(variable, default)

    def apply_to(self, target):
        return _apply(self._bindings, target)

    def copy(self) -> 'SubstitutionBuilder':
        return SubstitutionBuilder(self._bindings)

    def update(self, other: 'SubstitutionBuilder'):
        self._bindings.update(other._bindings)

    def freeze(self) -> 'Substitution':
        return Substitution(self._bindings)

    def __len__(self):
        return len(self._bindings)

    def __repr__(self):
        return f"SubstitutionBuilder({_format_bindings(self._bindings)})"


class Substitution:
    """Immutable mapping from variables to terms.

    Equality and hashing ignore the order in which bindings were made.
    Applying a substitution follows chains of bindings, so binding X to Y and
    Y to a yields a for X.
    """

    def __init__(self, bindings: Optional[Dict[Variable, Term]] = None):
        self._bindings: Dict[Variable, Term] = dict(bindings or {})

    @property
    def bindings(self) -> Dict[Variable, Term]:
        return dict(self._bindings)

    def is_bound(self, variable: Variable) -> bool:
        return variable in self._bindings

    def get(self, variable: Variable, default=None):
        return self._bindings.get(variable, default)

    def apply_to(self, target):
        """Apply this substitution to a term, predicate, literal, clause or formula."""
        if not self._bindings:
            return target
        return _apply(self._bindings, target)

    def compose(self, other: 'Substitution') -> 'Substitution':
        """Return the substitution equivalent to applying this one and then ``other``."""
        bindings = {variable: other.apply_to(term) for variable, term in self._bindings.items()}
        for variable, term in other._bindings.items():
            if variable not in bindings:
                bindings[variable] = term
        return Substitution(bindings)

    def restrict(self, variables: Iterable[Variable]) -> 'Substitution':
        """Fully resolved bindings for the given variables only."""
        return Substitution({
            variable: self.apply_to(variable)
            for variable in variables if variable in self._bindings
        })

    def thaw(self) -> SubstitutionBuilder:
        return SubstitutionBuilder(self._bindings)

    def __getitem__(self, variable: Variable) -> Term:
        return self._bindings[variable]

    def __contains__(self, variable) -> bool:
        return variable in self._bindings

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._bindings)

    def __len__(self):
        return len(self._bindings)

    def items(self):
        return self._bindings.items()

    def __eq__(self, other):
        if not isinstance(other, Substitution):
            return False
        return self._bindings == other._bindings

    def __hash__(self):
        if not hasattr(self, '_hash'):
            self._hash = hash(frozenset(self._bindings.items()))
        return self._hash

    def __repr__(self):
        return _format_bindings(self._bindings)


def _format_bindings(bindings):
    if not bindings:
        return "{}"
    items = [f"{variable} -> {term}" for variable, term in bindings.items()]
    return "{" + ", ".join(items) + "}"
