"""Unification and one-way matching of terms, predicates and literals."""

from typing import Optional, Sequence

from .logic import Term, Variable, Constant, Function, Predicate, Equality, Literal
from .substitution import Substitution, SubstitutionBuilder


def unify(first, second) -> Optional[Substitution]:
    """Compute the most general unifier of two terms, predicates or literals.

    Args:
        first: Term, predicate or literal
        second: Term, predicate or literal

    Returns:
        The unifier, or None if the two do not unify
    """
    return try_update(first, second, Substitution())


def try_update(first, second, substitution: Substitution) -> Optional[Substitution]:
    """Extend an existing unifier so that it also unifies ``first`` and ``second``.

    The given substitution is never modified. On failure no partially
    extended substitution is observable.
    """
    builder = substitution.thaw()
    if _unify(first, second, builder):
        return builder.freeze()
    return None


def occurs_check(variable: Variable, term: Term, substitution=None) -> bool:
    """Check whether a variable occurs anywhere inside a term.

    Args:
        variable: The variable to look for
        term: The term to search
        substitution: Optional bindings to follow while searching

    Returns:
        True if the variable occurs in the term
    """
    stack = [term]
    while stack:
        current = stack.pop()
        if isinstance(current, Variable):
            if current == variable:
                return True
            if substitution is not None and substitution.is_bound(current):
                stack.append(substitution.get(current))
        else:
            stack.extend(current.arguments)
    return False


def _unify(first, second, builder: SubstitutionBuilder) -> bool:
    if isinstance(first, Literal) or isinstance(second, Literal):
        if not (isinstance(first, Literal) and isinstance(second, Literal)):
            return False
        if first.polarity != second.polarity:
            return False
        return _unify(first.predicate, second.predicate, builder)

    if isinstance(first, Predicate) or isinstance(second, Predicate):
        if not (isinstance(first, Predicate) and isinstance(second, Predicate)):
            return False
        if first.identifier != second.identifier or len(first.arguments) != len(second.arguments):
            return False
        if isinstance(first, Equality):
            return _unify_commutative(first.arguments, second.arguments, builder, _unify_arguments)
        return _unify_arguments(first.arguments, second.arguments, builder)

    if isinstance(first, Variable):
        return _unify_variable(first, second, builder)
    if isinstance(second, Variable):
        return _unify_variable(second, first, builder)

    if isinstance(first, Constant) or isinstance(second, Constant):
        return first == second

    if isinstance(first, Function) and isinstance(second, Function):
        if first.identifier != second.identifier or len(first.arguments) != len(second.arguments):
            return False
        return _unify_arguments(first.arguments, second.arguments, builder)

    return False


def _unify_arguments(first: Sequence, second: Sequence, builder: SubstitutionBuilder) -> bool:
    for first_argument, second_argument in zip(first, second):
        if not _unify(first_argument, second_argument, builder):
            return False
    return True


def _unify_commutative(first, second, builder, unify_arguments) -> bool:
    for candidate in (second, tuple(reversed(second))):
        trial = builder.copy()
        if unify_arguments(first, candidate, trial):
            builder.update(trial)
            return True
    return False


def _unify_variable(variable: Variable, other: Term, builder: SubstitutionBuilder) -> bool:
    if variable == other:
        return True

    if builder.is_bound(variable):
        return _unify(builder.get(variable), other, builder)

    if isinstance(other, Variable) and builder.is_bound(other):
        return _unify(variable, builder.get(other), builder)

    # Bind to the fully resolved term so chains never point at stale variables
    other = builder.apply_to(other)
    if variable == other:
        return True
    if occurs_check(variable, other):
        return False

    builder.bind(variable, other)
    return True


def match(generalisation, instance, substitution: Optional[Substitution] = None) -> Optional[Substitution]:
    """One-way unification: bind only the generalisation's variables.

    Variables of the instance are treated as constants, so ``P(X)`` matches
    ``P(a)`` but ``P(a)`` does not match ``P(X)``.

    Args:
        generalisation: Term, predicate or literal that may contain variables to bind
        instance: Term, predicate or literal to match against
        substitution: Existing bindings to extend

    Returns:
        The extended bindings, or None if the instance is not an instance of the generalisation
    """
    builder = (substitution or Substitution()).thaw()
    if _match(generalisation, instance, builder):
        return builder.freeze()
    return None


def _match(generalisation, instance, builder: SubstitutionBuilder) -> bool:
    if isinstance(generalisation, Literal) or isinstance(instance, Literal):
        if not (isinstance(generalisation, Literal) and isinstance(instance, Literal)):
            return False
        if generalisation.polarity != instance.polarity:
            return False
        return _match(generalisation.predicate, instance.predicate, builder)

    if isinstance(generalisation, Predicate) or isinstance(instance, Predicate):
        if not (isinstance(generalisation, Predicate) and isinstance(instance, Predicate)):
            return False
        if generalisation.identifier != instance.identifier or \
                len(generalisation.arguments) != len(instance.arguments):
            return False
        if isinstance(generalisation, Equality):
            return _unify_commutative(generalisation.arguments, instance.arguments, builder, _match_arguments)
        return _match_arguments(generalisation.arguments, instance.arguments, builder)

    if isinstance(generalisation, Variable):
        if builder.is_bound(generalisation):
            return builder.get(generalisation) == instance
        builder.bind(generalisation, instance)
        return True

    if isinstance(instance, Variable) or isinstance(generalisation, Constant):
        return generalisation == instance

    if isinstance(generalisation, Function) and isinstance(instance, Function):
        if generalisation.identifier != instance.identifier or \
                len(generalisation.arguments) != len(instance.arguments):
            return False
        return _match_arguments(generalisation.arguments, instance.arguments, builder)

    return False


def _match_arguments(generalisations: Sequence, instances: Sequence, builder: SubstitutionBuilder) -> bool:
    for generalisation, instance in zip(generalisations, instances):
        if not _match(generalisation, instance, builder):
            return False
    return True


def is_instance_of(term, generalisation) -> bool:
    return match(generalisation, term) is not None


def is_generalisation_of(term, instance) -> bool:
    return match(term, instance) is not None
