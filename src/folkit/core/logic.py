from functools import reduce


class StandardisedVariableIdentifier:
    """Identifier of a variable introduced by standardisation.

    Instances compare by identity, so variables standardised by separate
    normalisation runs never collide, even for identical input.
    """

    def __init__(self, original_identifier, original_formula=None):
        self.original_identifier = original_identifier
        self.original_formula = original_formula

    def __repr__(self):
        return str(self.original_identifier)


class SkolemFunctionIdentifier:
    """Identifier of a Skolem function introduced for an existential variable.

    Instances compare by identity, so they are distinguishable from any user
    declared symbol and from Skolem functions of other normalisation runs.
    """

    def __init__(self, standardised_variable_identifier, original_formula=None):
        self.standardised_variable_identifier = standardised_variable_identifier
        self.original_formula = original_formula

    def __repr__(self):
        return f"sk_{self.standardised_variable_identifier}"


class _EqualityIdentifier:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "="


EQUALITY = _EqualityIdentifier()


class Term:
    kind = None
    arguments = ()

    @property
    def children(self):
        return self.arguments

    @property
    def is_ground(self):
        return not self.variables()

    def variables(self):
        variables = set()
        for argument in self.arguments:
            variables |= argument.variables()
        return variables

    def depth(self):
        if self.arguments:
            return 1 + max(argument.depth() for argument in self.arguments)
        return 0


class Variable(Term):
    kind = "variable"

    def __init__(self, identifier):
        self.identifier = identifier

    def __eq__(self, other):
        if not isinstance(other, Variable):
            return False
        return self.identifier == other.identifier

    def __hash__(self):
        if not hasattr(self, '_hash'):
            self._hash = hash(("variable", self.identifier))
        return self._hash

    def __repr__(self):
        return str(self.identifier)

    def variables(self):
        return {self}


class Constant(Term):
    kind = "constant"

    def __init__(self, identifier):
        self.identifier = identifier

    def __eq__(self, other):
        if not isinstance(other, Constant):
            return False
        return self.identifier == other.identifier

    def __hash__(self):
        if not hasattr(self, '_hash'):
            self._hash = hash(("constant", self.identifier))
        return self._hash

    def __repr__(self):
        return str(self.identifier)


class Function(Term):
    kind = "function"

    @staticmethod
    def check(arguments):
        for argument in arguments:
            if not isinstance(argument, Term):
                raise TypeError(f"Expected Term, got {argument!r}")

    def __init__(self, identifier, *arguments):
        Function.check(arguments)
        self.identifier = identifier
        self.arguments = tuple(arguments)

    def with_arguments(self, arguments):
        return Function(self.identifier, *arguments)

    def __eq__(self, other):
        if not isinstance(other, Function):
            return False
        return self.identifier == other.identifier and \
            self.arguments == other.arguments

    def __hash__(self):
        if not hasattr(self, '_hash'):
            self._hash = hash((self.identifier, self.arguments))
        return self._hash

    def __repr__(self):
        return f"{self.identifier}({', '.join(map(repr, self.arguments))})"


class Formula:
    kind = None
    children = ()


class Predicate(Formula):
    kind = "predicate"

    @staticmethod
    def check(arguments):
        for argument in arguments:
            if not isinstance(argument, Term):
                raise TypeError(f"Expected Term, got {argument!r}")

    def __init__(self, identifier, *arguments):
        Predicate.check(arguments)
        self.identifier = identifier
        self.arguments = tuple(arguments)

    @property
    def children(self):
        return self.arguments

    def with_arguments(self, arguments):
        return Predicate(self.identifier, *arguments)

    def variables(self):
        variables = set()
        for argument in self.arguments:
            variables |= argument.variables()
        return variables

    def depth(self):
        if self.arguments:
            return 1 + max(argument.depth() for argument in self.arguments)
        return 0

    def __eq__(self, other):
        if not isinstance(other, Predicate) or isinstance(other, Equality):
            return False
        return self.identifier == other.identifier and \
            self.arguments == other.arguments

    def __hash__(self):
        if not hasattr(self, '_hash'):
            self._hash = hash((self.identifier, self.arguments))
        return self._hash

    def __repr__(self):
        return f"{self.identifier}({', '.join(map(repr, self.arguments))})"


class Equality(Predicate):
    """Equality atom. Equality and hashing ignore the order of the operands."""

    def __init__(self, left, right):
        super().__init__(EQUALITY, left, right)

    @property
    def left(self):
        return self.arguments[0]

    @property
    def right(self):
        return self.arguments[1]

    def with_arguments(self, arguments):
        return Equality(*arguments)

    def __eq__(self, other):
        if not isinstance(other, Equality):
            return False
        return (self.left == other.left and self.right == other.right) or \
            (self.left == other.right and self.right == other.left)

    def __hash__(self):
        if not hasattr(self, '_hash'):
            self._hash = hash((EQUALITY, frozenset(self.arguments)))
        return self._hash

    def __repr__(self):
        return f"{self.left!r} = {self.right!r}"


def _check_formula(formula):
    if not isinstance(formula, Formula):
        raise TypeError(f"Expected Formula, got {formula!r}")


class Negation(Formula):
    kind = "negation"

    def __init__(self, formula):
        _check_formula(formula)
        self.formula = formula

    @property
    def children(self):
        return (self.formula,)

    def __eq__(self, other):
        return isinstance(other, Negation) and self.formula == other.formula

    def __hash__(self):
        return hash(("not", self.formula))

    def __repr__(self):
        return f"~{self.formula!r}"


class _BinaryFormula(Formula):
    operator = None

    def __init__(self, left, right):
        _check_formula(left)
        _check_formula(right)
        self.left = left
        self.right = right

    @property
    def children(self):
        return (self.left, self.right)

    def __eq__(self, other):
        return type(self) is type(other) and \
            self.left == other.left and \
            self.right == other.right

    def __hash__(self):
        return hash((self.kind, self.left, self.right))

    def __repr__(self):
        return f"({self.left!r} {self.operator} {self.right!r})"


class Conjunction(_BinaryFormula):
    kind = "conjunction"
    operator = "&"


class Disjunction(_BinaryFormula):
    kind = "disjunction"
    operator = "|"


class Implication(_BinaryFormula):
    kind = "implication"
    operator = "=>"

    def __init__(self, antecedent, consequent):
        super().__init__(antecedent, consequent)

    @property
    def antecedent(self):
        return self.left

    @property
    def consequent(self):
        return self.right


class Equivalence(_BinaryFormula):
    kind = "equivalence"
    operator = "<=>"


class _Quantification(Formula):
    quantifier = None

    def __init__(self, variable, formula):
        if not isinstance(variable, Variable):
            raise TypeError(f"Expected Variable, got {variable!r}")
        _check_formula(formula)
        self.variable = variable
        self.formula = formula

    @property
    def children(self):
        return (self.variable, self.formula)

    def __eq__(self, other):
        return type(self) is type(other) and \
            self.variable == other.variable and \
            self.formula == other.formula

    def __hash__(self):
        return hash((self.kind, self.variable, self.formula))

    def __repr__(self):
        return f"{self.quantifier}[{self.variable!r}]: {self.formula!r}"


class UniversalQuantification(_Quantification):
    kind = "universal_quantification"
    quantifier = "!"


class ExistentialQuantification(_Quantification):
    kind = "existential_quantification"
    quantifier = "?"


def for_all(*args):
    """for_all(x, y, formula) == UniversalQuantification(x, UniversalQuantification(y, formula))"""
    *variables, formula = args
    for variable in reversed(variables):
        formula = UniversalQuantification(variable, formula)
    return formula


def there_exists(*args):
    *variables, formula = args
    for variable in reversed(variables):
        formula = ExistentialQuantification(variable, formula)
    return formula


def all_of(*formulas):
    return reduce(Conjunction, formulas)


def any_of(*formulas):
    return reduce(Disjunction, formulas)


class Literal:
    @staticmethod
    def check(predicate, polarity):
        if not isinstance(predicate, Predicate):
            raise TypeError(f"Expected Predicate, got {predicate!r}")
        if not isinstance(polarity, bool):
            raise TypeError(f"Expected bool, got {polarity!r}")

    def __init__(self, predicate, polarity=True):
        Literal.check(predicate, polarity)
        self.predicate = predicate
        self.polarity = polarity

    @classmethod
    def from_formula(cls, formula):
        if isinstance(formula, Negation) and isinstance(formula.formula, Predicate):
            return cls(formula.formula, False)
        if isinstance(formula, Predicate):
            return cls(formula, True)
        raise TypeError(f"Expected predicate or negated predicate, got {formula!r}")

    @property
    def is_positive(self):
        return self.polarity

    @property
    def is_negated(self):
        return not self.polarity

    def negate(self):
        return Literal(self.predicate, not self.polarity)

    def to_formula(self):
        return self.predicate if self.polarity else Negation(self.predicate)

    def variables(self):
        return self.predicate.variables()

    def depth(self):
        return self.predicate.depth()

    def __eq__(self, other):
        if not isinstance(other, Literal):
            return False
        return self.predicate == other.predicate and \
            self.polarity == other.polarity

    def __hash__(self):
        if not hasattr(self, '_hash'):
            self._hash = hash((self.predicate, self.polarity))
        return self._hash

    def __repr__(self):
        return f"{'~' if not self.polarity else ''}{self.predicate!r}"
