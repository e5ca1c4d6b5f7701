"""Path tree: a term index keyed by the symbol path to each argument position."""

from typing import Any, Dict, Iterable, Iterator, List, Set, Tuple

from folkit.core.logic import Term, Variable, Constant, Function
from folkit.core.transformations import ordinalise
from folkit.core.unification import is_instance_of
from .discrimination_tree import FunctionInfo, ConstantInfo, VariableInfo


def _node_key(term: Term):
    if isinstance(term, Variable):
        return VariableInfo(term.identifier)
    if isinstance(term, Constant):
        return ConstantInfo(term.identifier)
    if isinstance(term, Function):
        return FunctionInfo(term.identifier, len(term.arguments))
    raise TypeError(f"Expected Term, got {term!r}")


def _intersect_all(sets: Iterable[Set]) -> Set:
    common = None
    for values in sets:
        common = set(values) if common is None else common & set(values)
        if not common:
            break
    return common or set()


class _ParameterNode:
    """An argument position; children are keyed by the symbol found there."""
    __slots__ = ('children',)

    def __init__(self):
        self.children: Dict[Any, '_ArgumentNode'] = {}


class _ArgumentNode:
    """A symbol at an argument position; one parameter node per argument, or stored keys if it has none."""
    __slots__ = ('parameters', 'keys')

    def __init__(self, argument_count: int):
        self.parameters: List[_ParameterNode] = [_ParameterNode() for _ in range(argument_count)]
        self.keys: Set[Term] = set()


class PathTree:
    """
    Index of terms supporting exact, instance and generalisation retrieval.

    Every leaf symbol of a key is reached by its own path of (symbol,
    argument position) steps, so each argument position is matched
    independently. Candidates from different positions are intersected, and
    binding consistency of repeated variables is checked on the survivors
    rather than during the walk.

    Args:
        content: Optional initial (term, value) pairs
    """

    def __init__(self, content: Iterable[Tuple[Term, Any]] = ()):
        self.root = _ParameterNode()
        self._values: Dict[Term, Any] = {}
        for term, value in content:
            self.add(term, value)

    def add(self, term: Term, value=None):
        """
        Add a key term to the tree.

        Args:
            term: The key
            value: Value to store against the key; the key itself if omitted

        Raises:
            ValueError: If a key equal up to variable renaming is already present
        """
        value = term if value is None else value
        key = ordinalise(term)
        if key in self._values:
            raise ValueError("Key already present")

        stack = [(self.root, key)]
        while stack:
            parameter_node, current = stack.pop()
            node_key = _node_key(current)
            node = parameter_node.children.get(node_key)
            if node is None:
                node = parameter_node.children[node_key] = _ArgumentNode(len(current.arguments))
            if current.arguments:
                stack.extend(zip(node.parameters, current.arguments))
            else:
                node.keys.add(key)

        self._values[key] = value

    def contains(self, term: Term) -> bool:
        key = ordinalise(term)
        return key in self._exact_candidates(self.root, key)

    def __contains__(self, term):
        return self.contains(term)

    def get_exact(self, term: Term, default=None):
        """Value stored against a key equal to the term up to variable renaming."""
        key = ordinalise(term)
        if key in self._exact_candidates(self.root, key):
            return self._values[key]
        return default

    def _exact_candidates(self, parameter_node: _ParameterNode, term: Term) -> Set[Term]:
        node = parameter_node.children.get(_node_key(term))
        if node is None:
            return set()
        if not term.arguments:
            return node.keys
        return _intersect_all(
            self._exact_candidates(parameter, argument)
            for parameter, argument in zip(node.parameters, term.arguments))

    def get_instances(self, term: Term) -> Iterator[Any]:
        """Values of all keys that are instances of the term."""
        query = ordinalise(term)
        for key in self._instance_candidates(self.root, query):
            if is_instance_of(key, query):
                yield self._values[key]

    def _instance_candidates(self, parameter_node: _ParameterNode, term: Term) -> Set[Term]:
        if isinstance(term, Variable):
            return self._all_keys(parameter_node)
        node = parameter_node.children.get(_node_key(term))
        if node is None:
            return set()
        if not term.arguments:
            return node.keys
        return _intersect_all(
            self._instance_candidates(parameter, argument)
            for parameter, argument in zip(node.parameters, term.arguments))

    def _all_keys(self, parameter_node: _ParameterNode) -> Set[Term]:
        keys = set()
        stack = [parameter_node]
        while stack:
            for node in stack.pop().children.values():
                if node.parameters:
                    stack.extend(node.parameters)
                else:
                    keys |= node.keys
        return keys

    def get_generalisations(self, term: Term) -> Iterator[Any]:
        """Values of all keys of which the term is an instance."""
        query = ordinalise(term)
        for key in self._generalisation_candidates(self.root, query):
            if is_instance_of(query, key):
                yield self._values[key]

    def _generalisation_candidates(self, parameter_node: _ParameterNode, term: Term) -> Set[Term]:
        candidates = set()
        term_key = _node_key(term)
        for node_key, node in parameter_node.children.items():
            if isinstance(node_key, VariableInfo):
                candidates |= node.keys
            elif node_key == term_key:
                if node.parameters:
                    candidates |= _intersect_all(
                        self._generalisation_candidates(parameter, argument)
                        for parameter, argument in zip(node.parameters, term.arguments))
                else:
                    candidates |= node.keys
        return candidates

    def __len__(self):
        return len(self._values)
