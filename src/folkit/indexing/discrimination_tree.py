"""Discrimination tree: a trie over pre-order symbol sequences of terms."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from folkit.core.logic import Term, Variable, Constant, Function


@dataclass(frozen=True)
class FunctionInfo:
    identifier: Any
    argument_count: int

    @property
    def child_element_count(self) -> int:
        return self.argument_count


@dataclass(frozen=True)
class ConstantInfo:
    identifier: Any

    @property
    def child_element_count(self) -> int:
        return 0


@dataclass(frozen=True)
class VariableInfo:
    """A variable, identified by the order of its first appearance in the term."""
    ordinal: int

    @property
    def child_element_count(self) -> int:
        return 0


def element_infos(term: Term) -> List[Any]:
    """Flatten a term into its pre-order sequence of element infos.

    Variables are numbered by first appearance, so ``f(X, X)`` and ``f(Y, Y)``
    give the same sequence but ``f(X, Y)`` does not.
    """
    ordinals: Dict[Variable, int] = {}
    elements = []
    stack = [term]
    while stack:
        current = stack.pop()
        if isinstance(current, Variable):
            ordinal = ordinals.setdefault(current, len(ordinals))
            elements.append(VariableInfo(ordinal))
        elif isinstance(current, Constant):
            elements.append(ConstantInfo(current.identifier))
        elif isinstance(current, Function):
            elements.append(FunctionInfo(current.identifier, len(current.arguments)))
            stack.extend(reversed(current.arguments))
        else:
            raise TypeError(f"Expected Term, got {current!r}")
    return elements


class _Node:
    __slots__ = ('children', 'value')

    def __init__(self, value=None):
        self.children: Dict[Any, '_Node'] = {}
        self.value = value


def _try_bind(bindings: Dict[int, Tuple], ordinal: int, elements: Tuple) -> Optional[Dict[int, Tuple]]:
    """Bind a variable ordinal to a run of elements, or check an existing binding.

    Returns the (possibly new) bindings, or None if the ordinal is already
    bound to something else. The given bindings are never modified.
    """
    existing = bindings.get(ordinal)
    if existing is None:
        extended = dict(bindings)
        extended[ordinal] = elements
        return extended
    return bindings if existing == elements else None


class DiscriminationTree:
    """
    Index of terms supporting exact, instance and generalisation retrieval.

    Each key is flattened into its pre-order sequence of element infos, and
    the sequence is the key's path from the root to its leaf. Retrieval walks
    the tree once, treating variables as wildcards and checking repeated
    variables against the bindings made so far as it goes.

    Args:
        content: Optional initial (term, value) pairs
    """

    def __init__(self, content: Iterable[Tuple[Term, Any]] = ()):
        self.root = _Node()
        self._count = 0
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
        elements = element_infos(term)
        node = self.root
        for element in elements[:-1]:
            node = node.children.setdefault(element, _Node())

        if elements[-1] in node.children:
            raise ValueError("Key already present")
        node.children[elements[-1]] = _Node(value)
        self._count += 1

    def _find_leaf(self, term: Term) -> Optional[_Node]:
        node = self.root
        for element in element_infos(term):
            node = node.children.get(element)
            if node is None:
                return None
        return node

    def contains(self, term: Term) -> bool:
        return self._find_leaf(term) is not None

    def __contains__(self, term):
        return self.contains(term)

    def get_exact(self, term: Term, default=None):
        """Value stored against a key equal to the term up to variable renaming."""
        leaf = self._find_leaf(term)
        return default if leaf is None else leaf.value

    def get_instances(self, term: Term) -> Iterator[Any]:
        """Values of all keys that are instances of the term."""
        query = element_infos(term)

        def expand_node(node, index, bindings):
            if index == len(query):
                yield node.value
                return

            element = query[index]
            if isinstance(element, VariableInfo):
                yield from expand_variable_matches(node, index, (), 1, bindings)
            elif element in node.children:
                yield from expand_node(node.children[element], index + 1, bindings)

        def expand_variable_matches(node, index, matched, unexplored, bindings):
            # Collect each complete subterm under node as a candidate for the query variable
            for element, child in node.children.items():
                child_matched = matched + (element,)
                child_unexplored = unexplored + element.child_element_count - 1
                if child_unexplored > 0:
                    yield from expand_variable_matches(child, index, child_matched, child_unexplored, bindings)
                    continue

                child_bindings = _try_bind(bindings, query[index].ordinal, child_matched)
                if child_bindings is not None:
                    yield from expand_node(child, index + 1, child_bindings)

        return expand_node(self.root, 0, {})

    def get_generalisations(self, term: Term) -> Iterator[Any]:
        """Values of all keys of which the term is an instance."""
        query = element_infos(term)

        def subterm_end(index):
            unexplored = query[index].child_element_count
            end = index + 1
            while unexplored > 0:
                unexplored += query[end].child_element_count - 1
                end += 1
            return end

        def expand_node(node, index, bindings):
            for element, child in node.children.items():
                if isinstance(element, VariableInfo):
                    end = subterm_end(index)
                    child_bindings = _try_bind(bindings, element.ordinal, tuple(query[index:end]))
                    if child_bindings is None:
                        continue
                elif element == query[index]:
                    end, child_bindings = index + 1, bindings
                else:
                    continue

                if end < len(query):
                    yield from expand_node(child, end, child_bindings)
                else:
                    yield child.value

        return expand_node(self.root, 0, {})

    def __len__(self):
        return self._count
