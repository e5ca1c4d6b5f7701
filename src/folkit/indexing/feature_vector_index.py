"""Feature vector index for retrieving subsuming and subsumed clauses."""

import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from folkit.core.clauses import Clause


logger = logging.getLogger(__name__)

Component = Tuple[Any, int]


class _Node:
    __slots__ = ('children', 'entries')

    def __init__(self):
        self.children: Dict[Component, '_Node'] = {}
        # (clause, value) pairs; keys are compared as variants, not by equality
        self.entries: List[Tuple[Clause, Any]] = []

    def find_entry(self, clause: Clause) -> Optional[int]:
        for i, (key, _) in enumerate(self.entries):
            if key.is_variant_of(clause):
                return i
        return None


class FeatureVectorIndex:
    """
    Index of clauses, keyed by feature vectors, for subsumption retrieval.

    A feature vector maps features to positive magnitudes and is stored as a
    path of (feature, magnitude) components sorted by feature. A clause that
    subsumes another has no greater magnitude for any feature, so most
    candidates can be ruled out by comparing vectors before the full
    subsumption check.

    Vector pruning is only sound when the subsuming clause cannot merge
    literals, so clauses with unifiable literals are checked linearly.

    Args:
        feature_vector_selector: Maps a clause to its feature vector, as a
            mapping or iterable of (feature, magnitude) pairs
        feature_sort_key: Key function giving a total order over features
        content: Optional initial (clause, value) pairs
    """

    def __init__(self, feature_vector_selector: Callable[[Clause], Any],
                 feature_sort_key: Callable[[Any], Any],
                 content: Iterable[Tuple[Clause, Any]] = ()):
        self.feature_vector_selector = feature_vector_selector
        self.feature_sort_key = feature_sort_key
        self.root = _Node()
        # Keys whose literals can merge under a substitution
        self._merging: List[Tuple[Clause, Any]] = []
        for clause, value in content:
            self.add(clause, value)

    def _make_feature_vector(self, clause: Clause) -> List[Component]:
        vector = self.feature_vector_selector(clause)
        if isinstance(vector, Mapping):
            vector = vector.items()
        return sorted(
            ((feature, magnitude) for feature, magnitude in vector if magnitude),
            key=lambda component: self.feature_sort_key(component[0]))

    def _children_ascending(self, node: _Node) -> List[Tuple[Component, _Node]]:
        return sorted(
            node.children.items(),
            key=lambda item: (self.feature_sort_key(item[0][0]), item[0][1]))

    def add(self, clause: Clause, value=None):
        """
        Add a clause to the index.

        Args:
            clause: The key
            value: Value to store against the key; the clause itself if omitted

        Raises:
            ValueError: If the clause is empty, or a variant of it is already present
        """
        if clause.is_empty:
            raise ValueError("The empty clause is not a valid key")

        node = self.root
        for component in self._make_feature_vector(clause):
            node = node.children.setdefault(component, _Node())

        if node.find_entry(clause) is not None:
            raise ValueError("Key already present")
        entry = (clause, clause if value is None else value)
        node.entries.append(entry)
        if clause.has_unifiable_literals:
            self._merging.append(entry)

    def remove(self, clause: Clause) -> bool:
        """
        Remove a clause (or a variant of it) from the index.

        Returns:
            True if the clause was present
        """
        vector = self._make_feature_vector(clause)

        def remove_from(node, index):
            if index == len(vector):
                entry = node.find_entry(clause)
                if entry is None:
                    return False
                del node.entries[entry]
                self._merging = [(key, value) for key, value in self._merging if not key.is_variant_of(clause)]
                return True

            child = node.children.get(vector[index])
            if child is None or not remove_from(child, index + 1):
                return False
            if not child.children and not child.entries:
                del node.children[vector[index]]
            return True

        return remove_from(self.root, 0)

    def _find_node(self, clause: Clause) -> Optional[_Node]:
        node = self.root
        for component in self._make_feature_vector(clause):
            node = node.children.get(component)
            if node is None:
                return None
        return node

    def contains(self, clause: Clause) -> bool:
        node = self._find_node(clause)
        return node is not None and node.find_entry(clause) is not None

    def __contains__(self, clause):
        return self.contains(clause)

    def get(self, clause: Clause, default=None):
        """Value stored against a variant of the clause."""
        node = self._find_node(clause)
        if node is None:
            return default
        entry = node.find_entry(clause)
        return default if entry is None else node.entries[entry][1]

    def get_subsuming(self, clause: Clause) -> Iterator[Any]:
        """Values of all stored clauses that subsume the given clause."""
        return (value for _, value in self._subsuming_entries(clause))

    def _subsuming_entries(self, clause: Clause) -> Iterator[Tuple[Clause, Any]]:
        vector = self._make_feature_vector(clause)
        merging = list(self._merging)
        merging_keys = {key for key, _ in merging}

        def expand_node(node, index):
            if index == len(vector):
                for key, value in node.entries:
                    if key not in merging_keys and key.subsumes(clause):
                        yield key, value
                return

            feature, magnitude = vector[index]
            feature_key = self.feature_sort_key(feature)
            for (child_feature, child_magnitude), child in self._children_ascending(node):
                child_key = self.feature_sort_key(child_feature)
                if child_key < feature_key:
                    continue
                if child_key > feature_key:
                    break
                if child_magnitude <= magnitude:
                    yield from expand_node(child, index + 1)

            # Stored clauses may not have this feature at all (magnitude zero)
            yield from expand_node(node, index + 1)

        yield from expand_node(self.root, 0)
        for key, value in merging:
            if key.subsumes(clause):
                yield key, value

    def get_subsumed(self, clause: Clause) -> Iterator[Any]:
        """Values of all stored clauses that the given clause subsumes."""
        return (value for _, value in self._subsumed_entries(clause))

    def _subsumed_entries(self, clause: Clause) -> Iterator[Tuple[Clause, Any]]:
        if clause.has_unifiable_literals:
            return ((key, value) for key, value in self._entries() if clause.subsumes(key))

        vector = self._make_feature_vector(clause)

        def expand_node(node, index):
            if index == len(vector):
                yield from all_descendant_entries(node)
                return

            feature_key = self.feature_sort_key(vector[index][0])
            magnitude = vector[index][1]
            for (child_feature, child_magnitude), child in self._children_ascending(node):
                child_key = self.feature_sort_key(child_feature)
                if child_key > feature_key:
                    # Stored clause lacks this component of the query's vector
                    break
                if child_key == feature_key:
                    if child_magnitude >= magnitude:
                        yield from expand_node(child, index + 1)
                else:
                    yield from expand_node(child, index)

        def all_descendant_entries(node):
            stack = [node]
            while stack:
                current = stack.pop()
                for key, value in current.entries:
                    if clause.subsumes(key):
                        yield key, value
                stack.extend(current.children.values())

        return expand_node(self.root, 0)

    def try_replace_subsumed(self, clause: Clause, value=None) -> bool:
        """
        Add a clause unless a stored clause subsumes it, first removing every stored clause it subsumes.

        Returns:
            True if the clause was added
        """
        if clause.is_empty:
            raise ValueError("The empty clause is not a valid key")
        if any(True for _ in self._subsuming_entries(clause)):
            return False

        subsumed = [key for key, _ in self._subsumed_entries(clause)]
        for key in subsumed:
            self.remove(key)
        if subsumed:
            logger.debug(f"{clause!r} replaced {len(subsumed)} subsumed clause(s)")

        self.add(clause, value)
        return True

    def _entries(self) -> Iterator[Tuple[Clause, Any]]:
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield from list(node.entries)
            stack.extend(node.children.values())

    def __iter__(self) -> Iterator[Tuple[Clause, Any]]:
        """Stored (clause, value) pairs."""
        return iter(list(self._entries()))

    def __len__(self):
        return sum(1 for _ in self._entries())
