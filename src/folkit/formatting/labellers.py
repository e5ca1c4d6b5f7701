"""Labellers give identifiers that have no useful text of their own a readable, unique label.

A labeller creates labelling scopes; within one scope an identifier always
gets the same label and different identifiers never share one.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Iterator, Mapping

from folkit.exceptions import LabelSetExhaustedError


_SUBSCRIPT_DIGITS = str.maketrans("0123456789", "₀₁₂₃₄₅₆₇₈₉")


class LabellingScope(ABC):
    @abstractmethod
    def get_label(self, identifier) -> str:
        pass


class Labeller(ABC):
    @abstractmethod
    def make_labelling_scope(self) -> LabellingScope:
        pass


class _LabelSetScope(LabellingScope):
    def __init__(self, labels: Iterator[str], label_count: int):
        self._labels = labels
        self._label_count = label_count
        self._labels_by_identifier: Dict[object, str] = {}

    def get_label(self, identifier) -> str:
        label = self._labels_by_identifier.get(identifier)
        if label is None:
            label = next(self._labels, None)
            if label is None:
                raise LabelSetExhaustedError(self._label_count)
            self._labels_by_identifier[identifier] = label
        return label


class LabelSetLabeller(Labeller):
    """
    Hands out labels from a finite set, in order.

    Args:
        labels: The labels; a string is treated as a sequence of one-character labels
    """

    def __init__(self, labels: Iterable[str]):
        self.labels = list(labels)

    def make_labelling_scope(self) -> LabellingScope:
        return _LabelSetScope(iter(self.labels), len(self.labels))


class _SubscriptSuffixScope(LabellingScope):
    def __init__(self):
        self._labels_by_identifier: Dict[object, str] = {}
        self._used = set()

    def get_label(self, identifier) -> str:
        label = self._labels_by_identifier.get(identifier)
        if label is not None:
            return label

        base = str(getattr(identifier, 'original_identifier', identifier))
        suffix = 1
        while f"{base}{str(suffix).translate(_SUBSCRIPT_DIGITS)}" in self._used:
            suffix += 1
        label = f"{base}{str(suffix).translate(_SUBSCRIPT_DIGITS)}"
        self._used.add(label)
        self._labels_by_identifier[identifier] = label
        return label


class SubscriptSuffixLabeller(Labeller):
    """Labels standardised variables with their original name and a subscript: x₁, x₂, ..."""

    def make_labelling_scope(self) -> LabellingScope:
        return _SubscriptSuffixScope()


class _ByTypeScope(LabellingScope):
    def __init__(self, scopes: Mapping[type, LabellingScope]):
        self._scopes = scopes

    def get_label(self, identifier) -> str:
        scope = self._scopes.get(type(identifier))
        if scope is None:
            return str(identifier)
        return scope.get_label(identifier)


class ByTypeLabeller(Labeller):
    """
    Picks a labeller by the type of the identifier.

    Identifiers of any other type are labelled with their own text.
    """

    def __init__(self, labellers_by_type: Mapping[type, Labeller]):
        self.labellers_by_type = dict(labellers_by_type)

    def make_labelling_scope(self) -> LabellingScope:
        return _ByTypeScope({
            identifier_type: labeller.make_labelling_scope()
            for identifier_type, labeller in self.labellers_by_type.items()})
