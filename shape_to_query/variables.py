"""Scoped variable naming for focus nodes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from rdflib.term import Node, Variable

DEFAULT_RESOURCE_NAME = "resource"
TARGET_CLASS_SUFFIX = "targetClass"


@dataclass(frozen=True)
class FocusVariable:
    """The term a shape is applied to, plus the root used to name its children.

    ``term`` is what appears in subject position. For a variable focus it is
    ``?<name>``; for a fixed focus it is the IRI or blank node itself while
    children are still named from ``name``.
    """

    term: Node
    name: str

    @classmethod
    def create(cls, name: str) -> "FocusVariable":
        return cls(term=Variable(name), name=name)

    @classmethod
    def for_term(cls, term: Node, name: str = DEFAULT_RESOURCE_NAME) -> "FocusVariable":
        return cls(term=term, name=name)

    def extend(self, suffix: Union[int, str]) -> "FocusVariable":
        """Derive the child variable ``<name>_<suffix>``."""

        child = f"{self.name}_{suffix}"
        return FocusVariable(term=Variable(child), name=child)

    @property
    def is_variable(self) -> bool:
        return isinstance(self.term, Variable)

    def __str__(self) -> str:
        return self.term.n3()


def object_variable(focus: FocusVariable, index: int, prefix: str = "") -> FocusVariable:
    """Name the object of the ``index``-th active property of ``focus``.

    ``prefix`` is inserted once between the focus name and the index, so
    ``node`` with prefix ``p`` yields ``node_p_0``.
    """

    scope = focus.extend(prefix) if prefix else focus
    return scope.extend(index)


def target_class_variable(focus: FocusVariable) -> FocusVariable:
    return focus.extend(TARGET_CLASS_SUFFIX)
