"""Typed shape objects consumed by the compiler."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from rdflib.term import Node


@dataclass(frozen=True)
class PropertyConstraint:
    """A ``sh:property`` with a single-predicate ``sh:path``."""

    path: Optional[Node]
    deactivated: bool = False
    node: Optional["ShapeNode"] = None


@dataclass(frozen=True)
class ShapeNode:
    """Read-only view of a node shape.

    ``identifier`` is the graph node the shape was read from and is used to
    detect shapes that refer back to themselves.
    """

    target_classes: Tuple[Node, ...] = ()
    properties: Tuple[PropertyConstraint, ...] = ()
    identifier: Optional[Node] = None

    @property
    def active_properties(self) -> Tuple[PropertyConstraint, ...]:
        return tuple(prop for prop in self.properties if not prop.deactivated)
