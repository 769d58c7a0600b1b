"""Public entry points of the shape-to-pattern compiler."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from rdflib.term import Node, URIRef

from .builder import build_patterns, construct_triples
from .patterns import PatternNode, TriplePattern, collapse
from .rendering import Namespaces, render_construct, render_select, render_triples, render_where
from .structures import ShapeNode
from .variables import FocusVariable

logger = logging.getLogger(__name__)


@dataclass
class ConstructQuery:
    construct_triples: List[TriplePattern]
    where_pattern: PatternNode

    def build(self, namespaces: Namespaces = None) -> str:
        return render_construct(self, namespaces)


@dataclass
class ShapePatterns:
    """WHERE pattern and CONSTRUCT template compiled from one shape."""

    focus: FocusVariable
    where_pattern: PatternNode
    construct_triples: List[TriplePattern] = field(default_factory=list)

    def where_clause(self, namespaces: Namespaces = None) -> str:
        return render_where(self.where_pattern, namespaces)

    def construct_clause(self, namespaces: Namespaces = None) -> str:
        return render_triples(self.construct_triples, namespaces)

    def select(self, namespaces: Namespaces = None) -> str:
        return render_select(self.where_pattern, namespaces)

    def construct(self, namespaces: Namespaces = None) -> str:
        return ConstructQuery(self.construct_triples, self.where_pattern).build(namespaces)


def resolve_focus(
    subject_variable: Optional[str] = None, focus_node: Optional[Node] = None
) -> FocusVariable:
    if (subject_variable is None) == (focus_node is None):
        raise ValueError("Provide exactly one of subject_variable or focus_node")
    if focus_node is not None:
        # blank nodes act as variables in WHERE and mint fresh nodes in CONSTRUCT
        if not isinstance(focus_node, URIRef):
            raise ValueError(f"focus_node must be an IRI, got {focus_node!r}")
        return FocusVariable.for_term(focus_node)
    if not subject_variable:
        raise ValueError("subject_variable must be a non-empty name")
    return FocusVariable.create(subject_variable.lstrip("?$"))


def compile_where_patterns(
    shape: ShapeNode,
    subject_variable: str,
    object_variable_prefix: str = "",
) -> PatternNode:
    """Compile ``shape`` into a WHERE pattern rooted at ``?subject_variable``.

    A single alternative is returned as a plain :class:`Block`.
    """

    focus = resolve_focus(subject_variable=subject_variable)
    pattern = collapse(build_patterns(shape, focus, object_variable_prefix))
    logger.debug("Compiled WHERE pattern for %s: %r", focus, pattern)
    return pattern


def compile_construct_query(
    shape: ShapeNode,
    subject_variable: Optional[str] = None,
    focus_node: Optional[Node] = None,
) -> ConstructQuery:
    """Compile ``shape`` into a CONSTRUCT template and its WHERE pattern.

    The focus is either a variable named ``subject_variable`` or the fixed
    term ``focus_node``; both sides share variable names.
    """

    focus = resolve_focus(subject_variable, focus_node)
    where_pattern = collapse(build_patterns(shape, focus))
    template = construct_triples(shape, focus)
    logger.debug("Compiled CONSTRUCT for %s with %d template triples", focus, len(template))
    return ConstructQuery(construct_triples=template, where_pattern=where_pattern)


def shape_to_patterns(
    shape: ShapeNode,
    subject_variable: Optional[str] = None,
    focus_node: Optional[Node] = None,
    object_variable_prefix: str = "",
) -> ShapePatterns:
    focus = resolve_focus(subject_variable, focus_node)
    return ShapePatterns(
        focus=focus,
        where_pattern=collapse(build_patterns(shape, focus, object_variable_prefix)),
        construct_triples=construct_triples(shape, focus, object_variable_prefix),
    )
