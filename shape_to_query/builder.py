"""Recursive translation of node shapes into graph patterns."""
from __future__ import annotations

import logging
from typing import Dict, Hashable, List, Optional, Tuple

from rdflib.namespace import RDF

from .patterns import Block, Element, InFilter, PatternNode, TriplePattern, prefix_with, union_of
from .structures import PropertyConstraint, ShapeNode
from .variables import FocusVariable, object_variable, target_class_variable

logger = logging.getLogger(__name__)

ShapePath = Tuple[Hashable, ...]


def target_class_elements(shape: ShapeNode, focus: FocusVariable) -> Tuple[Element, ...]:
    """Type constraint for ``focus``: one triple, plus an IN filter for several classes."""

    classes = shape.target_classes
    if not classes:
        return ()
    if len(classes) == 1:
        return (TriplePattern(focus.term, RDF.type, classes[0]),)
    class_var = target_class_variable(focus)
    return (
        TriplePattern(focus.term, RDF.type, class_var.term),
        InFilter(class_var.term, tuple(classes)),
    )


def build_patterns(
    shape: ShapeNode,
    focus: FocusVariable,
    object_variable_prefix: str = "",
    _path: ShapePath = (),
) -> PatternNode:
    """Build the WHERE pattern matching ``shape`` at ``focus``.

    Every active property contributes its own triple as one alternative and,
    when it carries a nested ``sh:node``, one alternative per alternative of
    the nested pattern, each prefixed with the property triple. Target class
    elements are prepended to every alternative. The result is a flat union,
    or a block when the shape has no active properties.
    """

    path = _path + (_shape_key(shape),)
    type_elements = target_class_elements(shape, focus)

    branches: List[PatternNode] = []
    for index, prop in enumerate(shape.active_properties):
        value = object_variable(focus, index, object_variable_prefix)
        triple = TriplePattern(focus.term, prop.path, value.term)
        branches.append(Block((triple,)))

        nested = _nested_shape(prop, path)
        if nested is None:
            continue
        nested_pattern = build_patterns(nested, value, _path=path)
        if isinstance(nested_pattern, Block) and not nested_pattern.elements:
            continue
        branches.append(prefix_with((triple,), nested_pattern))

    if not branches:
        return Block(type_elements)
    return prefix_with(type_elements, union_of(branches))


def construct_triples(
    shape: ShapeNode,
    focus: FocusVariable,
    object_variable_prefix: str = "",
) -> List[TriplePattern]:
    """Duplicate-free CONSTRUCT template in depth-first declaration order."""

    seen: Dict[TriplePattern, None] = {}
    _collect_triples(shape, focus, object_variable_prefix, seen, ())
    return list(seen)


def _collect_triples(
    shape: ShapeNode,
    focus: FocusVariable,
    object_variable_prefix: str,
    seen: Dict[TriplePattern, None],
    _path: ShapePath,
) -> None:
    path = _path + (_shape_key(shape),)
    for element in target_class_elements(shape, focus):
        if isinstance(element, TriplePattern):
            seen.setdefault(element, None)

    for index, prop in enumerate(shape.active_properties):
        value = object_variable(focus, index, object_variable_prefix)
        seen.setdefault(TriplePattern(focus.term, prop.path, value.term), None)
        nested = _nested_shape(prop, path)
        if nested is not None:
            _collect_triples(nested, value, "", seen, path)


def _shape_key(shape: ShapeNode) -> Hashable:
    if shape.identifier is not None:
        return shape.identifier
    return id(shape)


def _nested_shape(prop: PropertyConstraint, path: ShapePath) -> Optional[ShapeNode]:
    nested = prop.node
    if nested is None:
        return None
    if _shape_key(nested) in path:
        logger.warning(
            "Shape %s refers back to itself through %s; not descending further",
            nested.identifier if nested.identifier is not None else "<anonymous>",
            prop.path,
        )
        return None
    return nested
