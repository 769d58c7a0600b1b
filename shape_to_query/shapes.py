"""Reading node shapes out of an rdflib graph."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from rdflib import Graph, Literal, URIRef
from rdflib.namespace import RDF, SH
from rdflib.term import Node

from .structures import PropertyConstraint, ShapeNode

logger = logging.getLogger(__name__)


class ShapeLoadError(ValueError):
    """Raised when a shapes graph cannot be parsed or a shape cannot be located."""


def load_shapes(path: Path, format: Optional[str] = None) -> Graph:
    if not path.exists():
        raise FileNotFoundError(f"SHACL shapes file not found: {path}")
    graph = Graph()
    try:
        graph.parse(path, format=format)
    except Exception as exc:
        raise ShapeLoadError(f"Failed to parse shapes from {path}: {exc}") from exc
    return graph


def parse_shapes(data: str, format: str = "turtle", publicID: Optional[str] = None) -> Graph:
    graph = Graph()
    try:
        graph.parse(data=data, format=format, publicID=publicID)
    except Exception as exc:
        raise ShapeLoadError(f"Failed to parse shapes: {exc}") from exc
    return graph


def find_node_shapes(graph: Graph) -> List[Node]:
    """Return node shapes that are not only used as a nested ``sh:node``.

    Subjects typed ``sh:NodeShape`` come first, followed by untyped subjects
    carrying ``sh:targetClass`` or ``sh:property``.
    """

    nested = set(graph.objects(None, SH.node))
    candidates: List[Node] = []
    for subject in graph.subjects(RDF.type, SH.NodeShape, unique=True):
        if subject not in candidates:
            candidates.append(subject)
    for predicate in (SH.targetClass, SH.property):
        for subject in graph.subjects(predicate, None, unique=True):
            if subject not in candidates and (subject, SH.path, None) not in graph:
                candidates.append(subject)
    top_level = [shape for shape in candidates if shape not in nested]
    # a shape nesting only itself is still a valid entry point
    return top_level or candidates


def resolve_shape(graph: Graph, iri: Optional[str] = None) -> ShapeNode:
    """Pick the shape named ``iri``, or the single top-level node shape."""

    if iri:
        node = URIRef(iri)
        if (node, None, None) not in graph:
            raise ShapeLoadError(f"Shape <{iri}> not found in shapes graph")
        return read_shape(graph, node)

    candidates = find_node_shapes(graph)
    if not candidates:
        raise ShapeLoadError("No node shape found in shapes graph")
    if len(candidates) > 1:
        names = ", ".join(str(c) for c in candidates)
        raise ShapeLoadError(f"Several node shapes found ({names}); select one explicitly")
    return read_shape(graph, candidates[0])


def read_shape(graph: Graph, node: Node, _path: Tuple[Node, ...] = ()) -> ShapeNode:
    """Build the read-only :class:`ShapeNode` view of ``node``.

    A shape reached again through its own ``sh:node`` chain is returned as an
    empty stub carrying only its identifier; the pattern builder stops there.
    """

    if node in _path:
        logger.debug("Cyclic sh:node reference to %s", node)
        return ShapeNode(identifier=node)
    path = _path + (node,)

    target_classes = tuple(dict.fromkeys(graph.objects(node, SH.targetClass)))
    properties = tuple(
        _read_property(graph, prop, path) for prop in _ordered_properties(graph, node)
    )
    return ShapeNode(target_classes=target_classes, properties=properties, identifier=node)


def _read_property(graph: Graph, prop: Node, path: Tuple[Node, ...]) -> PropertyConstraint:
    predicate = graph.value(prop, SH.path)
    if predicate is not None and not isinstance(predicate, URIRef):
        logger.warning("Ignoring unsupported sh:path %s on %s; only predicate paths are handled", predicate, prop)
        predicate = None

    nested = graph.value(prop, SH.node)
    return PropertyConstraint(
        path=predicate,
        deactivated=_is_true(graph.value(prop, SH.deactivated)),
        node=read_shape(graph, nested, path) if nested is not None else None,
    )


def _ordered_properties(graph: Graph, node: Node) -> List[Node]:
    """Properties in graph order, stably sorted by ``sh:order`` when given."""

    props = list(dict.fromkeys(graph.objects(node, SH.property)))

    def _order(prop: Node) -> float:
        value = graph.value(prop, SH.order)
        try:
            return float(value.toPython()) if isinstance(value, Literal) else float("inf")
        except (TypeError, ValueError):
            return float("inf")

    return sorted(props, key=_order)


def _is_true(value: Optional[Node]) -> bool:
    return isinstance(value, Literal) and value.toPython() is True
