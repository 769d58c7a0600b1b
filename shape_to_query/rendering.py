"""SPARQL text rendering for compiled patterns.

Prefixes are passed in explicitly, either as an rdflib ``NamespaceManager``
(typically ``shapes_graph.namespace_manager``) or as a ``{prefix: iri}``
mapping. Only prefixes actually used by the rendered terms are declared.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping, Optional, Union

from rdflib import Graph, URIRef
from rdflib.namespace import NamespaceManager
from rdflib.term import Literal, Node

from .patterns import Block, Element, InFilter, PatternNode, TriplePattern

if TYPE_CHECKING:  # pragma: no cover
    from .compiler import ConstructQuery

Namespaces = Union[NamespaceManager, Mapping[str, str], None]

INDENT = "  "


class RenderError(ValueError):
    """Raised when a pattern cannot be expressed as SPARQL text."""


def namespace_manager(namespaces: Namespaces) -> Optional[NamespaceManager]:
    if namespaces is None or isinstance(namespaces, NamespaceManager):
        return namespaces
    manager = NamespaceManager(Graph(bind_namespaces="none"), bind_namespaces="none")
    for prefix, iri in namespaces.items():
        manager.bind(prefix, URIRef(iri), override=True, replace=True)
    return manager


class _Writer:
    def __init__(self, namespaces: Namespaces) -> None:
        self.manager = namespace_manager(namespaces)
        self.used_prefixes: Dict[str, URIRef] = {}

    def term(self, term: Optional[Node]) -> str:
        if term is None:
            raise RenderError("Cannot render a triple pattern without a predicate (missing or unsupported sh:path?)")
        if isinstance(term, Literal) or self.manager is None:
            return term.n3()
        text = term.n3(self.manager)
        if isinstance(term, URIRef) and not text.startswith("<"):
            prefix = text.split(":", 1)[0]
            self.used_prefixes[prefix] = self.manager.store.namespace(prefix)
        return text

    def element(self, element: Element) -> str:
        if isinstance(element, InFilter):
            values = ", ".join(self.term(value) for value in element.values)
            return f"FILTER ( {self.term(element.variable)} IN ({values}) )"
        subject, predicate, obj = element
        return f"{self.term(subject)} {self.term(predicate)} {self.term(obj)} ."

    def block(self, block: Block, depth: int) -> List[str]:
        return [INDENT * depth + self.element(el) for el in block.elements]

    def pattern(self, pattern: PatternNode, depth: int = 1) -> List[str]:
        if isinstance(pattern, Block):
            return self.block(pattern, depth)
        if len(pattern.alternatives) == 1:
            return self.block(pattern.alternatives[0], depth)
        lines: List[str] = []
        pad = INDENT * depth
        for position, alternative in enumerate(pattern.alternatives):
            if position:
                lines.append(f"{pad}UNION")
            lines.append(f"{pad}{{")
            lines.extend(self.block(alternative, depth + 1))
            lines.append(f"{pad}}}")
        return lines

    def prologue(self) -> List[str]:
        return [f"PREFIX {prefix}: <{iri}>" for prefix, iri in sorted(self.used_prefixes.items())]


def render_where(pattern: PatternNode, namespaces: Namespaces = None) -> str:
    """Render the body of a WHERE group (without the surrounding braces)."""

    return "\n".join(_Writer(namespaces).pattern(pattern))


def render_triples(triples: Iterable[TriplePattern], namespaces: Namespaces = None) -> str:
    writer = _Writer(namespaces)
    return "\n".join(INDENT + writer.element(triple) for triple in triples)


def render_select(pattern: PatternNode, namespaces: Namespaces = None) -> str:
    writer = _Writer(namespaces)
    body = writer.pattern(pattern)
    lines = writer.prologue()
    lines.append("SELECT * WHERE {")
    lines.extend(body)
    lines.append("}")
    return "\n".join(lines)


def render_construct(query: "ConstructQuery", namespaces: Namespaces = None) -> str:
    writer = _Writer(namespaces)
    template = [INDENT + writer.element(triple) for triple in query.construct_triples]
    body = writer.pattern(query.where_pattern)
    lines = writer.prologue()
    lines.append("CONSTRUCT {")
    lines.extend(template)
    lines.append("} WHERE {")
    lines.extend(body)
    lines.append("}")
    return "\n".join(lines)
