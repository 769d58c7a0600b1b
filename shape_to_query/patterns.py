"""Pattern tree structures and the combinators that keep unions flat."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union

from rdflib.term import Node, Variable


class TriplePattern(NamedTuple):
    subject: Node
    predicate: Optional[Node]
    object: Node


@dataclass(frozen=True)
class InFilter:
    """``FILTER ( ?variable IN (v1, v2, ...) )``."""

    variable: Variable
    values: Tuple[Node, ...]


Element = Union[TriplePattern, InFilter]


@dataclass(frozen=True)
class Block:
    """An ordered group of triple patterns and filters."""

    elements: Tuple[Element, ...] = ()

    @property
    def triples(self) -> List[TriplePattern]:
        return [el for el in self.elements if isinstance(el, TriplePattern)]

    @property
    def filters(self) -> List[InFilter]:
        return [el for el in self.elements if isinstance(el, InFilter)]

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self.elements)


@dataclass(frozen=True)
class UnionPattern:
    """Alternative blocks, each independently satisfiable.

    Alternatives are always blocks; nested unions are flattened on
    construction through :func:`union_of`.
    """

    alternatives: Tuple[Block, ...]

    def __post_init__(self) -> None:
        if not self.alternatives:
            raise ValueError("A union needs at least one alternative")
        for alternative in self.alternatives:
            if not isinstance(alternative, Block):
                raise TypeError(f"Union alternatives must be blocks, got {type(alternative).__name__}")

    def __len__(self) -> int:
        return len(self.alternatives)

    def __iter__(self) -> Iterator[Block]:
        return iter(self.alternatives)


PatternNode = Union[Block, UnionPattern]


def alternatives_of(node: PatternNode) -> Tuple[Block, ...]:
    if isinstance(node, UnionPattern):
        return node.alternatives
    return (node,)


def prefix_with(elements: Sequence[Element], node: PatternNode) -> PatternNode:
    """Prepend ``elements`` to every alternative of ``node``."""

    head = tuple(elements)
    if not head:
        return node
    if isinstance(node, UnionPattern):
        return UnionPattern(tuple(Block(head + alt.elements) for alt in node.alternatives))
    return Block(head + node.elements)


def union_of(nodes: Iterable[PatternNode]) -> UnionPattern:
    """Concatenate the alternatives of ``nodes`` into one flat union."""

    alternatives: List[Block] = []
    for node in nodes:
        alternatives.extend(alternatives_of(node))
    return UnionPattern(tuple(alternatives))


def collapse(node: PatternNode) -> PatternNode:
    """Render-ready form: a single-alternative union becomes its block."""

    if isinstance(node, UnionPattern) and len(node.alternatives) == 1:
        return node.alternatives[0]
    return node


def iter_triples(node: PatternNode) -> Iterator[TriplePattern]:
    for alternative in alternatives_of(node):
        yield from alternative.triples
