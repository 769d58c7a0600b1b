"""shape-to-query: compile SHACL node shapes into SPARQL graph patterns."""

from .compiler import (
    ConstructQuery,
    ShapePatterns,
    compile_construct_query,
    compile_where_patterns,
    shape_to_patterns,
)
from .patterns import Block, InFilter, TriplePattern, UnionPattern
from .rendering import RenderError, render_construct, render_select, render_where
from .shapes import ShapeLoadError, load_shapes, parse_shapes, read_shape, resolve_shape
from .structures import PropertyConstraint, ShapeNode
from .variables import FocusVariable

__all__ = [
    "Block",
    "ConstructQuery",
    "FocusVariable",
    "InFilter",
    "PropertyConstraint",
    "RenderError",
    "ShapeLoadError",
    "ShapeNode",
    "ShapePatterns",
    "TriplePattern",
    "UnionPattern",
    "compile_construct_query",
    "compile_where_patterns",
    "load_shapes",
    "parse_shapes",
    "read_shape",
    "render_construct",
    "render_select",
    "render_where",
    "resolve_shape",
    "shape_to_patterns",
]
