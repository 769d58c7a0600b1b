"""Command-line entry point for shape-to-query."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from rdflib import URIRef

from .compiler import shape_to_patterns
from .config import QUERY_FORMS, CompilerConfig
from .rendering import RenderError
from .shacl import check_shapes_graph
from .shapes import ShapeLoadError, load_shapes, resolve_shape

logger = logging.getLogger(__name__)


def build_parser(defaults: CompilerConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shape-to-query",
        description="Compile a SHACL node shape into a SPARQL SELECT or CONSTRUCT query",
    )
    parser.add_argument(
        "shapes",
        type=Path,
        nargs="?",
        default=defaults.shapes_path,
        help="Path to the shapes graph (Turtle or any rdflib format)",
    )
    parser.add_argument("--shape", default=defaults.shape_iri, help="IRI of the node shape to compile")
    parser.add_argument("--format", dest="shapes_format", default=defaults.shapes_format, help="rdflib parser format")
    parser.add_argument("--form", choices=QUERY_FORMS, default=defaults.query_form, help="Query form to emit")
    focus = parser.add_mutually_exclusive_group()
    focus.add_argument(
        "--subject-variable",
        default=None,
        help=f"Name of the focus variable (default: {defaults.subject_variable})",
    )
    focus.add_argument("--focus-node", default=defaults.focus_node, help="Fixed IRI used as focus instead of a variable")
    parser.add_argument(
        "--object-prefix",
        dest="object_variable_prefix",
        default=defaults.object_variable_prefix,
        help="Prefix inserted into object variable names",
    )
    parser.add_argument("--output", type=Path, default=defaults.output_path, help="Write the query here instead of stdout")
    parser.add_argument(
        "--check-shapes",
        action=argparse.BooleanOptionalAction,
        default=defaults.check_shapes,
        help="Validate the shapes graph against SHACL-SHACL before compiling",
    )
    parser.add_argument("--log-level", default=defaults.log_level, help="Logging level (default: WARNING)")
    return parser


def parse_config(argv: Optional[Sequence[str]] = None) -> CompilerConfig:
    try:
        defaults = CompilerConfig.from_env()
    except ValueError as exc:
        build_parser(CompilerConfig()).error(str(exc))
    parser = build_parser(defaults)
    args = parser.parse_args(argv)
    if args.shapes is None:
        parser.error("a shapes file is required (argument or SHAPE_TO_QUERY_SHAPES)")

    focus_node = args.focus_node
    subject_variable = args.subject_variable
    if subject_variable is not None:
        focus_node = None
    return CompilerConfig(
        shapes_path=args.shapes,
        shape_iri=args.shape,
        query_form=args.form,
        subject_variable=subject_variable or defaults.subject_variable,
        focus_node=focus_node,
        object_variable_prefix=args.object_variable_prefix,
        shapes_format=args.shapes_format,
        output_path=args.output,
        check_shapes=args.check_shapes,
        log_level=args.log_level.upper(),
    )


def run(config: CompilerConfig) -> str:
    """Load, optionally check, and compile the configured shape into query text."""

    graph = load_shapes(config.shapes_path, format=config.shapes_format)
    if config.check_shapes:
        check = check_shapes_graph(graph)
        if not check.conforms:
            raise ShapeLoadError(f"Shapes graph is not well-formed:\n{check.message}")

    shape = resolve_shape(graph, config.shape_iri)
    if config.focus_node:
        patterns = shape_to_patterns(
            shape,
            focus_node=URIRef(config.focus_node),
            object_variable_prefix=config.object_variable_prefix,
        )
    else:
        patterns = shape_to_patterns(
            shape,
            subject_variable=config.subject_variable,
            object_variable_prefix=config.object_variable_prefix,
        )
    logger.info("Compiled shape %s as %s query", shape.identifier, config.query_form)

    namespaces = graph.namespace_manager
    if config.query_form == "construct":
        return patterns.construct(namespaces)
    return patterns.select(namespaces)


def main(argv: Optional[Sequence[str]] = None) -> int:
    config = parse_config(argv)
    logging.basicConfig(level=getattr(logging, config.log_level, logging.WARNING))
    try:
        query = run(config)
    except (FileNotFoundError, ShapeLoadError, RenderError) as exc:
        print(f"shape-to-query: {exc}", file=sys.stderr)
        return 1

    if config.output_path is not None:
        config.ensure_output_dirs()
        config.output_path.write_text(query + "\n", encoding="utf-8")
    else:
        print(query)
    return 0


if __name__ == "__main__":
    sys.exit(main())
