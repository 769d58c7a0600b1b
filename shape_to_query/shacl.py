"""Well-formedness check for shapes graphs (SHACL-SHACL via pyshacl)."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from pyshacl import validate
from pyshacl.errors import ReportableRuntimeError
from rdflib import Graph

logger = logging.getLogger(__name__)


@dataclass
class ShapesCheck:
    conforms: bool
    message: str


def check_shapes_graph(shapes_graph: Graph) -> ShapesCheck:
    """Validate ``shapes_graph`` against the SHACL-for-SHACL shapes.

    Only the shapes themselves are checked; no data graph is involved, so
    the run is against an empty graph with meta validation switched on.
    """

    try:
        conforms, _, text_report = validate(
            Graph(),
            shacl_graph=shapes_graph,
            inference="none",
            meta_shacl=True,
            advanced=False,
            debug=False,
        )
    except ReportableRuntimeError as exc:
        logger.info("Shapes graph failed meta validation")
        return ShapesCheck(False, str(getattr(exc, "message", exc)))
    return ShapesCheck(bool(conforms), "" if conforms else str(text_report))
