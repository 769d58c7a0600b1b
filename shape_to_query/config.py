"""Configuration helpers for shape-to-query."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

ENV_PREFIX = "SHAPE_TO_QUERY_"
QUERY_FORMS = ("select", "construct")


@dataclass
class CompilerConfig:
    """Runtime configuration for the ``shape-to-query`` command."""

    shapes_path: Optional[Path] = None
    shape_iri: Optional[str] = None
    query_form: str = "select"
    subject_variable: str = "node"
    focus_node: Optional[str] = None
    object_variable_prefix: str = ""
    shapes_format: Optional[str] = None
    output_path: Optional[Path] = None
    check_shapes: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.query_form not in QUERY_FORMS:
            raise ValueError(f"Unknown query form {self.query_form!r}; expected one of {QUERY_FORMS}")

    def ensure_output_dirs(self) -> None:
        if self.output_path is not None:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CompilerConfig":
        """Build a config from ``SHAPE_TO_QUERY_*`` variables.

        When ``environ`` is omitted, a ``.env`` file is loaded first and the
        process environment is used.
        """

        if environ is None:
            load_dotenv()
            environ = os.environ

        def _get(name: str) -> Optional[str]:
            value = environ.get(ENV_PREFIX + name)
            return value if value else None

        shapes = _get("SHAPES")
        output = _get("OUTPUT")
        return cls(
            shapes_path=Path(shapes) if shapes else None,
            shape_iri=_get("SHAPE"),
            query_form=(_get("FORM") or "select").lower(),
            subject_variable=_get("SUBJECT_VARIABLE") or "node",
            focus_node=_get("FOCUS_NODE"),
            object_variable_prefix=_get("OBJECT_VARIABLE_PREFIX") or "",
            shapes_format=_get("FORMAT"),
            output_path=Path(output) if output else None,
            check_shapes=(_get("CHECK_SHAPES") or "false").lower() == "true",
            log_level=(_get("LOG_LEVEL") or "WARNING").upper(),
        )
