"""Artifact generators for stack outputs.

Both generators are pure. The JSON artifact folds duplicate keys (last write
wins) while the type declaration keeps one line per output, duplicates
included. Keys are emitted verbatim in the declaration.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Iterable

from jinja2 import Environment, StrictUndefined

from ..core.models import Output

TYPINGS_TEMPLATE = (
    "declare module NodeJs { interface ProcessEnv { "
    "{% for output in outputs %}{{ output.key }}: string,\n{% endfor %}"
    " } }"
)

_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)
_typings_template = _env.from_string(TYPINGS_TEMPLATE)


@dataclass(frozen=True)
class Artifacts:
    json: str
    typings: str


def fold_outputs(outputs: Iterable[Output]) -> dict[str, str]:
    """Fold outputs into a mapping; later duplicates overwrite earlier ones."""
    folded: dict[str, str] = {}
    for output in outputs:
        folded[output.key] = output.value
    return folded


def render_json(outputs: Iterable[Output]) -> str:
    """Render outputs as a compact flat JSON object."""
    return json.dumps(fold_outputs(outputs), ensure_ascii=False, separators=(",", ":"))


def render_typings(outputs: Iterable[Output]) -> str:
    """Render a ``NodeJs.ProcessEnv`` declaration, one line per output."""
    return _typings_template.render(outputs=list(outputs))


def render_artifacts(outputs: Iterable[Output]) -> Artifacts:
    items = list(outputs)
    return Artifacts(json=render_json(items), typings=render_typings(items))
