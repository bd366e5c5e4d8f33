"""Artifact rendering and writing."""

from .generators import Artifacts, fold_outputs, render_artifacts, render_json, render_typings
from .io import ArtifactWriter, atomic_write_text

__all__ = [
    "ArtifactWriter",
    "Artifacts",
    "atomic_write_text",
    "fold_outputs",
    "render_artifacts",
    "render_json",
    "render_typings",
]
