"""Utility helpers for working with model files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from modelsift.config import DEFAULT_MODEL_EXTENSIONS

LOGGER = logging.getLogger(__name__)


def is_model_file(path: Path, extensions: Iterable[str] = DEFAULT_MODEL_EXTENSIONS) -> bool:
    return path.suffix.lower() in {ext.lower() for ext in extensions}


def iter_model_paths(
    inputs: Iterable[Path], extensions: Iterable[str] = DEFAULT_MODEL_EXTENSIONS
) -> Iterator[Path]:
    """Yield model file paths from input paths, descending into directories."""
    allowed = tuple(ext.lower() for ext in extensions)
    for item in inputs:
        if item.is_dir():
            try:
                children = sorted(child for child in item.rglob("*") if child.is_file())
            except OSError as exc:
                LOGGER.warning("Unable to scan %s: %s", item, exc)
                continue
            yield from (child for child in children if is_model_file(child, allowed))
        elif item.is_file() and is_model_file(item, allowed):
            yield item


def collect_names(inputs: Iterable[Path], extensions: Iterable[str] = DEFAULT_MODEL_EXTENSIONS) -> list[str]:
    """File names (without directories) of every model found under ``inputs``."""
    return [path.name for path in iter_model_paths(inputs, extensions)]
