"""FastAPI application exposing classification and catalog search."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Any, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from modelsift import __version__
from modelsift.config import AppConfig
from modelsift.index.handle import IndexHandle
from modelsift.utils.files import collect_names, is_model_file
from modelsift.variants.classifier import classify
from modelsift.variants.grouping import group_variants

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="ModelSift Web", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

handle = IndexHandle()


class NamesPayload(BaseModel):
    names: List[str]


class LibraryPayload(BaseModel):
    paths: List[str] | None = None
    names: List[str] | None = None


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


def _validate_paths(raw_paths: List[str], config: AppConfig) -> List[Path]:
    resolved: List[Path] = []
    for raw in raw_paths:
        clean_path = raw.strip().replace("\r", "").replace("\n", "")
        if not clean_path:
            continue
        if "\0" in clean_path:
            raise HTTPException(status_code=400, detail="Invalid path: contains null byte")

        path = Path(os.path.realpath(os.path.expanduser(clean_path)))
        if not path.exists():
            raise HTTPException(status_code=404, detail="Path not found: %s" % clean_path)
        if not path.is_dir() and not is_model_file(path, config.model_extensions):
            raise HTTPException(
                status_code=400, detail="Path must be a folder or model file: %s" % clean_path
            )
        resolved.append(path)
    return resolved


@app.post("/classify")
async def classify_names(payload: NamesPayload) -> dict[str, Any]:
    results = []
    for name in payload.names:
        result = classify(name)
        results.append(
            {
                "name": name,
                "normalized_key": result.normalized_key,
                "variant_label": result.variant_label.value if result.variant_label else None,
            }
        )
    return {"results": results}


@app.post("/group")
async def group_names(payload: NamesPayload) -> dict[str, Any]:
    groups = []
    for item in group_variants(payload.names):
        groups.append(
            {
                "key": item.key,
                "members": [
                    {
                        "name": member.name,
                        "position": member.position,
                        "variant_label": member.label.value if member.label else None,
                    }
                    for member in item.members
                ],
            }
        )
    return {"groups": groups}


@app.post("/library")
async def rebuild_library(payload: LibraryPayload) -> dict[str, Any]:
    """Replace the searchable catalog with explicit names or scanned paths."""
    if payload.names is None and not payload.paths:
        raise HTTPException(status_code=400, detail="Either names or paths must be provided")

    config = AppConfig()
    if payload.names is not None:
        names = list(payload.names)
    else:
        paths = _validate_paths(payload.paths or [], config)
        names = await asyncio.to_thread(collect_names, paths, config.model_extensions)

    try:
        await asyncio.to_thread(handle.rebuild, names)
    except Exception as exc:  # pragma: no cover - defensive
        LOGGER.exception("Index rebuild failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return {"status": "ok", "count": len(names)}


@app.get("/search")
async def search_library(q: str, prefix: bool = False) -> dict[str, Any]:
    query = q.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Empty query")

    index, corpus = handle.snapshot()
    positions = index.search_prefix(query) if prefix else index.search(query)
    return {"results": [{"index": position, "name": corpus[position]} for position in positions]}


@app.get("/suggest")
async def suggest_terms(prefix: str, limit: int | None = None) -> dict[str, List[str]]:
    config = AppConfig()
    return {"suggestions": handle.current.suggest(prefix.strip(), config.clamp_limit(limit))}
