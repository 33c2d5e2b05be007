"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

LIBRARY_ENV_VAR = "MODELSIFT_LIBRARY"

DEFAULT_MODEL_EXTENSIONS: tuple[str, ...] = (
    ".safetensors",
    ".pt",
    ".pth",
    ".ckpt",
    ".bin",
    ".gguf",
)


def _get_default_library_path() -> Path:
    """Get the default library path from the environment or the working directory."""
    env_value = os.environ.get(LIBRARY_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value).expanduser()
    return Path(".")


@dataclass(slots=True)
class AppConfig:
    library_path: Path | None = None
    model_extensions: tuple[str, ...] = DEFAULT_MODEL_EXTENSIONS
    suggestion_limit: int = 10
    max_suggestion_limit: int = 50

    def __post_init__(self) -> None:
        if self.library_path is None:
            self.library_path = _get_default_library_path()
        self.model_extensions = tuple(ext.lower() for ext in self.model_extensions)

    def resolve_library_path(self, base_dir: Path | None = None) -> Path:
        if self.library_path is None:
            self.library_path = _get_default_library_path()
        if Path(self.library_path).is_absolute() or base_dir is None:
            return Path(self.library_path)
        return base_dir / self.library_path

    def clamp_limit(self, limit: int | None) -> int:
        """Bound a caller supplied suggestion limit to ``[0, max_suggestion_limit]``."""
        if limit is None:
            return self.suggestion_limit
        return max(0, min(limit, self.max_suggestion_limit))
