"""Runtime settings and logging setup."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from rich.logging import RichHandler

DEFAULT_RELAY_FILES = ("metadata.json", "defaults.json")

DEFAULT_SANITIZE_FILES = (
    "icons.png",
    "icons.svg",
    "translations.json",
    "VERSION",
    "style.css",
    "presets.json",
)

_TRUTHY = {"true", "1", "yes", "on"}

_PACKAGE_LOGGER = "mapeo_deconstructor"


@dataclass(frozen=True)
class Settings:
    verbose: bool = False
    root_dir: Path = Path(tempfile.gettempdir())
    relay_files: tuple[str, ...] = DEFAULT_RELAY_FILES
    sanitize_files: tuple[str, ...] = DEFAULT_SANITIZE_FILES
    max_workers: int = 4

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        """Resolve settings from DEBUG / ROOT_DIR, falling back to defaults."""
        env = os.environ if environ is None else environ
        verbose = env.get("DEBUG", "").strip().lower() in _TRUTHY
        root_dir = env.get("ROOT_DIR")
        return cls(
            verbose=verbose,
            root_dir=Path(root_dir) if root_dir else Path(tempfile.gettempdir()),
        )


def configure_logging(verbose: bool) -> None:
    """Attach a rich handler to the package logger.

    Only the CLI calls this; library users configure logging themselves.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
