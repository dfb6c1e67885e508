"""Core data models for mapeo-deconstructor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class ContainerFormat(Enum):
    MAPEOSETTINGS = "mapeosettings"  # tar + gzip
    COMAPEOCAT = "comapeocat"  # zip
    NONE = "none"  # pre-extracted directory


class FieldDialect(Enum):
    LEGACY = "legacy"  # key / placeholder / string options
    CURRENT = "current"  # tagKey / helperText / {label, value} options


@dataclass
class ConfigPackage:
    source_path: Path
    format: ContainerFormat
    working_dir: Path
    output_dir: Path
    name: str
    nested_archive: Optional[Path] = None


@dataclass
class DeconstructResult:
    success: bool
    package_name: Optional[str] = None
    working_dir: Optional[Path] = None
    output_dir: Optional[Path] = None
    files_written: int = 0
    files_removed: int = 0
    error_message: Optional[str] = None
