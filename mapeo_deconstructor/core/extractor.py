"""Container extraction: resolve a config path to a working directory."""

from __future__ import annotations

import logging
import os
import tarfile
import uuid
import zipfile
from pathlib import Path
from typing import Optional, Union

from mapeo_deconstructor.core.errors import (
    InvalidInputError,
    MissingInputError,
    MissingMetadataError,
    UnsupportedFormatError,
)
from mapeo_deconstructor.core.fileio import read_json
from mapeo_deconstructor.core.models import ConfigPackage, ContainerFormat
from mapeo_deconstructor.core.settings import Settings

logger = logging.getLogger(__name__)

_SUFFIXES = {
    ".mapeosettings": ContainerFormat.MAPEOSETTINGS,
    ".comapeocat": ContainerFormat.COMAPEOCAT,
}

PathLike = Union[str, os.PathLike]


def detect_file_format(path: PathLike) -> Optional[ContainerFormat]:
    """Detect the archive format from the filename suffix only."""
    return _SUFFIXES.get(Path(path).suffix.lower())


def read_package_name(working_dir: Path) -> str:
    """Return ``name`` from metadata.json. Raises MissingMetadataError."""
    metadata_path = working_dir / "metadata.json"
    try:
        metadata = read_json(metadata_path)
    except FileNotFoundError:
        raise MissingMetadataError(f"metadata.json not found in {working_dir}")
    except (OSError, ValueError) as e:
        raise MissingMetadataError(f"Could not read {metadata_path}: {e}")
    if not isinstance(metadata, dict) or not metadata.get("name"):
        raise MissingMetadataError(f"{metadata_path} has no 'name' field")
    return str(metadata["name"])


def make_working_dir(root_dir: Path) -> Path:
    """Create a fresh, uniquely named directory under root_dir."""
    working_dir = root_dir / f"mapeo-settings-{uuid.uuid4().hex}"
    working_dir.mkdir(parents=True)
    return working_dir


def _unpack_tar(archive: Path, dest: Path) -> Optional[Path]:
    """Unpack a gzipped tar; return the location of a nested .mapeosettings."""
    nested: Optional[Path] = None
    with tarfile.open(archive, "r:gz") as tar:
        for member in tar.getmembers():
            if member.name.endswith(".mapeosettings"):
                nested = dest / member.name
                logger.debug("Config path updated to: %s", nested)
        tar.extractall(dest, filter="data")
    return nested


def _unpack_zip(archive: Path, dest: Path) -> None:
    with zipfile.ZipFile(archive) as zf:
        zf.extractall(dest)


def extract_config(
    config_path: PathLike,
    output_dir: Optional[PathLike] = None,
    settings: Optional[Settings] = None,
) -> ConfigPackage:
    """Resolve config_path into a ConfigPackage, unpacking archives.

    Directories are used in place. Archive files are unpacked into a new
    directory under ``settings.root_dir``. The output directory defaults to
    the current working directory and is created if missing. Nothing is
    ever deleted here.
    """
    settings = settings or Settings()
    source = Path(config_path)
    logger.debug("Starting extraction of config %s", source)

    if not source.exists() and not source.is_symlink():
        raise MissingInputError(f"Config path does not exist: {source}")
    if source.exists() and not os.access(source, os.R_OK):
        raise MissingInputError(f"Config path is not readable: {source}")

    nested: Optional[Path] = None
    if source.is_file():
        fmt = detect_file_format(source)
        if fmt is None:
            raise UnsupportedFormatError(
                f"Unsupported config format: {source.name!r}. "
                f"Expected one of: {', '.join(_SUFFIXES)}"
            )
        working_dir = make_working_dir(settings.root_dir)
        logger.debug("Extracting %s archive into %s", fmt.value, working_dir)
        try:
            if fmt is ContainerFormat.MAPEOSETTINGS:
                nested = _unpack_tar(source, working_dir)
            else:
                _unpack_zip(source, working_dir)
        except (tarfile.TarError, zipfile.BadZipFile, OSError) as e:
            raise MissingInputError(f"Could not unpack {source}: {e}")
        if settings.verbose:
            logger.debug(
                "Contents of %s: %s",
                working_dir,
                sorted(p.name for p in working_dir.iterdir()),
            )
    elif source.is_dir():
        logger.debug("Config path is a directory. No extraction needed.")
        fmt = ContainerFormat.NONE
        working_dir = source
    else:
        raise InvalidInputError(
            f"Invalid config path {source}. It should be a file or a directory."
        )

    name = read_package_name(working_dir)
    resolved_output = Path(output_dir) if output_dir else Path.cwd()
    resolved_output.mkdir(parents=True, exist_ok=True)

    return ConfigPackage(
        source_path=source,
        format=fmt,
        working_dir=working_dir,
        output_dir=resolved_output,
        name=name,
        nested_archive=nested,
    )
