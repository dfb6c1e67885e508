"""Fatal errors raised by the pipeline."""

from __future__ import annotations


class DeconstructError(Exception):
    """Base class for errors that abort a pipeline run."""


class MissingInputError(DeconstructError):
    """The configuration path does not exist or cannot be read."""


class UnsupportedFormatError(DeconstructError):
    """The configuration file has an unknown suffix."""


class InvalidInputError(DeconstructError):
    """The configuration path is neither a regular file nor a directory."""


class MissingMetadataError(DeconstructError):
    """metadata.json is absent, unparsable, or has no name."""


class ManifestError(DeconstructError):
    """The package.json manifest could not be rendered."""
