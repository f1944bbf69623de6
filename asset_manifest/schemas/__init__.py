"""Schema definitions for bundler build metadata."""

from .build import (
    BuildOptions,
    BuildOutputRecord,
    BuildResult,
    Metafile,
    MetafileOutput,
    OutputFile,
)

__all__ = [
    "BuildOptions",
    "BuildOutputRecord",
    "BuildResult",
    "Metafile",
    "MetafileOutput",
    "OutputFile",
]
