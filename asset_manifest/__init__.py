"""Post-build asset manifest generation for hash-stamped bundler outputs."""

__version__ = "0.1.0"
from .config import ManifestSettings, load_settings
from .emitter import EmitResult, EmitterConfig, ManifestEmitter, render_manifest
from .errors import (
    AmbiguousSiblingError,
    ConfigError,
    ConflictError,
    ManifestError,
    PreconditionError,
    StorageError,
)
from .mapping import MappingResult, build_mapping, fold_records
from .metadata import interpret_metafile
from .plugin import ManifestPlugin, ManifestPluginOptions
from .schemas.build import BuildOptions, BuildOutputRecord, BuildResult, Metafile, OutputFile
from .siblings import HashTokenMatcher, Sibling, SiblingPolicy, find_sibling

__all__ = [
    "__version__",
    "AmbiguousSiblingError",
    "BuildOptions",
    "BuildOutputRecord",
    "BuildResult",
    "ConfigError",
    "ConflictError",
    "EmitResult",
    "EmitterConfig",
    "HashTokenMatcher",
    "ManifestEmitter",
    "ManifestError",
    "ManifestPlugin",
    "ManifestPluginOptions",
    "ManifestSettings",
    "MappingResult",
    "Metafile",
    "OutputFile",
    "PreconditionError",
    "Sibling",
    "SiblingPolicy",
    "StorageError",
    "build_mapping",
    "find_sibling",
    "fold_records",
    "interpret_metafile",
    "load_settings",
    "render_manifest",
]
