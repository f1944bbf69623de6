"""Build-completion hook that writes ``manifest.<format>.json``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .emitter import FORMAT_DEFINE_KEY, EmitResult, EmitterConfig, ManifestEmitter, Transform, resolve_format
from .errors import ConfigError
from .mapping import build_mapping
from .metadata import interpret_metafile
from .schemas.build import BuildOptions, BuildResult
from .siblings import COMPANION_EXTENSION, DEFAULT_MATCHER, SCRIPT_EXTENSION, HashTokenMatcher, SiblingPolicy

logger = logging.getLogger(__name__)

PLUGIN_NAME = "asset-manifest"
ENTRY_NAMES = "[dir]/[name]-[hash]"


@dataclass(slots=True)
class ManifestPluginOptions:
    """User-facing knobs for :class:`ManifestPlugin`."""

    generate: Optional[Transform] = None
    matcher: HashTokenMatcher = DEFAULT_MATCHER
    sibling_policy: SiblingPolicy = SiblingPolicy.FIRST
    format_key: str = FORMAT_DEFINE_KEY
    script_extension: str = SCRIPT_EXTENSION
    companion_extension: str = COMPANION_EXTENSION


class ManifestPlugin:
    """Bundler plugin mapping entry points to their hash-stamped outputs."""

    name = PLUGIN_NAME

    def __init__(self, options: Optional[ManifestPluginOptions] = None) -> None:
        self.options = options or ManifestPluginOptions()
        self._build_options: Optional[BuildOptions] = None

    def setup(self, build_options: BuildOptions) -> None:
        """Force hashed entry names and metafile collection on the build."""

        build_options.entry_names = ENTRY_NAMES
        build_options.metafile = True
        self._build_options = build_options

    def on_end(self, result: BuildResult, build_options: Optional[BuildOptions] = None) -> Optional[EmitResult]:
        """Generate the manifest for a finished build.

        Returns ``None`` when the build reported errors; nothing is produced
        in that case and no error is raised.
        """

        if result.errors:
            logger.info("Build reported %d error(s); skipping manifest", len(result.errors))
            return None

        build_options = build_options or self._build_options
        if build_options is None:
            raise ConfigError(f"{PLUGIN_NAME} was not set up with build options.")

        records = interpret_metafile(result.metafile)
        fmt = resolve_format(build_options.define, self.options.format_key)
        emitter = ManifestEmitter(
            EmitterConfig(
                format=fmt,
                outdir=build_options.outdir,
                outfile=build_options.outfile,
                write=build_options.write if build_options.write is not None else True,
            )
        )
        # Destination problems surface before any mapping work.
        emitter.destination()

        mapping = build_mapping(
            records,
            matcher=self.options.matcher,
            script_extension=self.options.script_extension,
            companion_extension=self.options.companion_extension,
            policy=self.options.sibling_policy,
        )
        return emitter.emit(mapping, transform=self.options.generate, output_files=result.output_files)
