"""Serialize the manifest mapping and hand it to the build or the filesystem."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .errors import ConfigError
from .schemas.build import OutputFile

logger = logging.getLogger(__name__)

FORMAT_DEFINE_KEY = "TSUP_FORMAT"

Transform = Callable[[Dict[str, str]], Any]
PathLike = Union[str, Path]


def resolve_format(define: Optional[Mapping[str, str]], key: str = FORMAT_DEFINE_KEY) -> str:
    """Read the output format from the bundler's ``define`` table.

    Define values are JavaScript literals, so ``'"esm"'`` becomes ``esm``.
    """

    raw = (define or {}).get(key)
    value = raw.replace('"', "").strip() if raw else ""
    if not value:
        raise ConfigError(f"{key} not defined")
    return value


def resolve_output_dir(outdir: Optional[PathLike], outfile: Optional[PathLike]) -> Path:
    if outdir:
        return Path(outdir)
    if outfile:
        return Path(outfile).parent
    raise ConfigError("You must specify an 'outdir' when generating a manifest file.")


def manifest_filename(fmt: str) -> str:
    return f"manifest.{fmt}.json"


def render_manifest(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def apply_transform(mapping: Mapping[str, str], transform: Optional[Transform]) -> Any:
    """Run the user transform once over a plain copy of the finished mapping."""

    entries = dict(mapping)
    if transform is None:
        return entries
    return transform(entries)


@dataclass(slots=True)
class EmitterConfig:
    """Where and how one manifest is delivered."""

    format: Optional[str]
    outdir: Optional[PathLike] = None
    outfile: Optional[PathLike] = None
    write: bool = True


@dataclass(slots=True)
class EmitResult:
    path: Path
    text: str
    written: bool

    @property
    def contents(self) -> bytes:
        return self.text.encode("utf-8")


class ManifestEmitter:
    """Delivers a rendered manifest as a virtual output or a file on disk."""

    def __init__(self, config: EmitterConfig) -> None:
        self.config = config

    def destination(self) -> Path:
        if not self.config.format:
            raise ConfigError("Manifest format is not configured.")
        output_dir = resolve_output_dir(self.config.outdir, self.config.outfile)
        return (output_dir / manifest_filename(self.config.format)).resolve()

    def emit(
        self,
        mapping: Mapping[str, str],
        *,
        transform: Optional[Transform] = None,
        output_files: Optional[List[OutputFile]] = None,
    ) -> EmitResult:
        path = self.destination()
        text = render_manifest(apply_transform(mapping, transform))
        contents = text.encode("utf-8")

        if not self.config.write:
            if output_files is None:
                logger.warning("Build has no in-memory output list; manifest %s was not attached", path)
            else:
                output_files.append(OutputFile(path=str(path), contents=contents))
                logger.debug("Attached manifest %s to build outputs", path)
            return EmitResult(path=path, text=text, written=False)

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(contents)
        logger.debug("Manifest written to %s", path)
        return EmitResult(path=path, text=text, written=True)
