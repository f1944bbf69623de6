"""Command-line helpers for generating asset manifests from a metafile."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from pydantic import ValidationError

from asset_manifest.config import ManifestSettings, load_settings
from asset_manifest.errors import ConfigError, ManifestError, PreconditionError
from asset_manifest.mapping import build_mapping
from asset_manifest.metadata import interpret_metafile
from asset_manifest.plugin import ManifestPlugin, ManifestPluginOptions
from asset_manifest.schemas.build import BuildOptions, BuildResult
from asset_manifest.siblings import SiblingPolicy


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "generate":
            return _handle_generate(args)
        if args.command == "show":
            return _handle_show(args)
    except ManifestError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    parser.error(f"Unknown command '{args.command}'")
    return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="asset-manifest", description="Asset manifest helpers.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Write manifest.<format>.json for a finished build.")
    _add_common_arguments(generate)
    generate.add_argument("--format")
    generate.add_argument("--outdir")
    generate.add_argument("--outfile")
    generate.add_argument("--write", action=argparse.BooleanOptionalAction, default=None)

    show = subparsers.add_parser("show", help="Print the mapping without writing a manifest.")
    _add_common_arguments(show)

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--metafile", required=True, help="Path to the bundler metafile JSON.")
    parser.add_argument("--config", help="YAML settings file.")
    parser.add_argument("--hash-length", type=int)
    parser.add_argument("--hash-alphabet")
    parser.add_argument("--strict-siblings", action="store_true")
    parser.add_argument("--workspace-root")


def _handle_generate(args: argparse.Namespace) -> int:
    workspace = _resolve_workspace(args.workspace_root)
    settings = _load_settings(args, workspace)

    fmt = args.format or settings.format
    outdir = args.outdir or settings.outdir
    outfile = args.outfile or settings.outfile
    write = settings.write if args.write is None else args.write

    build_options = BuildOptions(
        outdir=str(_resolve_path(outdir, workspace)) if outdir else None,
        outfile=str(_resolve_path(outfile, workspace)) if outfile else None,
        write=write,
        define={settings.format_key: json.dumps(fmt)} if fmt else {},
    )
    result = BuildResult(
        metafile=_read_metafile(_resolve_path(args.metafile, workspace)),
        output_files=[] if not write else None,
    )

    plugin = ManifestPlugin(_plugin_options(settings))
    plugin.setup(build_options)
    emitted = plugin.on_end(result)
    assert emitted is not None

    payload = {
        "manifest_path": str(emitted.path),
        "written": emitted.written,
        "manifest": json.loads(emitted.text),
        "logs": [
            f"Manifest written to {emitted.path}" if emitted.written else f"Manifest rendered for {emitted.path}",
        ],
    }
    _print_json(payload)
    return 0


def _handle_show(args: argparse.Namespace) -> int:
    workspace = _resolve_workspace(args.workspace_root)
    settings = _load_settings(args, workspace)
    records = interpret_metafile(_read_metafile(_resolve_path(args.metafile, workspace)))
    options = _plugin_options(settings)
    mapping = build_mapping(
        records,
        matcher=options.matcher,
        script_extension=options.script_extension,
        companion_extension=options.companion_extension,
        policy=options.sibling_policy,
    )
    _print_json({"manifest": dict(mapping)})
    return 0


def _load_settings(args: argparse.Namespace, workspace: Path) -> ManifestSettings:
    settings = load_settings(_resolve_path(args.config, workspace) if args.config else None)
    overrides: dict[str, object] = {}
    if args.hash_length is not None:
        overrides["hash_length"] = args.hash_length
    if args.hash_alphabet:
        overrides["hash_alphabet"] = args.hash_alphabet
    if args.strict_siblings:
        overrides["sibling_policy"] = SiblingPolicy.STRICT
    if not overrides:
        return settings
    try:
        return ManifestSettings.model_validate({**settings.model_dump(), **overrides})
    except ValidationError as exc:
        raise ConfigError(f"Invalid command-line settings: {exc}") from exc


def _plugin_options(settings: ManifestSettings) -> ManifestPluginOptions:
    return ManifestPluginOptions(
        matcher=settings.matcher(),
        sibling_policy=settings.sibling_policy,
        format_key=settings.format_key,
        script_extension=settings.script_extension,
        companion_extension=settings.companion_extension,
    )


def _read_metafile(path: Path) -> Any:
    if not path.exists():
        raise PreconditionError(f"Metafile not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PreconditionError(f"Metafile {path} is not valid JSON: {exc}") from exc


def _resolve_workspace(value: Optional[str]) -> Path:
    return Path(value).resolve() if value else Path.cwd()


def _resolve_path(value: str, workspace: Path) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = workspace / path
    return path.resolve()


def _print_json(payload: Mapping[str, object]) -> None:
    print(json.dumps(payload, indent=2, default=str))
