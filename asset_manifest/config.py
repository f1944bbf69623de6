"""Settings for manifest generation loaded from YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .emitter import FORMAT_DEFINE_KEY
from .errors import ConfigError
from .siblings import (
    COMPANION_EXTENSION,
    DEFAULT_HASH_ALPHABET,
    DEFAULT_HASH_LENGTH,
    SCRIPT_EXTENSION,
    HashTokenMatcher,
    SiblingPolicy,
)


class ManifestSettings(BaseModel):
    format: Optional[str] = Field(default=None, description="Format discriminator used in the manifest filename.")
    outdir: Optional[str] = None
    outfile: Optional[str] = None
    write: bool = True
    format_key: str = FORMAT_DEFINE_KEY
    hash_length: int = Field(default=DEFAULT_HASH_LENGTH, ge=1)
    hash_alphabet: str = Field(default=DEFAULT_HASH_ALPHABET, min_length=1)
    sibling_policy: SiblingPolicy = SiblingPolicy.FIRST
    script_extension: str = SCRIPT_EXTENSION
    companion_extension: str = COMPANION_EXTENSION

    model_config = ConfigDict(extra="forbid")

    def matcher(self) -> HashTokenMatcher:
        return HashTokenMatcher(length=self.hash_length, alphabet=self.hash_alphabet)


def load_settings(path: Optional[Union[str, Path]] = None) -> ManifestSettings:
    """Load settings from a YAML file; no path or an empty file gives defaults."""

    if path is None:
        return ManifestSettings()

    settings_path = Path(path)
    if not settings_path.exists():
        raise ConfigError(f"Settings file not found: {settings_path}")
    try:
        payload = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Settings file {settings_path} is not valid YAML: {exc}") from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ConfigError(f"Settings file {settings_path} must contain a mapping.")
    try:
        return ManifestSettings.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings in {settings_path}: {exc}") from exc
