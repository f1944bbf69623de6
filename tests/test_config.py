from __future__ import annotations

from pathlib import Path

import pytest

from asset_manifest.config import ManifestSettings, load_settings
from asset_manifest.errors import ConfigError
from asset_manifest.siblings import HashTokenMatcher, SiblingPolicy


def test_load_settings_defaults_without_path() -> None:
    settings = load_settings()
    assert settings == ManifestSettings()
    assert settings.matcher() == HashTokenMatcher()
    assert settings.write is True


def test_load_settings_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "manifest.yaml"
    path.write_text(
        "\n".join(
            [
                "format: cjs",
                "outdir: public/assets",
                "write: false",
                "hash_length: 10",
                "hash_alphabet: abcdef0123456789",
                "sibling_policy: strict",
            ]
        ),
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert settings.format == "cjs"
    assert settings.outdir == "public/assets"
    assert settings.write is False
    assert settings.sibling_policy is SiblingPolicy.STRICT
    assert settings.matcher() == HashTokenMatcher(length=10, alphabet="abcdef0123456789")


def test_empty_settings_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "manifest.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == ManifestSettings()


@pytest.mark.parametrize(
    "content",
    [
        "unknown_key: 1",
        "hash_length: 0",
        "- just\n- a list",
        "format: [unterminated",
    ],
)
def test_invalid_settings_raise_config_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "manifest.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(path)


def test_missing_settings_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_settings(tmp_path / "absent.yaml")
