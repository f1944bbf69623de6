from __future__ import annotations

import json
from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from pathlib import Path

from asset_manifest.cli import manifest as manifest_cli


METAFILE = {
    "inputs": {"src/app.ts": {"bytes": 10, "imports": []}},
    "outputs": {
        "dist/app-GQI5TWWV.js": {"entryPoint": "src/app.ts", "bytes": 100},
        "dist/app-7Y2KQ4ZP.css": {"bytes": 20},
    },
}


def _write_metafile(tmp_path: Path) -> Path:
    path = tmp_path / "meta.json"
    path.write_text(json.dumps(METAFILE), encoding="utf-8")
    return path


def _run_cli(argv: list[str]) -> dict:
    buffer = StringIO()
    with redirect_stdout(buffer):
        exit_code = manifest_cli.main(argv)
    assert exit_code == 0
    return json.loads(buffer.getvalue())


def test_cli_generate_writes_manifest(tmp_path: Path) -> None:
    _write_metafile(tmp_path)

    payload = _run_cli(
        [
            "generate",
            "--metafile",
            "meta.json",
            "--format",
            "esm",
            "--outdir",
            "dist",
            "--workspace-root",
            str(tmp_path),
        ]
    )

    manifest_path = tmp_path / "dist" / "manifest.esm.json"
    assert payload["written"] is True
    assert Path(payload["manifest_path"]) == manifest_path.resolve()
    assert json.loads(manifest_path.read_text(encoding="utf-8")) == {
        "src/app.ts": "dist/app-GQI5TWWV.js",
        "src/app.css": "dist/app-7Y2KQ4ZP.css",
    }


def test_cli_generate_without_write_leaves_disk_untouched(tmp_path: Path) -> None:
    _write_metafile(tmp_path)

    payload = _run_cli(
        [
            "generate",
            "--metafile",
            "meta.json",
            "--format",
            "cjs",
            "--outfile",
            "out/app.js",
            "--no-write",
            "--workspace-root",
            str(tmp_path),
        ]
    )

    assert payload["written"] is False
    assert payload["manifest"]["src/app.ts"] == "dist/app-GQI5TWWV.js"
    assert not (tmp_path / "out").exists()


def test_cli_generate_uses_settings_file(tmp_path: Path) -> None:
    _write_metafile(tmp_path)
    (tmp_path / "manifest.yaml").write_text("format: iife\noutdir: public\n", encoding="utf-8")

    payload = _run_cli(
        [
            "generate",
            "--metafile",
            "meta.json",
            "--config",
            "manifest.yaml",
            "--workspace-root",
            str(tmp_path),
        ]
    )

    assert (tmp_path / "public" / "manifest.iife.json").exists()
    assert payload["manifest"]["src/app.css"] == "dist/app-7Y2KQ4ZP.css"


def test_cli_show_prints_mapping(tmp_path: Path) -> None:
    _write_metafile(tmp_path)

    payload = _run_cli(["show", "--metafile", "meta.json", "--workspace-root", str(tmp_path)])

    assert payload == {
        "manifest": {
            "src/app.ts": "dist/app-GQI5TWWV.js",
            "src/app.css": "dist/app-7Y2KQ4ZP.css",
        }
    }


def test_cli_reports_missing_format(tmp_path: Path) -> None:
    _write_metafile(tmp_path)
    stderr = StringIO()
    with redirect_stderr(stderr):
        exit_code = manifest_cli.main(
            ["generate", "--metafile", "meta.json", "--outdir", "dist", "--workspace-root", str(tmp_path)]
        )
    assert exit_code == 1
    assert "TSUP_FORMAT" in stderr.getvalue()
    assert not (tmp_path / "dist").exists()


def test_cli_reports_missing_metafile(tmp_path: Path) -> None:
    stderr = StringIO()
    with redirect_stderr(stderr):
        exit_code = manifest_cli.main(["show", "--metafile", "absent.json", "--workspace-root", str(tmp_path)])
    assert exit_code == 1
    assert "Metafile not found" in stderr.getvalue()
