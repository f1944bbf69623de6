from __future__ import annotations

from typing import Callable, Dict, Optional

import pytest


MetafileFactory = Callable[[Dict[str, Optional[str]]], dict]


def build_metafile(outputs: Dict[str, Optional[str]]) -> dict:
    """Shape ``{output: entry_point}`` like an esbuild metafile."""

    payload: dict = {"inputs": {}, "outputs": {}}
    for output, entry_point in outputs.items():
        info: dict = {"imports": [], "exports": [], "inputs": {}, "bytes": 128}
        if entry_point is not None:
            info["entryPoint"] = entry_point
            payload["inputs"][entry_point] = {"bytes": 64, "imports": []}
        payload["outputs"][output] = info
    return payload


@pytest.fixture
def metafile_factory() -> MetafileFactory:
    return build_metafile
