"""Pydantic models describing the bundler's build metadata and result."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MetafileOutput(BaseModel):
    entry_point: Optional[str] = Field(
        default=None,
        alias="entryPoint",
        description="Entry point this output was generated from, when it has one.",
    )

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)


class Metafile(BaseModel):
    inputs: Dict[str, Any] = Field(default_factory=dict)
    outputs: Dict[str, MetafileOutput] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow", frozen=True)


class BuildOutputRecord(BaseModel):
    output_path: str
    entry_point: Optional[str] = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class OutputFile(BaseModel):
    """One file the bundler buffered in memory instead of writing to disk."""

    path: str
    contents: bytes

    @property
    def text(self) -> str:
        return self.contents.decode("utf-8")


class BuildResult(BaseModel):
    errors: List[Any] = Field(default_factory=list)
    warnings: List[Any] = Field(default_factory=list)
    metafile: Optional[Any] = Field(
        default=None,
        description="Raw metafile payload; interpreted by asset_manifest.metadata.",
    )
    output_files: Optional[List[OutputFile]] = Field(default=None, alias="outputFiles")

    model_config = ConfigDict(populate_by_name=True)


class BuildOptions(BaseModel):
    entry_names: Optional[str] = Field(default=None, alias="entryNames")
    metafile: bool = False
    outdir: Optional[str] = None
    outfile: Optional[str] = None
    write: Optional[bool] = None
    define: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow", populate_by_name=True)
