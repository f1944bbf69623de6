"""Interpret bundler metafiles into output records."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Tuple

from pydantic import ValidationError

from .errors import PreconditionError
from .schemas.build import BuildOutputRecord, Metafile

logger = logging.getLogger(__name__)


def interpret_metafile(metafile: Optional[Any]) -> Tuple[BuildOutputRecord, ...]:
    """Return one record per output, in the order the bundler listed them."""

    if metafile is None:
        raise PreconditionError("Expected metafile, but it does not exist.")

    try:
        parsed = metafile if isinstance(metafile, Metafile) else Metafile.model_validate(metafile)
    except ValidationError as exc:
        raise PreconditionError(f"Build metafile is malformed: {exc}") from exc

    records = tuple(
        BuildOutputRecord(output_path=path, entry_point=info.entry_point or None)
        for path, info in parsed.outputs.items()
    )
    logger.debug("Interpreted %d output(s) from metafile", len(records))
    return records


def output_paths(records: Iterable[BuildOutputRecord]) -> Tuple[str, ...]:
    return tuple(record.output_path for record in records)
