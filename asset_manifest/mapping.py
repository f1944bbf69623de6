"""Fold build output records into the manifest mapping."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence

from .errors import ConflictError
from .metadata import output_paths
from .schemas.build import BuildOutputRecord
from .siblings import (
    COMPANION_EXTENSION,
    DEFAULT_MATCHER,
    SCRIPT_EXTENSION,
    HashTokenMatcher,
    SiblingPolicy,
    find_sibling,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MappingResult:
    """Outcome of one fold: either a complete mapping or the conflict that stopped it."""

    mapping: Optional[Mapping[str, str]] = None
    conflict: Optional[ConflictError] = None

    @property
    def ok(self) -> bool:
        return self.conflict is None

    def unwrap(self) -> Mapping[str, str]:
        if self.conflict is not None:
            raise self.conflict
        assert self.mapping is not None
        return self.mapping


def fold_records(
    records: Iterable[BuildOutputRecord],
    *,
    outputs: Optional[Sequence[str]] = None,
    matcher: HashTokenMatcher = DEFAULT_MATCHER,
    script_extension: str = SCRIPT_EXTENSION,
    companion_extension: str = COMPANION_EXTENSION,
    policy: SiblingPolicy = SiblingPolicy.FIRST,
) -> MappingResult:
    """Map every entry point (and inferred companion) to its output path.

    Outputs without an entry point are shared chunks and never become keys.
    The first duplicate key ends the fold with a conflict result; the
    partially built mapping is discarded.
    """

    records = tuple(records)
    known_outputs = tuple(outputs) if outputs is not None else output_paths(records)

    entries: Dict[str, str] = {}
    for record in records:
        if record.entry_point is None:
            continue

        if record.entry_point in entries:
            return MappingResult(conflict=ConflictError(record.entry_point))
        entries[record.entry_point] = record.output_path
        logger.debug("Mapped %s -> %s", record.entry_point, record.output_path)

        sibling = find_sibling(
            record,
            known_outputs,
            matcher=matcher,
            script_extension=script_extension,
            companion_extension=companion_extension,
            policy=policy,
        )
        if sibling is None:
            continue
        if sibling.input in entries:
            return MappingResult(conflict=ConflictError(sibling.input))
        entries[sibling.input] = sibling.output
        logger.debug("Mapped companion %s -> %s", sibling.input, sibling.output)

    return MappingResult(mapping=MappingProxyType(entries))


def build_mapping(
    records: Iterable[BuildOutputRecord],
    *,
    outputs: Optional[Sequence[str]] = None,
    matcher: HashTokenMatcher = DEFAULT_MATCHER,
    script_extension: str = SCRIPT_EXTENSION,
    companion_extension: str = COMPANION_EXTENSION,
    policy: SiblingPolicy = SiblingPolicy.FIRST,
) -> Mapping[str, str]:
    """Return the manifest mapping, raising :class:`ConflictError` on duplicate keys."""

    return fold_records(
        records,
        outputs=outputs,
        matcher=matcher,
        script_extension=script_extension,
        companion_extension=companion_extension,
        policy=policy,
    ).unwrap()
