"""Companion artifact inference from hash-stamped filenames.

The bundler extracts the stylesheets imported by a script entry point into a
second output that shares the entry's naming structure, but the metafile does
not link the two. The helpers below recover the link from filenames alone:
whatever the bundler inserted between the entry's base name and the output's
extension (usually ``-<HASH>``) is turned into a pattern with the hash token
wildcarded, and every output is checked for the same shape with the companion
extension.

This only holds while the bundler stamps exactly one hash token per filename
using the alphabet and length configured on :class:`HashTokenMatcher`.
"""

from __future__ import annotations

import logging
import posixpath
import re
import string
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .errors import AmbiguousSiblingError
from .schemas.build import BuildOutputRecord

logger = logging.getLogger(__name__)

DEFAULT_HASH_LENGTH = 8
DEFAULT_HASH_ALPHABET = string.ascii_uppercase + string.digits
SCRIPT_EXTENSION = ".js"
COMPANION_EXTENSION = ".css"


class SiblingPolicy(str, Enum):
    """How to resolve several outputs matching one companion pattern."""

    FIRST = "first"
    STRICT = "strict"


@dataclass(frozen=True, slots=True)
class HashTokenMatcher:
    """Recognises the bundler's content-hash token inside a filename."""

    length: int = DEFAULT_HASH_LENGTH
    alphabet: str = DEFAULT_HASH_ALPHABET

    def __post_init__(self) -> None:
        if self.length < 1:
            raise ValueError(f"Hash length must be positive (got {self.length})")
        if not self.alphabet:
            raise ValueError("Hash alphabet must not be empty")

    @property
    def token_pattern(self) -> str:
        characters = "".join(re.escape(char) for char in dict.fromkeys(self.alphabet))
        return f"[{characters}]{{{self.length}}}"

    def find_token(self, segment: str) -> Optional[re.Match[str]]:
        return re.search(self.token_pattern, segment)

    def generalize(self, segment: str) -> re.Pattern[str]:
        """Return a pattern for ``segment`` that accepts any hash token value.

        Only the first token is wildcarded; the rest of the segment matches
        literally. A segment without a token yields a literal pattern.
        """

        token = self.find_token(segment)
        if token is None:
            return re.compile(re.escape(segment))
        return re.compile(
            re.escape(segment[: token.start()]) + self.token_pattern + re.escape(segment[token.end() :])
        )


DEFAULT_MATCHER = HashTokenMatcher()


@dataclass(frozen=True, slots=True)
class Sibling:
    input: str
    output: str


def companion_input(entry_point: str, companion_extension: str = COMPANION_EXTENSION) -> str:
    """``src/app.ts`` -> ``src/app.css``; an entry without a directory stays bare."""

    directory = posixpath.dirname(entry_point)
    stem = posixpath.splitext(posixpath.basename(entry_point))[0]
    return posixpath.join(directory, stem + companion_extension) if directory else stem + companion_extension


def find_sibling(
    record: BuildOutputRecord,
    outputs: Sequence[str],
    *,
    matcher: HashTokenMatcher = DEFAULT_MATCHER,
    script_extension: str = SCRIPT_EXTENSION,
    companion_extension: str = COMPANION_EXTENSION,
    policy: SiblingPolicy = SiblingPolicy.FIRST,
) -> Optional[Sibling]:
    """Return the companion artifact generated alongside ``record``, if any."""

    output_path = record.output_path
    entry_point = record.entry_point
    if entry_point is None or not output_path.endswith(script_extension):
        return None

    # "src/example.ts" => "example"
    entry_base = posixpath.splitext(posixpath.basename(entry_point))[0]
    # "dist/example-GQI5TWWV.js" => "example-GQI5TWWV"
    output_base = posixpath.basename(output_path)[: -len(script_extension)]
    # "example-GQI5TWWV" => "-GQI5TWWV"
    diff = output_base.replace(entry_base, "", 1)
    if not diff:
        return None

    pattern = matcher.generalize(diff)
    target = _swap_extension(pattern.sub("", output_path, count=1), script_extension, companion_extension)

    matches = [candidate for candidate in outputs if pattern.sub("", candidate, count=1) == target]
    if not matches:
        return None

    sibling_input = companion_input(entry_point, companion_extension)
    if len(matches) > 1:
        if policy is SiblingPolicy.STRICT:
            raise AmbiguousSiblingError(sibling_input, matches)
        logger.warning(
            "Multiple companion outputs match %s; using %s (ignored: %s)",
            sibling_input,
            matches[0],
            ", ".join(matches[1:]),
        )
    return Sibling(input=sibling_input, output=matches[0])


def _swap_extension(path: str, old: str, new: str) -> str:
    if path.endswith(old):
        return path[: -len(old)] + new
    return path
