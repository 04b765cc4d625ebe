"""Extract a file map from a raw model response."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from project_generator.components.types import FileMap
from project_generator.errors import ParseError

logger = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r"```(?:json)?\n?([\s\S]*?)\n?```")


@dataclass(frozen=True)
class ParseResult:
    """Either a parsed file map or the reason the response was malformed."""

    files: Optional[FileMap] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.files is not None


def _candidate_texts(raw: str) -> list[str]:
    """Texts to try decoding: the first fenced code block, then the raw text."""
    if "```" in raw:
        match = _FENCED_BLOCK.search(raw)
        if match and match.group(1) != raw:
            return [match.group(1), raw]
    return [raw]


def _decode(text: str) -> FileMap:
    try:
        decoded = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise ParseError(f"Invalid JSON response: {e}") from e
    return _to_file_map(decoded)


def _to_file_map(decoded: Any) -> FileMap:
    if not isinstance(decoded, dict):
        raise ParseError(f"Expected a JSON object, got {type(decoded).__name__}")
    if not decoded:
        raise ParseError("Response contains no files")

    files: FileMap = {}
    for path, content in decoded.items():
        if not path.strip():
            raise ParseError("Response contains an empty file path")
        if not isinstance(content, str):
            raise ParseError(f"Content of {path!r} is {type(content).__name__}, expected a string")
        files[path] = content
    return files


def parse_response(raw: str) -> ParseResult:
    """Parse a model response into a file map.

    Accepts plain JSON or JSON wrapped in a markdown code fence. A fence found
    inside plain JSON (e.g. in a README's content) does not hide the JSON.
    Anything else yields a malformed result; this function does not raise.
    """
    if not isinstance(raw, str):
        return ParseResult(reason="Response must be text")

    first_error = None
    for text in _candidate_texts(raw):
        try:
            return ParseResult(files=_decode(text))
        except ParseError as e:
            first_error = first_error or e

    logger.debug("Malformed model response: %s", first_error)
    return ParseResult(reason=str(first_error))
