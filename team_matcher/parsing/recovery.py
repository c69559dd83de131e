"""Recover match records from model responses.

Models are asked for a bare JSON array but regularly wrap it in markdown
fences, add prose, or get cut off mid-array. Parsing runs in three steps:

1. Normalize: strip a leading ```` ```json ```` / ```` ``` ```` fence and a
   trailing fence.
2. Direct parse: ``json.loads`` the normalized text. A list is returned as is.
3. Recovery: scan the text for balanced ``{...}`` spans with
   :class:`BraceScanner`, parse each span on its own and keep the ones that
   carry a numeric ``employeeId``. A truncated trailing object never closes
   and is dropped.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from team_matcher.orchestrator.errors import ResponseParseError

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences around a model response."""
    content = (text or "").strip()
    content = _LEADING_FENCE.sub("", content)
    content = _TRAILING_FENCE.sub("", content)
    return content.strip()


class BraceScanner:
    """Character-level state machine that finds the end of a JSON object.

    State is a nesting depth, an in-string flag and an escape flag. Braces
    inside string literals and escaped quotes do not change the depth.
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.depth = 0
        self.in_string = False
        self.escape = False

    def step(self, char: str) -> bool:
        """Consume one character. Returns True when the outermost object closes."""
        if self.escape:
            self.escape = False
            return False

        if self.in_string:
            if char == "\\":
                self.escape = True
            elif char == '"':
                self.in_string = False
            return False

        if char == '"':
            self.in_string = True
        elif char == "{":
            self.depth += 1
        elif char == "}" and self.depth > 0:
            self.depth -= 1
            return self.depth == 0
        return False

    def match_end(self, text: str, start: int) -> Optional[int]:
        """Index of the brace closing the object opened at ``text[start]``, or None."""
        self.reset()
        for index in range(start, len(text)):
            if self.step(text[index]):
                return index
        return None


def iter_object_spans(text: str) -> Iterator[tuple[int, int]]:
    """Yield (start, end) spans of balanced top-level objects, end exclusive.

    When an object never closes the scan resumes just after its opening
    brace, so complete objects nested inside a truncated wrapper are still
    found.
    """
    scanner = BraceScanner()
    index = 0
    while index < len(text):
        if text[index] == "{":
            end = scanner.match_end(text, index)
            if end is not None:
                yield index, end + 1
                index = end + 1
                continue
        index += 1


def extract_json_objects(text: str) -> list[str]:
    """Return every balanced ``{...}`` substring found in ``text``."""
    return [text[start:end] for start, end in iter_object_spans(text)]


def _has_numeric_employee_id(obj: Any) -> bool:
    if not isinstance(obj, dict):
        return False
    value = obj.get("employeeId")
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class ParseResult:
    """Outcome of parsing one model response."""

    candidates: list = field(default_factory=list)
    strategy: str = "failed"  # direct | recovered | failed
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return bool(self.candidates)

    def to_dict(self) -> dict:
        return {
            "candidates": self.candidates,
            "strategy": self.strategy,
            "error": self.error,
        }


def recover_candidates(text: str) -> list[dict]:
    """Salvage individually well-formed match objects from broken output."""
    recovered = []
    for chunk in extract_json_objects(text):
        try:
            obj = json.loads(chunk)
        except json.JSONDecodeError:
            continue
        if _has_numeric_employee_id(obj):
            recovered.append(obj)
    return recovered


def parse_candidates(text: str) -> ParseResult:
    """Parse a matching response into raw candidate records.

    Never raises; a response with nothing usable yields
    ``ParseResult(strategy="failed")`` with the decode error attached.
    """
    content = strip_code_fences(text)
    if not content:
        return ParseResult(error="Empty response")

    error = None
    try:
        data = json.loads(content)
        if isinstance(data, list):
            return ParseResult(candidates=data, strategy="direct")
        error = f"Expected a JSON array, got {type(data).__name__}"
    except json.JSONDecodeError as e:
        error = f"Failed to parse response as JSON: {e}"

    recovered = recover_candidates(content)
    if recovered:
        return ParseResult(candidates=recovered, strategy="recovered", error=error)

    return ParseResult(error=error)


def parse_json_payload(text: str, expect: type = list) -> Any:
    """Parse a JSON array or object out of a model response.

    Tries the whole normalized text first, then the outermost bracketed
    span of the expected kind.

    Raises:
        ResponseParseError: If no payload of the expected type is found
    """
    content = strip_code_fences(text)
    try:
        data = json.loads(content)
        if isinstance(data, expect):
            return data
    except json.JSONDecodeError:
        pass

    opener, closer = ("[", "]") if expect is list else ("{", "}")
    start = content.find(opener)
    end = content.rfind(closer) + 1
    if start != -1 and end > start:
        try:
            data = json.loads(content[start:end])
            if isinstance(data, expect):
                return data
        except json.JSONDecodeError:
            pass

    raise ResponseParseError(
        f"Could not parse {expect.__name__} from response",
        preview=content[:200],
    )
