"""Parsing of loosely structured model output."""

from team_matcher.parsing.recovery import (
    BraceScanner,
    ParseResult,
    extract_json_objects,
    parse_candidates,
    parse_json_payload,
    strip_code_fences,
)

__all__ = [
    "BraceScanner",
    "ParseResult",
    "extract_json_objects",
    "parse_candidates",
    "parse_json_payload",
    "strip_code_fences",
]
