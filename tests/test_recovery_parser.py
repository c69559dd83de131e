"""Tests for model response recovery."""

import pytest


def test_strip_code_fences_removes_json_fence():
    from team_matcher.parsing import strip_code_fences

    text = '```json\n[{"employeeId": 1}]\n```'
    assert strip_code_fences(text) == '[{"employeeId": 1}]'


def test_strip_code_fences_is_case_insensitive():
    from team_matcher.parsing import strip_code_fences

    assert strip_code_fences("```JSON\n[]\n```") == "[]"
    assert strip_code_fences("```\n[]```") == "[]"


def test_strip_code_fences_handles_none_and_plain_text():
    from team_matcher.parsing import strip_code_fences

    assert strip_code_fences(None) == ""
    assert strip_code_fences("  [1, 2]  ") == "[1, 2]"


def test_parse_direct_array():
    from team_matcher.parsing import parse_candidates

    result = parse_candidates('[{"employeeId": 3, "score": 92}, {"employeeId": 7, "score": 85}]')

    assert result.strategy == "direct"
    assert result.ok
    assert [c["employeeId"] for c in result.candidates] == [3, 7]


def test_parse_fenced_array():
    from team_matcher.parsing import parse_candidates

    result = parse_candidates('```json\n[{"employeeId": 3, "score": 92}]\n```')

    assert result.strategy == "direct"
    assert result.candidates == [{"employeeId": 3, "score": 92}]


def test_parse_direct_empty_array_is_not_a_failure():
    from team_matcher.parsing import parse_candidates

    result = parse_candidates("[]")

    assert result.strategy == "direct"
    assert result.candidates == []
    assert not result.ok


def test_recovers_complete_objects_from_truncated_array():
    from team_matcher.parsing import parse_candidates

    text = '[{"employeeId": 3, "score": 92}, {"employeeId": 7, "sco'
    result = parse_candidates(text)

    assert result.strategy == "recovered"
    assert result.candidates == [{"employeeId": 3, "score": 92}]
    assert result.error is not None


def test_recovery_ignores_braces_inside_strings():
    from team_matcher.parsing import parse_candidates

    text = (
        'Here you go: {"employeeId": 4, "employeeName": "Ann {lead}", "score": 80} '
        'and {"employeeId": 5, "employeeName": "Bo }", "score": 70} thanks'
    )
    result = parse_candidates(text)

    assert result.strategy == "recovered"
    assert [c["employeeId"] for c in result.candidates] == [4, 5]
    assert result.candidates[0]["employeeName"] == "Ann {lead}"


def test_recovery_handles_escaped_quotes():
    from team_matcher.parsing import parse_candidates

    text = 'noise {"employeeId": 9, "employeeName": "The \\"Closer\\" }", "score": 60} trailing'
    result = parse_candidates(text)

    assert result.candidates == [
        {"employeeId": 9, "employeeName": 'The "Closer" }', "score": 60}
    ]


def test_recovery_skips_objects_without_numeric_id():
    from team_matcher.parsing import parse_candidates

    text = (
        '{"employeeId": "12", "score": 50} '
        '{"employeeId": true, "score": 50} '
        '{"name": "x"} '
        '{"employeeId": 2, "score": 50}'
    )
    result = parse_candidates(text)

    assert result.candidates == [{"employeeId": 2, "score": 50}]


def test_recovery_when_direct_parse_yields_object():
    from team_matcher.parsing import parse_candidates

    result = parse_candidates('{"employeeId": 1, "score": 99}')

    assert result.strategy == "recovered"
    assert result.candidates == [{"employeeId": 1, "score": 99}]
    assert "Expected a JSON array" in result.error


def test_nothing_usable_fails_without_raising():
    from team_matcher.parsing import parse_candidates

    result = parse_candidates("I could not find any suitable employees.")

    assert result.strategy == "failed"
    assert result.candidates == []
    assert result.error


def test_empty_response_fails():
    from team_matcher.parsing import parse_candidates

    result = parse_candidates("   ")

    assert result.strategy == "failed"
    assert result.error == "Empty response"


def test_extract_json_objects_finds_nested_complete_objects_in_unclosed_wrapper():
    from team_matcher.parsing import extract_json_objects

    text = '{"results": [{"employeeId": 1}, {"employeeId": 2}'
    assert extract_json_objects(text) == ['{"employeeId": 1}', '{"employeeId": 2}']


def test_brace_scanner_tracks_depth():
    from team_matcher.parsing import BraceScanner

    scanner = BraceScanner()
    text = '{"a": {"b": "}"}} tail'

    assert scanner.match_end(text, 0) == text.index(" tail") - 1
    assert scanner.match_end("{ never closed", 0) is None


def test_parse_json_payload_dict_inside_prose():
    from team_matcher.parsing import parse_json_payload

    text = 'Sure! {"successProbability": 85, "riskFactors": []} Hope this helps.'
    assert parse_json_payload(text, expect=dict) == {"successProbability": 85, "riskFactors": []}


def test_parse_json_payload_raises_on_garbage():
    from team_matcher.parsing import parse_json_payload
    from team_matcher.orchestrator.errors import ResponseParseError

    with pytest.raises(ResponseParseError) as exc:
        parse_json_payload("no json here", expect=list)

    assert exc.value.preview == "no json here"
