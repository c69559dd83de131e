"""Tests for candidate validation and persistence."""

import logging
import sqlite3


def _team_rows(db_path, project_id):
    conn = sqlite3.connect(db_path)
    rows = conn.execute(
        "SELECT employee_id, score FROM project_team WHERE project_id = ? ORDER BY employee_id",
        (project_id,)
    ).fetchall()
    conn.close()
    return rows


def test_normalize_candidates_filters_bad_shapes():
    from team_matcher.matching import normalize_candidates

    raw = [
        {"employeeId": 1, "score": 90},
        {"employeeId": 0, "score": 90},
        {"employeeId": -4},
        {"employeeId": True},
        {"employeeId": "2"},
        {"employeeId": 3.5},
        {"employeeId": 4.0, "score": "75%"},
        {"score": 80},
        "not a dict",
    ]
    candidates = normalize_candidates(raw)

    assert [(c.employee_id, c.score) for c in candidates] == [(1, 90.0), (4, 75.0)]


def test_normalize_candidates_drops_non_numeric_scores():
    from team_matcher.matching import normalize_candidates

    candidates = normalize_candidates([
        {"employeeId": 1, "score": "high"},
        {"employeeId": 2, "score": None},
        {"employeeId": 3},
    ])

    assert [c.score for c in candidates] == [None, None, None]


def test_normalize_candidates_keeps_first_duplicate():
    from team_matcher.matching import normalize_candidates

    candidates = normalize_candidates([
        {"employeeId": 5, "score": 90},
        {"employeeId": 5, "score": 10},
    ])

    assert len(candidates) == 1
    assert candidates[0].score == 90


def test_persist_matches_inserts_with_scores(db_path, roster, project_id):
    from team_matcher.matching import persist_matches

    result = persist_matches(db_path, project_id, [
        {"employeeId": roster["alice"], "score": 92},
        {"employeeId": roster["bob"], "score": 85.5},
    ])

    assert result.inserted == 2
    assert result.valid_candidates == 2
    assert result.discarded_ids == []
    assert _team_rows(db_path, project_id) == [(roster["alice"], 92.0), (roster["bob"], 85.5)]


def test_persist_matches_is_idempotent(db_path, roster, project_id):
    from team_matcher.matching import persist_matches

    raw = [{"employeeId": roster["alice"], "score": 92}]
    first = persist_matches(db_path, project_id, raw)
    second = persist_matches(db_path, project_id, raw)

    assert first.inserted == 1
    assert second.inserted == 0
    assert second.skipped_duplicates == 1
    assert len(_team_rows(db_path, project_id)) == 1


def test_persist_matches_discards_unknown_ids_but_keeps_siblings(db_path, roster, project_id, caplog):
    from team_matcher.matching import persist_matches

    with caplog.at_level(logging.WARNING):
        result = persist_matches(db_path, project_id, [
            {"employeeId": 9999, "score": 99},
            {"employeeId": roster["carol"], "score": 40},
        ])

    assert result.discarded_ids == [9999]
    assert result.inserted == 1
    assert _team_rows(db_path, project_id) == [(roster["carol"], 40.0)]
    assert "9999" in caplog.text


def test_persist_matches_with_no_valid_candidates(db_path, roster, project_id):
    from team_matcher.matching import persist_matches

    result = persist_matches(db_path, project_id, [{"employeeId": "abc"}])

    assert result.inserted == 0
    assert result.valid_candidates == 0
    assert _team_rows(db_path, project_id) == []


def test_persist_matches_skips_pair_already_saved_manually(db_path, roster, project_id):
    from team_matcher.db.teams import TeamRepository
    from team_matcher.matching import persist_matches

    TeamRepository(db_path).insert_many(project_id, [(roster["alice"], None)])
    result = persist_matches(db_path, project_id, [
        {"employeeId": roster["alice"], "score": 95},
        {"employeeId": roster["bob"], "score": 60},
    ])

    assert result.inserted == 1
    # existing manual row is not overwritten
    assert _team_rows(db_path, project_id) == [(roster["alice"], None), (roster["bob"], 60.0)]
