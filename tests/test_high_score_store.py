from __future__ import annotations

import json

import pytest

from takojump.infra.exceptions import HighScoreLoadError, HighScoreSaveError
from takojump.infra.high_score_store import HighScoreFile


def test_missing_file_reads_zero(tmp_path):
    assert HighScoreFile(tmp_path / "hs.json").load_high_score() == 0


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "hs.json"
    store = HighScoreFile(path)
    store.save_high_score(4210)
    assert HighScoreFile(path).load_high_score() == 4210
    assert not path.with_suffix(".json.tmp").exists()


def test_overwrites_previous(tmp_path):
    store = HighScoreFile(tmp_path / "hs.json")
    store.save_high_score(10)
    store.save_high_score(20)
    assert store.load_high_score() == 20


@pytest.mark.parametrize(
    "content",
    [
        "{broken",
        json.dumps({"format": "other", "high_score": 5}),
        json.dumps({"format": "takojump.highscore", "high_score": -1}),
        json.dumps({"format": "takojump.highscore", "high_score": "12"}),
        json.dumps({"format": "takojump.highscore", "high_score": True}),
        json.dumps([1, 2]),
    ],
)
def test_bad_content_raises(tmp_path, content):
    path = tmp_path / "hs.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(HighScoreLoadError):
        HighScoreFile(path).load_high_score()


def test_save_failure_raises(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(HighScoreSaveError):
        HighScoreFile(blocker / "hs.json").save_high_score(1)


def test_default_path_in_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert HighScoreFile().path == tmp_path / "takojump_highscore.json"

