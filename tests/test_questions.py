import json

import pytest

from scavenger.errors import NotFoundError
from scavenger.questions import DEFAULT_QUESTIONS, Question, QuestionBank, load_questions


def test_get_question_returns_prompt_only(client):
    resp = client.get("/question/1")
    assert resp.status_code == 200
    assert resp.json() == {"question": "Where is the Eiffel Tower?"}


@pytest.mark.parametrize("qid", [0, 4, 99, -1])
def test_unknown_question_is_404(client, qid):
    resp = client.get(f"/question/{qid}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Question not found"}


@pytest.mark.parametrize("qid", ["abc", "1.5", "one"])
def test_non_numeric_id_is_404(client, qid):
    resp = client.get(f"/question/{qid}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Question not found"}


def test_bank_lookup():
    bank = QuestionBank([Question(7, "p", "a", "c")])
    assert bank.get(7).clue == "c"
    with pytest.raises(NotFoundError):
        bank.get(8)


def test_bank_rejects_duplicate_ids():
    with pytest.raises(ValueError):
        QuestionBank([Question(1, "p", "a", "c"), Question(1, "q", "b", "d")])


def test_missing_file_falls_back_to_defaults(tmp_path):
    bank = load_questions(str(tmp_path / "nope.json"))
    assert len(bank) == len(DEFAULT_QUESTIONS)
    assert bank.get(1).answer == "start"


def test_load_questions_from_json(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps([
        {"id": 10, "question": "First?", "answer": "one", "clue": "go left"},
        {"id": 11, "question": "Free", "answer": "", "clue": "go right", "autoAccept": True},
    ]))
    bank = load_questions(str(path))
    assert [q.id for q in bank] == [10, 11]
    assert not bank.get(10).auto_accept
    assert bank.get(11).auto_accept
