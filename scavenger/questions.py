"""Static question bank.

Questions are loaded once at startup, either from a JSON file or from the
built-in list below, and are never modified afterwards.
"""
import json
import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List

from .errors import NotFoundError

log = logging.getLogger("scavenger.questions")


@dataclass(frozen=True)
class Question:
    id: int
    prompt: str
    answer: str
    clue: str
    auto_accept: bool = False       # any submitted answer counts as correct


DEFAULT_QUESTIONS = [
    Question(1, "Clue: 01010011 01010100 01000001 01010010 01010100", "start",
             "It's not a word, is it?"),
    Question(2, "Location: Take the steps down to the secret island below. Search for the water "
                "that once danced, but oops! It's gone on a vacation. Your clue waits where the "
                "dry droplets sit", "binomial",
             "It's the pride of CSE's hometown"),
    Question(3, "Location: No kings, no queens, only a table where everyone's opinion matters. "
                "Sit in the circle of wisdom, your next clue is hiding there", "firewall",
             "You should know the round table, but maybe it's not the easier one"),
    Question(4, "Location: -.. .-. .. -. -.- .. -. --. / .-- .- - . .-. / ... .--. --- -  "
                "its the \"main\" spot", "deque",
             "Mars Co"),
    Question(5, "Your next clue isn't in bricks and benches, it's in likes and follows. If you're "
                "an engineer, you know IE. If you're from here, you know TCE. Add a dot in "
                "between and stop overthinking", "recursion",
             "search in the ocean where you reel"),
    Question(6, "Location: Legends say the numbers 0x49 and 0x46 guard a secret. Combine them with "
                "the SECOND sign you see and the classroom whispers your next move.", "if2",
             "It's definitely not in CSE. IT maybe"),
]


class QuestionBank:
    """Read-only ordered collection of questions indexed by id."""

    def __init__(self, questions: Iterable[Question]):
        self._questions: List[Question] = list(questions)
        self._by_id: Dict[int, Question] = {}
        for q in self._questions:
            if q.id in self._by_id:
                raise ValueError(f"Duplicate question id {q.id}")
            self._by_id[q.id] = q

    def __len__(self):
        return len(self._questions)

    def __iter__(self):
        return iter(self._questions)

    def get(self, question_id: int) -> Question:
        q = self._by_id.get(question_id)
        if q is None:
            raise NotFoundError("Question not found")
        return q


def load_questions(path: str) -> QuestionBank:
    """Build the bank from a JSON list, falling back to the built-in questions."""
    if not os.path.exists(path):
        log.info("%s not found, using built-in questions", path)
        return QuestionBank(DEFAULT_QUESTIONS)

    with open(path, "r", encoding="utf-8") as f:
        entries = json.load(f)

    bank = QuestionBank(
        Question(
            id=int(e["id"]),
            prompt=e["question"],
            answer=e["answer"],
            clue=e["clue"],
            auto_accept=bool(e.get("autoAccept", False)),
        )
        for e in entries
    )
    log.info("Loaded %d questions from %s", len(bank), path)
    return bank
