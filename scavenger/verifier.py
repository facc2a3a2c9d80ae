import logging
from dataclasses import dataclass
from typing import Optional

from .errors import ValidationError
from .models import Team, utcnow
from .questions import Question, QuestionBank
from .store import HuntStore

log = logging.getLogger("scavenger.verifier")


@dataclass
class VerifyResult:
    correct: bool
    clue: Optional[str] = None

    def to_dict(self):
        if self.correct:
            return {"success": True, "clue": self.clue}
        return {"success": False}


def normalize(answer: str) -> str:
    return answer.strip().lower()


def is_correct(question: Question, answer: str) -> bool:
    if question.auto_accept:
        return True
    return normalize(answer) == normalize(question.answer)


def _resolve_team(store: HuntStore, team_id: Optional[int], team_name: Optional[str]) -> Team:
    team = None
    if team_id is not None:
        team = store.get_team(team_id)
    elif team_name:
        team = store.find_team(team_name.strip())
    if team is None:
        raise ValidationError("Invalid team")
    return team


def verify(store: HuntStore, bank: QuestionBank, question_id: Optional[int], answer: Optional[str],
           team_id: Optional[int] = None, team_name: Optional[str] = None) -> VerifyResult:
    """Check an answer, log the attempt and record progress on success.

    The submission is written before the progress row; the two writes are
    independent, so a failure in between leaves an attempt without a solve.
    """
    if question_id is None or answer is None:
        raise ValidationError("questionId and answer required")
    question = bank.get(question_id)
    team = _resolve_team(store, team_id, team_name)

    now = utcnow()
    ok = is_correct(question, answer)
    store.record_submission(team.id, team.team_name, question.id, answer, ok, submitted_at=now)

    if not ok:
        return VerifyResult(correct=False)

    if store.record_progress(team.id, question.id, cleared_at=now):
        log.info("Team %s cleared question %d", team.team_name, question.id)
    return VerifyResult(correct=True, clue=question.clue)
