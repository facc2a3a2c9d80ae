from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def utcnow() -> datetime:
    # stored as naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Team(Base):
    __tablename__ = "teams"
    id = Column(Integer, primary_key=True)
    team_name = Column(String, unique=True, nullable=False)
    password_hash = Column(String)                 # only set for password-protected teams


class Progress(Base):
    __tablename__ = "progress"
    __table_args__ = (UniqueConstraint("team_id", "clue_id", name="uq_progress_team_clue"),)
    id = Column(Integer, primary_key=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    clue_id = Column(Integer, nullable=False)       # question id that was cleared
    cleared_at = Column(DateTime, default=utcnow, nullable=False)
    team = relationship("Team")

    def to_dict(self):
        return {"clueId": self.clue_id, "clearedAt": self.cleared_at.isoformat()}


class Submission(Base):
    __tablename__ = "submissions"
    id = Column(Integer, primary_key=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    team_name = Column(String, nullable=False)
    question_id = Column(Integer, nullable=False)
    answer = Column(Text, nullable=False)
    correct = Column(Boolean, default=False, nullable=False)
    submitted_at = Column(DateTime, default=utcnow, nullable=False)
    team = relationship("Team")

    def to_dict(self):
        return {
            "id": self.id,
            "teamId": self.team_id,
            "teamName": self.team_name,
            "questionId": self.question_id,
            "answer": self.answer,
            "correct": self.correct,
            "submittedAt": self.submitted_at.isoformat(),
        }
