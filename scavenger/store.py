"""Persistence for teams, the progress ledger and the submission log.

A single :class:`HuntStore` owns the engine and session factory for the
lifetime of the app. Every method opens its own short-lived session, so
each call is an independent read or write. Any SQLAlchemy failure comes
out as :class:`StoreError`.
"""
import functools
import logging
import time
from datetime import datetime
from typing import List, Optional

from sqlalchemy import create_engine, select
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .errors import StoreError
from .models import Base, Team, Progress, Submission, utcnow

log = logging.getLogger("scavenger.store")

CONNECT_RETRY_DELAY = 3.0
# ids outside a signed 64-bit integer cannot match a row
MAX_ROW_ID = 2 ** 63 - 1


def _guarded(fn):
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except SQLAlchemyError:
            log.exception("Store operation %s failed", fn.__name__)
            raise StoreError()
    return wrapper


def _storable_id(value: int) -> bool:
    return -MAX_ROW_ID - 1 <= value <= MAX_ROW_ID


class HuntStore:
    def __init__(self, database_url: str):
        self.engine = create_engine(database_url, future=True)
        self.Session = sessionmaker(self.engine, expire_on_commit=False, future=True)

    def create_schema(self, retries: int = 10, delay: float = CONNECT_RETRY_DELAY):
        attempts = max(retries, 1)
        for attempt in range(1, attempts + 1):
            try:
                Base.metadata.create_all(self.engine)
            except OperationalError:
                if attempt == attempts:
                    raise RuntimeError(f"Could not create hunt tables after {attempts} attempts")
                log.warning("Database unavailable (attempt %d/%d), next try in %.0fs", attempt, attempts, delay)
                time.sleep(delay)
            else:
                log.info("Hunt tables ready")
                return

    def dispose(self):
        self.engine.dispose()

    # teams

    @_guarded
    def get_team(self, team_id: int) -> Optional[Team]:
        if not _storable_id(team_id):
            return None
        with self.Session() as db:
            return db.get(Team, team_id)

    @_guarded
    def find_team(self, team_name: str) -> Optional[Team]:
        with self.Session() as db:
            return db.execute(select(Team).filter_by(team_name=team_name)).scalar_one_or_none()

    @_guarded
    def create_team(self, team_name: str, password_hash: Optional[str] = None) -> Optional[Team]:
        """Insert a team. Returns None if the name is already taken."""
        with self.Session() as db:
            team = Team(team_name=team_name, password_hash=password_hash)
            db.add(team)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                return None
            log.info("Created team %s (id=%d)", team.team_name, team.id)
            return team

    # submission log

    @_guarded
    def record_submission(self, team_id: int, team_name: str, question_id: int, answer: str,
                          correct: bool, submitted_at: Optional[datetime] = None) -> Submission:
        with self.Session() as db:
            sub = Submission(
                team_id=team_id,
                team_name=team_name,
                question_id=question_id,
                answer=answer,
                correct=correct,
                submitted_at=submitted_at or utcnow(),
            )
            db.add(sub)
            db.commit()
            return sub

    @_guarded
    def list_submissions(self) -> List[Submission]:
        with self.Session() as db:
            stmt = select(Submission).order_by(Submission.submitted_at, Submission.id)
            return list(db.execute(stmt).scalars())

    # progress ledger

    @_guarded
    def record_progress(self, team_id: int, clue_id: int, cleared_at: Optional[datetime] = None) -> bool:
        """Record a solve. Returns False if the team had already cleared this question."""
        with self.Session() as db:
            if db.execute(select(Progress.id).filter_by(team_id=team_id, clue_id=clue_id)).first():
                return False
            db.add(Progress(team_id=team_id, clue_id=clue_id, cleared_at=cleared_at or utcnow()))
            try:
                db.commit()
            except IntegrityError:
                # a concurrent request cleared it first
                db.rollback()
                return False
            return True

    @_guarded
    def list_progress(self, team_id: int) -> List[Progress]:
        if not _storable_id(team_id):
            return []
        with self.Session() as db:
            stmt = (select(Progress)
                    .filter_by(team_id=team_id)
                    .order_by(Progress.cleared_at, Progress.id))
            return list(db.execute(stmt).scalars())
