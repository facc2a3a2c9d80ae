import hmac
import logging
from typing import Iterable, Optional

from fastapi import FastAPI, Request, Depends, Header
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import teams, verifier
from .config import Settings
from .errors import AuthError, HuntError, NotFoundError
from .questions import Question, QuestionBank, load_questions
from .store import HuntStore

log = logging.getLogger("scavenger")


class LoginIn(BaseModel):
    teamName: Optional[str] = None
    password: Optional[str] = None


class RegisterIn(BaseModel):
    teamName: Optional[str] = None
    password: Optional[str] = None


class VerifyIn(BaseModel):
    questionId: Optional[int] = None
    answer: Optional[str] = None
    teamId: Optional[int] = None
    teamName: Optional[str] = None


def get_store(request: Request) -> HuntStore:
    return request.app.state.store


def get_bank(request: Request) -> QuestionBank:
    return request.app.state.bank


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_admin(x_admin_key: Optional[str] = Header(None), settings: Settings = Depends(get_settings)):
    if not settings.admin_api_key:
        return
    if not x_admin_key or not hmac.compare_digest(x_admin_key, settings.admin_api_key):
        raise AuthError("Admin key required")


def _team_out(team):
    return {"success": True, "teamId": team.id, "teamName": team.team_name}


def create_app(settings: Optional[Settings] = None, questions: Optional[Iterable[Question]] = None,
               store: Optional[HuntStore] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="Scavenger Hunt")
    app.state.settings = settings
    app.state.store = store or HuntStore(settings.database_url)
    app.state.bank = QuestionBank(questions) if questions is not None else load_questions(settings.questions_file)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "X-Admin-Key"],
    )

    @app.exception_handler(HuntError)
    async def hunt_error(request: Request, exc: HuntError):
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": "Invalid request"}, status_code=400)

    @app.on_event("startup")
    def on_startup():
        app.state.store.create_schema(retries=settings.db_connect_retries)
        if not settings.admin_api_key:
            log.warning("ADMIN_API_KEY not set, /submissions is open to everyone")
        log.info("Serving %d questions (passwords %s)", len(app.state.bank),
                 "required" if settings.require_password else "optional")

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.store.dispose()

    @app.post("/login")
    def login(data: LoginIn, store=Depends(get_store), settings=Depends(get_settings)):
        team = teams.login(store, data.teamName, data.password, require_password=settings.require_password)
        return _team_out(team)

    @app.post("/register")
    def register(data: RegisterIn, store=Depends(get_store)):
        return _team_out(teams.register(store, data.teamName, data.password))

    @app.get("/question/{question_id}")
    def question(question_id: str, bank=Depends(get_bank)):
        try:
            qid = int(question_id)
        except ValueError:
            raise NotFoundError("Question not found")
        # clues are only handed out by a correct /verify
        return {"question": bank.get(qid).prompt}

    @app.post("/verify")
    def verify(data: VerifyIn, store=Depends(get_store), bank=Depends(get_bank)):
        result = verifier.verify(store, bank, data.questionId, data.answer,
                                 team_id=data.teamId, team_name=data.teamName)
        return result.to_dict()

    @app.get("/progress/{team_id}")
    def progress(team_id: int, store=Depends(get_store)):
        return [p.to_dict() for p in store.list_progress(team_id)]

    @app.get("/submissions", dependencies=[Depends(require_admin)])
    def submissions(store=Depends(get_store)):
        return [s.to_dict() for s in store.list_submissions()]

    return app
