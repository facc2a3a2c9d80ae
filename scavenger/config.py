import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_QUESTIONS_FILE = os.path.join(os.path.dirname(__file__), "questions.json")


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _origins(value: str) -> List[str]:
    return [o.strip() for o in value.split(",") if o.strip()]


@dataclass
class Settings:
    database_url: str = "sqlite:///./hunt.db"
    questions_file: str = DEFAULT_QUESTIONS_FILE
    require_password: bool = False
    admin_api_key: str = ""
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000
    db_connect_retries: int = 10

    @classmethod
    def from_env(cls) -> "Settings":
        env = os.environ
        return cls(
            database_url=env.get("DATABASE_URL", cls.database_url),
            questions_file=env.get("QUESTIONS_FILE", DEFAULT_QUESTIONS_FILE),
            require_password=_flag(env.get("REQUIRE_PASSWORD", "false")),
            admin_api_key=env.get("ADMIN_API_KEY", ""),
            cors_origins=_origins(env.get("CORS_ORIGINS", "*")),
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
            host=env.get("HOST", cls.host),
            port=int(env.get("PORT", cls.port)),
            db_connect_retries=int(env.get("DB_CONNECT_RETRIES", cls.db_connect_retries)),
        )
