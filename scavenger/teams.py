from typing import Optional

from passlib.hash import bcrypt

from .errors import AuthError, StoreError, ValidationError
from .models import Team
from .store import HuntStore


def _clean_name(team_name: Optional[str]) -> str:
    name = (team_name or "").strip()
    if not name:
        raise ValidationError("Team name required")
    return name


def login(store: HuntStore, team_name: Optional[str], password: Optional[str] = None,
          require_password: bool = False) -> Team:
    """Look up a team, creating it on first login unless passwords are required."""
    name = _clean_name(team_name)
    team = store.find_team(name)

    if team is None:
        if require_password:
            raise AuthError("Invalid credentials")
        created = store.create_team(name, bcrypt.hash(password) if password else None)
        if created is not None:
            return created
        # another request registered the name first
        team = store.find_team(name)
        if team is None:
            raise StoreError()

    if team.password_hash:
        if not password or not bcrypt.verify(password, team.password_hash):
            raise AuthError("Invalid credentials")
    elif require_password:
        raise AuthError("Invalid credentials")
    return team


def register(store: HuntStore, team_name: Optional[str], password: Optional[str]) -> Team:
    name = _clean_name(team_name)
    if not password:
        raise ValidationError("Password required")
    team = None
    if store.find_team(name) is None:
        team = store.create_team(name, bcrypt.hash(password))
    if team is None:
        raise ValidationError("Team name exists")
    return team
