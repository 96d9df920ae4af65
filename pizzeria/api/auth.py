"""Admin authentication endpoints and utilities."""
import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel

from pizzeria.core.config import settings

router = APIRouter()
logger = logging.getLogger(__name__)

ADMIN_COOKIE = "admin_session"
SESSION_TTL = timedelta(hours=12)

# In-memory admin sessions (use Redis in production)
_sessions: dict[str, dict] = {}


class LoginRequest(BaseModel):
    """Login request model."""
    password: str


class SessionInfo(BaseModel):
    """Session information response."""
    authenticated: bool
    expires_at: Optional[str] = None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_session_token() -> str:
    """Generate a secure session token."""
    return secrets.token_urlsafe(32)


def hash_password(password: str) -> str:
    """Hash password for comparison."""
    return hashlib.sha256(password.encode()).hexdigest()


def check_password(password: str) -> bool:
    """Compare a password with the dashboard password in constant time."""
    return secrets.compare_digest(
        hash_password(password), hash_password(settings.dashboard_password)
    )


def create_session(response: Response) -> str:
    """Create a new admin session and set its cookie."""
    session_token = create_session_token()
    _sessions[session_token] = {
        "authenticated": True,
        "expires_at": _now() + SESSION_TTL,
    }
    response.set_cookie(
        key=ADMIN_COOKIE,
        value=session_token,
        httponly=True,
        max_age=int(SESSION_TTL.total_seconds()),
        samesite="lax",
    )
    return session_token


def get_session_token(request: Request) -> Optional[str]:
    """Extract session token from cookie."""
    return request.cookies.get(ADMIN_COOKIE)


def verify_session(session_token: Optional[str]) -> bool:
    """Verify if session token is valid and not expired."""
    if not session_token:
        return False

    session = _sessions.get(session_token)
    if not session:
        return False

    if _now() > session["expires_at"]:
        del _sessions[session_token]
        return False

    return session.get("authenticated", False)


async def require_auth(request: Request) -> bool:
    """Dependency to require an admin session."""
    if not verify_session(get_session_token(request)):
        raise HTTPException(status_code=401, detail="Authentication required")
    return True


@router.post("/api/auth/login")
async def login(login_req: LoginRequest, response: Response):
    """Login endpoint."""
    if not check_password(login_req.password):
        logger.warning("[AUTH] Failed dashboard login")
        raise HTTPException(status_code=401, detail="Invalid password")

    session_token = create_session(response)
    return {
        "success": True,
        "expires_at": _sessions[session_token]["expires_at"].isoformat(),
    }


@router.post("/api/auth/logout")
async def logout(request: Request, response: Response):
    """Logout endpoint."""
    session_token = get_session_token(request)
    if session_token:
        _sessions.pop(session_token, None)
    response.delete_cookie(ADMIN_COOKIE)
    return {"success": True}


@router.get("/api/auth/session", response_model=SessionInfo)
async def get_session_info(request: Request):
    """Get current session information."""
    session_token = get_session_token(request)
    if verify_session(session_token):
        return SessionInfo(
            authenticated=True,
            expires_at=_sessions[session_token]["expires_at"].isoformat(),
        )
    return SessionInfo(authenticated=False)
