from datetime import datetime, timedelta
import logging
import os
import secrets

import pytz
from dotenv import load_dotenv
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from passlib.context import CryptContext
from starlette import status

from schemas.auth import AuthCheck, LoginRequest, LoginResponse
from utils.auth_utils import SESSION_COOKIE_NAME, is_authenticated
from utils.session_store import SessionData, SessionStore, get_session_store

load_dotenv()

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)

# Single admin account, configured through the environment
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "medkit123")
SECURE_COOKIES = os.getenv("APP_ENV", "development").lower() == "production"

SESSION_TTL = timedelta(hours=24)
REMEMBER_ME_TTL = timedelta(days=30)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
# Only the hash is kept in memory after startup
ADMIN_PASSWORD_HASH = pwd_context.hash(ADMIN_PASSWORD)


def verify_credentials(username: str, password: str) -> bool:
    # Always run the hash check so a wrong username costs the same as a wrong password
    password_ok = pwd_context.verify(password, ADMIN_PASSWORD_HASH)
    return secrets.compare_digest(username.encode(), ADMIN_USERNAME.encode()) and password_ok


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    response: Response,
    store: SessionStore = Depends(get_session_store),
):
    if not verify_credentials(credentials.username, credentials.password):
        logger.warning("Failed login attempt for %r", credentials.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    session_id = secrets.token_urlsafe(32)
    ttl = REMEMBER_ME_TTL if credentials.remember_me else SESSION_TTL
    expires_at = datetime.now(pytz.utc) + ttl
    store.set(session_id, SessionData(username=credentials.username, expires_at=expires_at))

    response.set_cookie(
        SESSION_COOKIE_NAME,
        session_id,
        httponly=True,
        secure=SECURE_COOKIES,
        samesite="lax",
        max_age=int(ttl.total_seconds()),
    )
    logger.info(f"User '{credentials.username}' logged in (remember_me={credentials.remember_me})")
    return LoginResponse(success=True, username=credentials.username)


@router.post("/logout")
def logout(request: Request, response: Response, store: SessionStore = Depends(get_session_store)):
    session_id = request.cookies.get(SESSION_COOKIE_NAME)
    if session_id:
        store.expire(session_id)
        logger.info("Session logged out")
    response.delete_cookie(SESSION_COOKIE_NAME)
    return {"success": True}


@router.get("/check", response_model=AuthCheck)
def check(request: Request, store: SessionStore = Depends(get_session_store)):
    return AuthCheck(authenticated=is_authenticated(request, store))
