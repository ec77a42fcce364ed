from typing import Dict, Optional

from fastapi import Depends, HTTPException, Request, status

from utils.session_store import SessionData, SessionStore, get_session_store

SESSION_COOKIE_NAME = "medkit_session"


def get_session(request: Request, store: SessionStore) -> Optional[SessionData]:
    session_id = request.cookies.get(SESSION_COOKIE_NAME)
    if not session_id:
        return None
    return store.get(session_id)


def is_authenticated(request: Request, store: SessionStore) -> bool:
    return get_session(request, store) is not None


def get_current_user(
    request: Request,
    store: SessionStore = Depends(get_session_store),
) -> Dict[str, str]:
    """
    FastAPI dependency that requires a live admin session cookie.

    Usage:
        router = APIRouter(dependencies=[Depends(get_current_user)])
    """
    session = get_session(request, store)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return {"sub": session.username}


def get_user_identifier(user: Dict[str, str]) -> Optional[str]:
    return user.get("sub") if user else None
