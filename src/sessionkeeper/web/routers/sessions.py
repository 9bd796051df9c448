from datetime import UTC, datetime

from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from sessionkeeper.core.modules.session.models import CookieSpec, SessionRecord
from sessionkeeper.web.deps import AppDep, ConfigDep, CurrentSessionDep, SessionTokenDep
from sessionkeeper.web.openapi import ErrorResponse

router = APIRouter(tags=["sessions"])


class SessionView(BaseModel):
    """Session information (API representation)."""

    token: str = Field(..., description="Session token, also set as a cookie")
    user_id: int = Field(..., description="Bound user id, -1 for a guest session")
    expires_at: datetime = Field(..., description="Absolute expiry time")

    @classmethod
    def from_domain(cls, record: SessionRecord) -> "SessionView":
        return cls(token=record.token, user_id=record.user_id, expires_at=record.expires_at)


class BindRequest(BaseModel):
    """Request to attach a user to the current session."""

    user_id: int = Field(..., ge=0, description="User id to bind")


def set_session_cookie(response: Response, cookie: CookieSpec, secure: bool) -> None:
    response.set_cookie(
        key=cookie.name,
        value=cookie.value,
        expires=cookie.expires.astimezone(UTC),
        httponly=True,
        samesite="lax",
        secure=secure,
    )


@router.post(
    "/sessions",
    summary="Start session",
    description="Create a guest session and set the session cookie.",
    operation_id="startSession",
    status_code=201,
    responses={201: {"description": "Session created"}},
)
def start_session(app: AppDep, config: ConfigDep, response: Response) -> SessionView:
    record = app.start_session()
    set_session_cookie(response, app.session_cookie(record), config.cookie_secure)
    return SessionView.from_domain(record)


@router.get(
    "/sessions/current",
    summary="Get current session",
    description="Get the session identified by the request cookie.",
    operation_id="getCurrentSession",
    responses={
        200: {"description": "Current session"},
        401: {"model": ErrorResponse, "description": "Missing, unknown or expired session"},
    },
)
def get_current_session(session: CurrentSessionDep) -> SessionView:
    return SessionView.from_domain(session)


@router.post(
    "/sessions/current/bind",
    summary="Bind user",
    description="Attach a user id to the current session. A user may own one live session at a time.",
    operation_id="bindSessionUser",
    responses={
        200: {"description": "User bound to session"},
        400: {"model": ErrorResponse, "description": "Session already bound to another user"},
        401: {"model": ErrorResponse, "description": "Missing, unknown or expired session"},
        409: {"model": ErrorResponse, "description": "User already has an active session"},
    },
)
def bind_user(
    request: BindRequest, app: AppDep, config: ConfigDep, session: CurrentSessionDep, response: Response
) -> SessionView:
    record = app.bind_user(session.token, request.user_id)
    set_session_cookie(response, app.session_cookie(record), config.cookie_secure)
    return SessionView.from_domain(record)


@router.delete(
    "/sessions/current",
    summary="End session",
    description="Delete the current session and clear the cookie.",
    operation_id="endSession",
    status_code=204,
    responses={
        204: {"description": "Session ended"},
        401: {"model": ErrorResponse, "description": "Session cookie missing"},
    },
)
def end_session(app: AppDep, config: ConfigDep, token: SessionTokenDep, response: Response) -> None:
    app.end_session(token)
    response.delete_cookie(config.cookie_name)

