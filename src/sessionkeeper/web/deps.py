from typing import Annotated, cast

from fastapi import Depends, Request

from sessionkeeper.app import App
from sessionkeeper.config import Config
from sessionkeeper.core.modules.session.models import SessionRecord, SessionToken
from sessionkeeper.errors import AuthenticationError, NotFoundError


def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


def get_config(request: Request) -> Config:
    return cast(Config, request.app.state.config)


def get_session_token(request: Request, config: Annotated[Config, Depends(get_config)]) -> SessionToken:
    """Read the bare session token from the request cookie."""
    token = request.cookies.get(config.cookie_name)
    if not token:
        raise AuthenticationError("Session cookie missing")
    return SessionToken(token)


def get_current_session(
    app: Annotated[App, Depends(get_app)],
    token: Annotated[SessionToken, Depends(get_session_token)],
) -> SessionRecord:
    try:
        return app.get_session(token)
    except NotFoundError as e:
        raise AuthenticationError("Invalid or expired session") from e


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ConfigDep = Annotated[Config, Depends(get_config)]
SessionTokenDep = Annotated[SessionToken, Depends(get_session_token)]
CurrentSessionDep = Annotated[SessionRecord, Depends(get_current_session)]
