"""Presentation-layer dependency injection.

The console session is built once in the app lifespan and stored on
app.state; routes receive it through get_session.
"""

from typing import Annotated

from fastapi import Depends, Request

from fireview.application.session import ConsoleSession


def get_session(request: Request) -> ConsoleSession:
    """Return the process-wide console session set up by the lifespan."""
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise RuntimeError("Console session is not initialized; is the lifespan running?")
    return session


SessionDep = Annotated[ConsoleSession, Depends(get_session)]
