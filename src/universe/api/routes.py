"""API routes for session-level operations.

Provides:
- /health for liveness and load state
- /graph/language to switch (and reload) the content language
"""

import logging

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from universe.exceptions import CycleError, DuplicateIdError, FetchError, UniverseError
from universe.navigation.session import NavigationSession

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Models
# ============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    loaded: bool
    language: str
    title: str | None = None


class LanguageRequest(BaseModel):
    """Language switch request; omit the language to toggle."""

    language: str | None = None


class LanguageResponse(BaseModel):
    """Result of a language switch."""

    language: str
    title: str | None
    committed: bool


# ============================================================================
# Helpers
# ============================================================================


def get_session(request: Request) -> NavigationSession:
    """Get navigation session from app state."""
    return request.app.state.session


def http_error_for(e: UniverseError) -> HTTPException:
    """Map a loading failure onto an HTTP error."""
    if isinstance(e, FetchError):
        return HTTPException(status_code=502, detail=str(e))
    if isinstance(e, (CycleError, DuplicateIdError)):
        return HTTPException(status_code=422, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint."""
    session = get_session(request)
    return HealthResponse(
        status="healthy" if session.loaded else "degraded",
        loaded=session.loaded,
        language=session.language,
        title=session.title,
    )


@router.post("/graph/language", response_model=LanguageResponse)
async def switch_language(request: Request, body: LanguageRequest) -> LanguageResponse:
    """
    Switch the content language and reload the universe.

    On failure the previously loaded universe stays in place.
    """
    session = get_session(request)

    try:
        if body.language is None:
            committed = await session.toggle_language()
        else:
            committed = await session.load(body.language)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UniverseError as e:
        logger.exception(f"Error loading universe: {e}")
        raise http_error_for(e)

    return LanguageResponse(
        language=session.language,
        title=session.title,
        committed=committed,
    )
