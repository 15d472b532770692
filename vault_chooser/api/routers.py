"""
FastAPI router definitions for the chooser session endpoints.
"""

from fastapi import APIRouter, HTTPException

from vault_chooser.api.dependencies import get_session_registry
from vault_chooser.api.schemas import (
    CompletionResponse,
    ErrorResponse,
    FilenameDraftRequest,
    IdentifierRequest,
    SessionStateResponse,
    SubmitPromptResponse,
)
from vault_chooser.exceptions import BaseAppError, SessionNotFoundError
from vault_chooser.use_cases.navigation.chooser_session import ChooserSession

router = APIRouter(prefix="/sessions", tags=["sessions"])

_ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


def _get_session(session_id: str) -> ChooserSession:
    try:
        return get_session_registry().get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _state(session_id: str, session: ChooserSession) -> SessionStateResponse:
    return SessionStateResponse.from_session(session_id, session)


@router.post("", response_model=SessionStateResponse, responses=_ERRORS)
async def create_session():
    """
    Create a chooser session and list the root directory.

    A failed root listing still creates the session; the failure is reported
    in ``navigation.listing_error``.
    """
    try:
        session_id, session = get_session_registry().create()
        await session.initialize()
        return _state(session_id, session)
    except BaseAppError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{session_id}", response_model=SessionStateResponse, responses=_ERRORS)
async def get_session(session_id: str):
    """Return the current snapshot of a chooser session."""
    return _state(session_id, _get_session(session_id))


@router.post(
    "/{session_id}/entries/activate",
    response_model=SessionStateResponse,
    responses=_ERRORS,
)
async def activate_entry(session_id: str, body: IdentifierRequest):
    """
    Click an entry of the current listing.

    Directories are entered (the response is sent once their listing has
    loaded); files become the selected target.
    """
    session = _get_session(session_id)
    try:
        entry = session.navigator.find_entry(body.identifier)
        if entry is None:
            raise HTTPException(
                status_code=400, detail=f"Unknown entry: {body.identifier}"
            )
        task = session.activate_entry(entry)
        if task is not None:
            await task
        return _state(session_id, session)
    except BaseAppError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/{session_id}/breadcrumbs/navigate",
    response_model=SessionStateResponse,
    responses=_ERRORS,
)
async def navigate_to_breadcrumb(session_id: str, body: IdentifierRequest):
    """Jump back to an ancestor directory of the current directory."""
    session = _get_session(session_id)
    try:
        breadcrumb = session.navigator.find_breadcrumb(body.identifier)
        if breadcrumb is None:
            raise HTTPException(
                status_code=400, detail=f"Unknown breadcrumb: {body.identifier}"
            )
        await session.navigate_to_breadcrumb(breadcrumb)
        return _state(session_id, session)
    except BaseAppError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/{session_id}/prompt/open", response_model=SessionStateResponse, responses=_ERRORS
)
async def open_prompt(session_id: str):
    session = _get_session(session_id)
    try:
        session.open_prompt()
        return _state(session_id, session)
    except BaseAppError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/{session_id}/prompt/close", response_model=SessionStateResponse, responses=_ERRORS
)
async def close_prompt(session_id: str):
    session = _get_session(session_id)
    try:
        session.close_prompt()
        return _state(session_id, session)
    except BaseAppError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put(
    "/{session_id}/prompt/draft", response_model=SessionStateResponse, responses=_ERRORS
)
async def update_filename_draft(session_id: str, body: FilenameDraftRequest):
    session = _get_session(session_id)
    try:
        session.update_filename_draft(body.text)
        return _state(session_id, session)
    except BaseAppError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/{session_id}/prompt/submit",
    response_model=SubmitPromptResponse,
    responses=_ERRORS,
)
async def submit_prompt(session_id: str):
    """
    Submit the filename prompt.

    ``target`` is null when the composed path already exists; in that case the
    draft and the selection are both cleared.
    """
    session = _get_session(session_id)
    try:
        target = session.submit_prompt()
        return SubmitPromptResponse(target=target, state=_state(session_id, session))
    except BaseAppError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/{session_id}/draft/select", response_model=SessionStateResponse, responses=_ERRORS
)
async def select_draft(session_id: str):
    session = _get_session(session_id)
    try:
        session.select_draft()
        return _state(session_id, session)
    except BaseAppError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/{session_id}/draft/cancel", response_model=SessionStateResponse, responses=_ERRORS
)
async def cancel_draft(session_id: str):
    session = _get_session(session_id)
    try:
        session.cancel_draft()
        return _state(session_id, session)
    except BaseAppError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/{session_id}/complete", response_model=CompletionResponse, responses=_ERRORS
)
async def complete_session(session_id: str):
    """Finish the session with its selected target and forget it."""
    session = _get_session(session_id)
    try:
        target = session.complete()
        get_session_registry().remove(session_id)
        return CompletionResponse(target=target)
    except BaseAppError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{session_id}", response_model=CompletionResponse, responses=_ERRORS)
async def abort_session(session_id: str):
    """Abort the session without a target and forget it."""
    session = _get_session(session_id)
    try:
        session.abort()
        get_session_registry().remove(session_id)
        return CompletionResponse(target=None)
    except BaseAppError as e:
        raise HTTPException(status_code=400, detail=str(e))
