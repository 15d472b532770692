"""
Pydantic models for API requests and responses.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from vault_chooser.entities.directory_entry import BreadcrumbEntry, DirectoryEntry
from vault_chooser.entities.navigation_state import ComposerState, NavigationState


class EntryInfo(BaseModel):
    """Schema for one listed directory entry."""

    identifier: str = Field(..., description="Gateway identifier of the entry")
    name: str = Field(..., description="Display name")
    type: str = Field(..., description="Entry kind: 'file' or 'directory'")

    @classmethod
    def from_entity(cls, entry: DirectoryEntry):
        """Create an EntryInfo schema from a DirectoryEntry entity."""
        details = entry.get_details()
        return cls(
            identifier=details["identifier"],
            name=details["name"],
            type=details["type"],
        )


class BreadcrumbInfo(BaseModel):
    """Schema for one breadcrumb."""

    label: str = Field(..., description="Breadcrumb label")
    identifier: str = Field(..., description="Identifier of the ancestor directory")

    @classmethod
    def from_entity(cls, breadcrumb: BreadcrumbEntry):
        return cls(label=breadcrumb.label, identifier=breadcrumb.identifier)


class NavigationInfo(BaseModel):
    """Schema for the navigation part of a chooser session."""

    current_directory: str = Field(..., description="Directory currently listed")
    breadcrumbs: List[BreadcrumbInfo] = Field(
        default_factory=list, description="Ancestors of the current directory, root first"
    )
    is_loading: bool = Field(..., description="Whether a listing fetch is in flight")
    entries: List[EntryInfo] = Field(
        default_factory=list, description="Last successfully fetched listing"
    )
    selected_target: Optional[str] = Field(None, description="Currently selected target")
    draft_target: Optional[str] = Field(None, description="Composed new target, if any")
    listing_error: Optional[str] = Field(
        None, description="Message of the last failed listing fetch"
    )

    @classmethod
    def from_entity(cls, state: NavigationState):
        return cls(
            current_directory=state.current_directory,
            breadcrumbs=[BreadcrumbInfo.from_entity(b) for b in state.breadcrumbs],
            is_loading=state.is_loading,
            entries=[EntryInfo.from_entity(e) for e in state.entries],
            selected_target=state.selected_target,
            draft_target=state.draft_target,
            listing_error=state.listing_error,
        )


class ComposerInfo(BaseModel):
    """Schema for the new-target prompt."""

    prompt_open: bool = Field(..., description="Whether the filename prompt is open")
    filename_draft: Optional[str] = Field(None, description="Raw filename input")
    can_submit: bool = Field(..., description="Whether the draft may be submitted")
    collision: Optional[str] = Field(
        None, description="Path rejected by the last submit because it already exists"
    )

    @classmethod
    def from_entity(cls, state: ComposerState):
        return cls(
            prompt_open=state.prompt_open,
            filename_draft=state.filename_draft,
            can_submit=state.can_submit,
            collision=state.collision,
        )


class SessionStateResponse(BaseModel):
    """Schema for a chooser session snapshot."""

    session_id: str = Field(..., description="Chooser session id")
    navigation: NavigationInfo
    composer: ComposerInfo
    completed: bool = Field(False, description="Whether the session was finished")

    @classmethod
    def from_session(cls, session_id: str, session):
        snapshot = session.snapshot
        return cls(
            session_id=session_id,
            navigation=NavigationInfo.from_entity(snapshot.navigation),
            composer=ComposerInfo.from_entity(snapshot.composer),
            completed=snapshot.completed,
        )


class IdentifierRequest(BaseModel):
    """Schema for commands addressing an entry or breadcrumb."""

    identifier: str = Field(..., description="Identifier of the entry or breadcrumb")


class FilenameDraftRequest(BaseModel):
    """Schema for updating the new-target filename draft."""

    text: str = Field(..., description="Raw filename input")


class SubmitPromptResponse(BaseModel):
    """Schema for the result of submitting the filename prompt."""

    target: Optional[str] = Field(
        None, description="Drafted target, or null when it collided with an existing entry"
    )
    state: SessionStateResponse


class CompletionResponse(BaseModel):
    """Schema for a finished chooser session."""

    target: Optional[str] = Field(None, description="Chosen target, null when aborted")


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: str = Field(..., description="Error message")
