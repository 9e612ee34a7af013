"""Conversion of action failures into HTTP errors."""

from fastapi import HTTPException

from ..domain.services.action_state import VALIDATION_FAILURE, ActionState


def action_failure(state: ActionState) -> HTTPException:
    """Build the HTTP error describing the last failure of an action."""
    if state.error_kind == VALIDATION_FAILURE:
        return HTTPException(
            status_code=422,
            detail={"message": state.error, "field_errors": state.field_errors},
        )
    return HTTPException(status_code=502, detail=state.error or "Request failed")


def action_in_progress(action: str) -> HTTPException:
    return HTTPException(status_code=409, detail=f"{action} already in progress")
