from fastapi import HTTPException, status


def session_not_found_error(session_id: str):
    """Return HTTP 404 for an unknown session."""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Session {session_id} not found",
    )


def invalid_filters_error(message: str):
    """Return HTTP 400 for a filter patch the query cannot hold."""
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=message,
    )


def invalid_roi_error(message: str):
    """Return HTTP 400 for a manual ROI that is not a usable rectangle."""
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=message,
    )
