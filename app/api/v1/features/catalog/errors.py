from fastapi import HTTPException, status


class CatalogError(Exception):
    """The catalog could not answer (unreachable, bad status, bad payload)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def catalog_unavailable_error(message: str):
    """Return HTTP 502 when the catalog failed to answer."""
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=message,
    )


def products_error():
    """Return HTTP 500 for product listing failure."""
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Failed to retrieve products",
    )
