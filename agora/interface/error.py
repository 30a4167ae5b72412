"""Interface layer errors.

Domain errors are translated to HTTP responses at the route boundary.
"""

from fastapi import HTTPException, status

from agora.domain.error import (
    DomainError,
    NotFoundError,
    SelfVoteForbiddenError,
    StorageUnavailableError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTP error returned to the client.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException to raise from the route
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, SelfVoteForbiddenError):
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You cannot vote on your own content",
        )
    if isinstance(error, StorageUnavailableError):
        # Retries are already exhausted; the client may try again later
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service temporarily unavailable, please retry",
            headers={"Retry-After": "1"},
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
