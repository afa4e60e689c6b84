from typing import List, Optional
from fastapi import HTTPException, status


class InvalidRequest(HTTPException):
    def __init__(self, detail: str = "Invalid request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BookingConflict(HTTPException):
    """Requested dates are unavailable, or the booking is in the wrong state."""

    def __init__(self, detail: str = "Dates are not available", conflicts: Optional[List[dict]] = None):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)
        self.conflicts = conflicts or []


class ServiceUnavailable(HTTPException):
    def __init__(self, detail: str = "Service unavailable"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
