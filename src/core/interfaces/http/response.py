"""Shared response bodies."""

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Plain acknowledgement body: ``{"success": true, "message": ...}``."""

    success: bool = True
    message: str | None = None
