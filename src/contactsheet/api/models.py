from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class ProbeResponse(BaseModel):
    status: Literal["ok"] = "ok"
    message: str = "Contact form endpoint is running."


class SubmissionResponse(BaseModel):
    """
    Body returned for every POST, success or error.

    `timestamp` is only present on success and is the server time the row
    was stamped with ("YYYY-MM-DD HH:MM:SS", Africa/Accra by default).
    """

    status: Literal["success", "error"]
    message: str
    timestamp: Optional[str] = Field(None, description="Server-side submission time")
