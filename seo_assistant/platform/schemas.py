from typing import Generic, Literal, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """
    Envelope shared by every JSON endpoint. error_code is a stable,
    machine-readable name for the failure ("site_unreachable", "audit_timeout",
    ...) and stays null on success.
    """

    status_code: int = 200
    status: Literal["success", "error"] = "success"
    message: str
    data: T
    error_code: Optional[str] = None
