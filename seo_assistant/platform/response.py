from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from seo_assistant.platform.schemas import APIResponse


def api_response(
    *,
    data: Optional[Any] = None,
    message: str = "Operation successful",
    status_code: int = status.HTTP_200_OK,
    error_code: Optional[str] = None,
) -> JSONResponse:
    """
    Wrap data in the APIResponse envelope.

    Pydantic models are dumped in JSON mode, so a Report can be passed as is.
    status is "success" below 400 and "error" otherwise.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    envelope = APIResponse[Any](
        status_code=status_code,
        status="success" if status_code < 400 else "error",
        message=message,
        data=jsonable_encoder(data) if data is not None else {},
        error_code=error_code,
    )
    return JSONResponse(status_code=status_code, content=envelope.model_dump(mode="json"))
