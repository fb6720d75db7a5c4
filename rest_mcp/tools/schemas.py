"""
Pydantic input schemas for the REST tools.

Field names follow Python conventions; the camelCase aliases are the names
agents send over MCP. Unknown keys are ignored.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestInput(BaseModel):
    """Parameters shared by every REST tool."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    url: str = Field(..., description="The URL to send the request to")
    headers: Optional[Dict[str, str]] = Field(
        None, description="Additional headers to include"
    )
    without_authorization: Optional[bool] = Field(
        None, alias="withoutAuthorization", description="Skip authorization header"
    )
    query_params: Optional[Dict[str, Any]] = Field(
        None, alias="queryParams", description="Query parameters to append to URL"
    )


class BodyRequestInput(RequestInput):
    """Parameters for methods that send a body (POST, PUT, PATCH)."""

    body: Any = Field(None, description="The request body (will be JSON stringified)")
    content_type: Optional[str] = Field(
        None, alias="contentType", description="Content-Type header (default: application/json)"
    )
