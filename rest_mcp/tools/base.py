"""
Base tool descriptor for the REST tools.

A RestTool couples a name, a description, an HTTP method and a pydantic input
model with an async handler. The handler delegates the call to the shared
request executor and always answers with an MCP content envelope: a JSON
summary of the response on success, an "Error: ..." text with isError set
otherwise.
"""
import json
import logging
from typing import Any, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from rest_mcp.config import Settings
from rest_mcp.request import RequestOptions, RequestResult, make_request
from rest_mcp.tools.schemas import RequestInput

logger = logging.getLogger(__name__)


class TextContent(BaseModel):
    """Single text item of an MCP content envelope."""

    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Standard MCP envelope returned by every tool handler."""

    model_config = ConfigDict(populate_by_name=True)

    content: List[TextContent]
    is_error: Optional[bool] = Field(None, alias="isError")

    @property
    def text(self) -> str:
        """Text of the first content item."""
        return self.content[0].text if self.content else ""

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation; isError is omitted on success."""
        return self.model_dump(by_alias=True, exclude_none=True)


def error_message(error: BaseException) -> str:
    """Best-effort message for an exception, falling back to its class name."""
    message = getattr(error, "message", None)
    if not isinstance(message, str) or not message:
        message = str(error)
    return message or error.__class__.__name__


def format_result(result: RequestResult) -> ToolResponse:
    """Wrap a request result into the success envelope."""
    payload = {
        "response": result.data,
        "status": result.status,
        "statusText": result.status_text,
        "headers": result.headers,
    }
    return ToolResponse(
        content=[TextContent(text=json.dumps(payload, indent=2, ensure_ascii=False))]
    )


def format_error(error: BaseException) -> ToolResponse:
    """Wrap an execution error into the error envelope."""
    return ToolResponse(
        content=[TextContent(text=f"Error: {error_message(error)}")],
        is_error=True,
    )


class RestTool:
    """
    Descriptor for a single REST verb exposed as an MCP tool.

    Input validation is delegated to the pydantic input model; everything the
    executor raises is converted into an error envelope.
    """

    def __init__(
        self,
        name: str,
        description: str,
        method: str,
        input_model: Type[RequestInput],
    ):
        self._name = name
        self._description = description
        self._method = method.upper()
        self._input_model = input_model

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def method(self) -> str:
        return self._method

    @property
    def input_model(self) -> Type[RequestInput]:
        return self._input_model

    def get_input_schema(self) -> Dict[str, Any]:
        """JSON schema of the parameter object, using the wire (camelCase) names."""
        return self._input_model.model_json_schema(by_alias=True)

    def validate_input(self, params: Union[Dict[str, Any], RequestInput]) -> RequestInput:
        """
        Validate the parameter object.

        Raises:
            pydantic.ValidationError: If params do not match the input model
        """
        if isinstance(params, self._input_model):
            return params
        if isinstance(params, BaseModel):
            params = params.model_dump(by_alias=True, exclude_unset=True)
        return self._input_model.model_validate(params)

    def build_request(self, params: RequestInput) -> RequestOptions:
        """Build the request descriptor; fields the caller omitted stay unset."""
        fields = params.model_dump(by_alias=True, exclude_unset=True)
        return RequestOptions(method=self.method, **fields)

    async def handle(
        self,
        params: Union[Dict[str, Any], RequestInput],
        auth_token: Optional[str] = None,
        config: Optional[Settings] = None,
    ) -> ToolResponse:
        """
        Run the request and format the outcome.

        Args:
            params: Parameter object (dict with wire names, or input model)
            auth_token: Optional authorization token supplied by the runtime
            config: Settings forwarded to the request executor

        Returns:
            ToolResponse envelope; isError is set when the request failed
        """
        options = self.build_request(self.validate_input(params))

        try:
            result = await make_request(options, auth_token, config=config)
        except Exception as e:
            logger.error(f"[{self.method} Tool Error] {e!r}")
            return format_error(e)

        return format_result(result)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name='{self.name}', method='{self.method}')>"
