"""
Shared HTTP request executor used by every REST tool.

Builds the outgoing request from a RequestOptions descriptor (headers,
content type, bearer authorization, query parameters, body), performs it with
httpx and normalizes the response into a RequestResult. Every HTTP status is
returned as a result; only transport failures raise.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field

from rest_mcp.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

# Methods that carry a request body and a Content-Type header
BODY_METHODS = ("POST", "PUT", "PATCH")


class RequestError(Exception):
    """Raised when a request cannot be completed (connection, timeout, bad URL)."""
    pass


class RequestOptions(BaseModel):
    """Descriptor of a single outgoing request."""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    method: str
    body: Any = None
    headers: Optional[Dict[str, str]] = None
    without_authorization: Optional[bool] = Field(None, alias="withoutAuthorization")
    content_type: Optional[str] = Field(None, alias="contentType")
    query_params: Optional[Dict[str, Any]] = Field(None, alias="queryParams")


class RequestResult(BaseModel):
    """Normalized response returned by make_request."""

    data: Any = None
    status: int
    status_text: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)


def ssl_verify(config: Settings) -> Union[str, bool]:
    """Certificate verification setting: a CA bundle path, or a flag."""
    if not config.SSL_VERIFY:
        return False
    return config.SSL_CA_BUNDLE or True


def create_http_client(config: Optional[Settings] = None, **kwargs) -> httpx.AsyncClient:
    """
    Create an httpx AsyncClient configured from settings.

    Usage:
        async with create_http_client(config) as client:
            response = await client.request("POST", url, content=payload)
    """
    config = config or default_settings
    return httpx.AsyncClient(
        verify=ssl_verify(config),
        timeout=httpx.Timeout(config.REQUEST_TIMEOUT),
        **kwargs
    )


def build_authorization(auth_token: str) -> str:
    """Return the Authorization header value, adding the Bearer scheme if missing."""
    if auth_token.lower().startswith("bearer "):
        return auth_token
    return f"Bearer {auth_token}"


def _encode_param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def encode_query_params(query_params: Optional[Dict[str, Any]]) -> Optional[List[Tuple[str, str]]]:
    """
    Flatten query parameters into (key, value) pairs for httpx.

    None values are dropped, lists are sent as bracketed repeated keys
    (ids[]=1&ids[]=2) and nested mappings are sent as JSON.
    """
    if not query_params:
        return None

    pairs: List[Tuple[str, str]] = []
    for key, value in query_params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            for item in value:
                if item is not None:
                    pairs.append((f"{key}[]", _encode_param_value(item)))
        else:
            pairs.append((key, _encode_param_value(value)))
    return pairs


def encode_body(body: Any) -> bytes:
    """Encode a request body: text and bytes as-is, everything else as JSON."""
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    return json.dumps(body, ensure_ascii=False).encode("utf-8")


def parse_response_data(response: httpx.Response) -> Any:
    """Return the decoded JSON body, falling back to text."""
    if not response.content:
        return ""
    try:
        return response.json()
    except ValueError:
        return response.text


def build_request_headers(
    options: RequestOptions,
    auth_token: Optional[str] = None,
    config: Optional[Settings] = None,
) -> httpx.Headers:
    """
    Assemble the outgoing headers for a request descriptor.

    Header names are case-insensitive: Content-Type and Authorization replace
    any caller-supplied header of the same name.
    """
    config = config or default_settings
    method = options.method.upper()
    headers = httpx.Headers(options.headers or {})

    if method in BODY_METHODS:
        headers["Content-Type"] = options.content_type or config.DEFAULT_CONTENT_TYPE

    if auth_token and not options.without_authorization:
        headers["Authorization"] = build_authorization(auth_token)

    return headers


async def make_request(
    options: RequestOptions,
    auth_token: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
    config: Optional[Settings] = None,
) -> RequestResult:
    """
    Perform an HTTP request described by options.

    Args:
        options: Request descriptor
        auth_token: Optional token for the Authorization header
        client: Optional client to reuse; a short-lived one is created otherwise
        config: Settings for content type, timeout and TLS (default: global settings)

    Returns:
        RequestResult with data, status, status text and response headers

    Raises:
        RequestError: If the request could not be completed
    """
    config = config or default_settings
    method = options.method.upper()
    logger.info(f"[Request] {method} {options.url}")

    headers = build_request_headers(options, auth_token, config)
    params = encode_query_params(options.query_params)
    content = None
    if method in BODY_METHODS and options.body is not None:
        content = encode_body(options.body)

    try:
        if client is None:
            async with create_http_client(config) as owned_client:
                response = await owned_client.request(
                    method, options.url, headers=headers, params=params, content=content
                )
        else:
            response = await client.request(
                method, options.url, headers=headers, params=params, content=content
            )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        reason = str(e) or e.__class__.__name__
        logger.error(f"[Network Error] {reason}")
        raise RequestError(f"Request failed: {reason}") from e

    logger.info(f"[Response] Status: {response.status_code} {response.reason_phrase}")

    return RequestResult(
        data=parse_response_data(response),
        status=response.status_code,
        status_text=response.reason_phrase,
        headers={key: value for key, value in response.headers.items()},
    )
