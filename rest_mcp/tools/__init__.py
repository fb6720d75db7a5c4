"""REST tool descriptors."""

from .base import RestTool, ToolResponse, TextContent, format_result, format_error
from .rest import get_tool, post_tool, put_tool, patch_tool, delete_tool, ALL_TOOLS

__all__ = [
    "RestTool",
    "ToolResponse",
    "TextContent",
    "format_result",
    "format_error",
    "get_tool",
    "post_tool",
    "put_tool",
    "patch_tool",
    "delete_tool",
    "ALL_TOOLS",
]
