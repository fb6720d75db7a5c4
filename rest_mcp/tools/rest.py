"""REST verb tools: GET, POST, PUT, PATCH and DELETE."""
from rest_mcp.tools.base import RestTool
from rest_mcp.tools.schemas import BodyRequestInput, RequestInput

get_tool = RestTool(
    name="rest_get",
    description="Make a GET request to an API endpoint",
    method="GET",
    input_model=RequestInput,
)

post_tool = RestTool(
    name="rest_post",
    description="Make a POST request to an API endpoint",
    method="POST",
    input_model=BodyRequestInput,
)

put_tool = RestTool(
    name="rest_put",
    description="Make a PUT request to an API endpoint",
    method="PUT",
    input_model=BodyRequestInput,
)

patch_tool = RestTool(
    name="rest_patch",
    description="Make a PATCH request to an API endpoint",
    method="PATCH",
    input_model=BodyRequestInput,
)

delete_tool = RestTool(
    name="rest_delete",
    description="Make a DELETE request to an API endpoint",
    method="DELETE",
    input_model=RequestInput,
)

ALL_TOOLS = [get_tool, post_tool, put_tool, patch_tool, delete_tool]
