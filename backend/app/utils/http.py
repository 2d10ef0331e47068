"""Request helpers shared by the routers."""
from typing import Any

from fastapi import Request

from ..errors import BadRequest


async def json_body(request: Request) -> Any:
    """Parse the body as JSON.

    Used as a dependency so authentication, declared on the route, runs before
    the body is looked at.
    """
    try:
        return await request.json()
    except ValueError as e:
        raise BadRequest("Request body must be valid JSON") from e
