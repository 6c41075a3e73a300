from enum import Enum

from fastapi.responses import JSONResponse


class ResponseType(str, Enum):
    json = "json"
    graph = "graph"


def format_response(data: dict, response_type: ResponseType):
    """Wrap an already JSON-safe body in a response with the media type for response_type."""
    if response_type == ResponseType.graph:
        return JSONResponse(content=data, media_type="application/vnd.graph+json")

    return JSONResponse(content=data)
