"""Building JSON HTTP responses."""

from __future__ import annotations

from werkzeug.wrappers import Response

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


def write_response(data: bytes | str, status_code: int) -> Response:
    """Return a JSON response with the given body and status code."""
    body = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    response = Response(body, status=status_code)
    response.headers["Content-Type"] = JSON_CONTENT_TYPE
    response.headers["Connection"] = "keep-alive"
    return response