from typing import Any
from typing import Callable
from typing import Iterable

from .types import Response

STATUS_PHRASES = {
    200: "OK",
    201: "Created",
    204: "No Content",
    301: "Moved Permanently",
    302: "Found",
    304: "Not Modified",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
}

StartResponse = Callable[[str, list[tuple[str, str]]], Any]


def status_line(status: int) -> str:
    phrase = STATUS_PHRASES.get(status, "Unknown")
    return f"{status} {phrase}"


def write_response(start_response: StartResponse, response: Response) -> Iterable[bytes]:
    headers = dict(response.headers)
    if "content-length" not in {k.lower() for k in headers}:
        headers["content-length"] = str(len(response.body))

    start_response(status_line(response.status_code), [(k, v) for k, v in headers.items()])
    return [response.body]
