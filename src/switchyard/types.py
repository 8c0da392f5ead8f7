import json

from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Callable
from urllib.parse import parse_qs

from pydantic import BaseModel


class SwitchyardError(Exception):
    pass


class RegistrationError(SwitchyardError, ValueError):
    pass


class HTTPException(SwitchyardError):
    def __init__(self, status_code: int, detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        super().__init__(detail)


class RouteNotFound(HTTPException):
    def __init__(self, method: str, path: str):
        self.method = method
        self.path = path
        super().__init__(404, f"Route not found for <{path}> | {method}")


class ErrorCallbackContractViolation(SwitchyardError):
    pass


class ChainExhausted(SwitchyardError):
    pass


@dataclass(slots=True)
class Request:
    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    path_params: dict[str, str] = field(default_factory=dict)
    query_string: str = ""
    body: bytes = b""
    state: dict[str, Any] = field(default_factory=dict)
    _query: dict[str, list[str]] | None = field(default=None, repr=False)
    _json: Any = field(default=None, repr=False)

    @classmethod
    def from_environ(cls, environ: dict[str, Any]) -> "Request":
        headers: dict[str, str] = {}
        for key, value in environ.items():
            if key.startswith("HTTP_"):
                headers[key[5:].replace("_", "-").lower()] = value
            elif key in ("CONTENT_TYPE", "CONTENT_LENGTH") and value:
                headers[key.replace("_", "-").lower()] = value

        body = b""
        stream = environ.get("wsgi.input")
        try:
            length = int(headers.get("content-length") or 0)
        except ValueError:
            length = 0
        if length > 0 and stream is not None:
            body = stream.read(length)

        return cls(
            method=environ.get("REQUEST_METHOD", "GET").upper(),
            path=environ.get("PATH_INFO") or "/",
            headers=headers,
            query_string=environ.get("QUERY_STRING", ""),
            body=body,
        )

    @property
    def query_params(self) -> dict[str, list[str]]:
        if self._query is None:
            self._query = parse_qs(self.query_string)
        return self._query

    def query(self, name: str, default: str | None = None) -> str | None:
        values = self.query_params.get(name)
        return values[0] if values else default

    def header(self, name: str, default: str | None = None) -> str | None:
        return self.headers.get(name.lower(), default)

    def json(self) -> Any:
        if self._json is None and self.body:
            self._json = json.loads(self.body)
        return self._json


@dataclass(slots=True)
class Response:
    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def set_header(self, name: str, value: str) -> "Response":
        self.headers[name.lower()] = value
        return self

    def write(self, content: str | bytes) -> "Response":
        if isinstance(content, str):
            content = content.encode()
        self.body += content
        if "content-length" in self.headers:
            self.headers["content-length"] = str(len(self.body))
        return self

    @classmethod
    def json(cls, data: Any, status_code: int = 200) -> "Response":
        if isinstance(data, BaseModel):
            body = data.model_dump_json().encode()
        elif isinstance(data, list):
            items = [x.model_dump() if isinstance(x, BaseModel) else x for x in data]
            body = json.dumps(items).encode()
        else:
            body = json.dumps(data).encode()

        return cls(
            status_code=status_code,
            headers={"content-type": "application/json", "content-length": str(len(body))},
            body=body,
        )

    @classmethod
    def text(cls, content: str, status_code: int = 200) -> "Response":
        body = content.encode()
        return cls(
            status_code=status_code,
            headers={"content-type": "text/plain", "content-length": str(len(body))},
            body=body,
        )

    @classmethod
    def empty(cls, status_code: int = 204) -> "Response":
        return cls(status_code=status_code, headers={"content-length": "0"})

    @classmethod
    def html(cls, content: str, status_code: int = 200) -> "Response":
        body = content.encode()
        return cls(
            status_code=status_code,
            headers={"content-type": "text/html; charset=utf-8", "content-length": str(len(body))},
            body=body,
        )


Next = Callable[[Request, Response], Response]
Handler = Callable[[Request, Response, Next], Any]
ErrorCallback = Callable[[Exception, Request, Response], "Response | None"]
