import json
import logging

from typing import Any
from typing import Callable
from typing import Iterable

from pydantic import ValidationError

from .chain import Chain
from .config import AppConfig
from .http import StartResponse
from .http import write_response
from .router import Router
from .types import ErrorCallback
from .types import ErrorCallbackContractViolation
from .types import HTTPException
from .types import Request
from .types import Response
from .types import RouteNotFound

logger = logging.getLogger("switchyard.app")


def default_error_handler(debug: bool = False) -> ErrorCallback:
    def handle(error: Exception, request: Request, response: Response) -> Response:
        if isinstance(error, HTTPException):
            return Response.json({"detail": error.detail}, error.status_code)
        if isinstance(error, ValidationError):
            return Response.json({"detail": json.loads(error.json())}, 422)

        logger.error("Unhandled error for %s %s", request.method, request.path, exc_info=error)
        detail = str(error) if debug else "Internal Server Error"
        return Response.json({"detail": detail}, 500)
    return handle


class Switchyard(Router):
    """Root router and dispatch entry point.

    ``dispatch`` resolves a request, runs the chain and applies the error
    callback. ``start`` wraps it with the WSGI collaborators, so the app
    itself can be handed to any WSGI server.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        super().__init__()
        self.config = config or AppConfig()
        self._error_callback: ErrorCallback | None = None
        self._startup: list[Callable[[], None]] = []
        self._shutdown: list[Callable[[], None]] = []

    @property
    def error_callback(self) -> ErrorCallback | None:
        return self._error_callback

    def on_error(self, fn: ErrorCallback) -> ErrorCallback:
        if not callable(fn):
            raise TypeError(f"Error callback must be callable, got {fn!r}")
        self._error_callback = fn
        return fn

    def on_startup(self, fn: Callable[[], None]) -> Callable[[], None]:
        self._startup.append(fn)
        return fn

    def on_shutdown(self, fn: Callable[[], None]) -> Callable[[], None]:
        self._shutdown.append(fn)
        return fn

    def new_response(self) -> Response:
        return Response(headers={k.lower(): v for k, v in self.config.default_headers})

    def dispatch(self, request: Request, response: Response | None = None) -> Response:
        if response is None:
            response = self.new_response()

        try:
            resolved = self.resolve(request, order=self.config.mount_order)
            if not resolved:
                raise RouteNotFound(request.method, request.path)
            logger.debug("%s %s -> %d handlers", request.method, request.path, len(resolved))
            return Chain(resolved).run(request, response)
        except Exception as exc:
            if self._error_callback is None:
                raise

            logger.debug("%s %s failed with %r, invoking error callback", request.method, request.path, exc)
            recovered = self._error_callback(exc, request, response)
            if not isinstance(recovered, Response):
                raise ErrorCallbackContractViolation(
                    f"Cannot cast to Response class: error callback returned {type(recovered).__name__}"
                ) from exc
            return recovered

    def start(self, environ: dict[str, Any], start_response: StartResponse) -> Iterable[bytes]:
        request = Request.from_environ(environ)
        response = self.dispatch(request)
        return write_response(start_response, response)

    __call__ = start

    def run(self, host: str | None = None, port: int | None = None) -> None:
        from wsgiref.simple_server import make_server

        host = host or self.config.host
        port = port or self.config.port

        for fn in self._startup:
            fn()
        try:
            with make_server(host, port, self) as server:
                print(f"Switchyard running at http://{host}:{port}")
                server.serve_forever()
        except KeyboardInterrupt:
            print("\nShutting down...")
        finally:
            for fn in self._shutdown:
                fn()
