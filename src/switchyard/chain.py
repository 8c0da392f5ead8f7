from typing import Any
from typing import Sequence

from .router import Resolved
from .types import ChainExhausted
from .types import Request
from .types import Response


def to_response(result: Any, current: Response) -> Response:
    if isinstance(result, Response):
        return result
    if result is None:
        return current
    if isinstance(result, str):
        coerced = Response.text(result)
    else:
        coerced = Response.json(result)

    # plain values are written into the threaded response
    current.status_code = coerced.status_code
    current.headers.update(coerced.headers)
    current.body = coerced.body
    return current


class Chain:
    """Runs resolved handlers one at a time, each deciding whether to go on.

    A handler receives ``(request, response, next)``. Calling ``next``
    hands control to the following handler and returns the response it
    produced; returning without calling it ends the chain there. Errors
    are not caught. A chain runs once.
    """

    def __init__(self, handlers: Sequence[Resolved]):
        self._handlers = list(handlers)
        self._position = 0
        self._started = False

    def __len__(self) -> int:
        return len(self._handlers)

    @property
    def position(self) -> int:
        return self._position

    def run(self, request: Request, response: Response) -> Response:
        if self._started:
            raise ChainExhausted("Chain has already been run")
        self._started = True
        return self.proceed(request, response)

    def proceed(self, request: Request, response: Response) -> Response:
        if self._position >= len(self._handlers):
            return response

        current = self._handlers[self._position]
        self._position += 1
        previous = request.path_params
        request.path_params = dict(current.params)
        try:
            result = current.handler(request, response, self.proceed)
        finally:
            request.path_params = previous
        return to_response(result, response)
