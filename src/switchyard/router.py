import logging

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any
from typing import Callable
from typing import Union

from .matcher import Verdict
from .matcher import WILDCARD
from .matcher import join_paths
from .matcher import mount_prefix
from .matcher import match as match_path
from .types import Handler
from .types import RegistrationError
from .types import Request

logger = logging.getLogger("switchyard.router")

ANY = "*"


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    OPTIONS = "OPTIONS"
    DELETE = "DELETE"
    HEAD = "HEAD"
    UPDATE = "UPDATE"

    @classmethod
    def parse(cls, name: Any) -> "Method":
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise RegistrationError(f"HTTP method must be a string, got {type(name).__name__}")
        try:
            return cls(name.upper())
        except ValueError:
            raise RegistrationError(f"No such HTTP method <{name}>") from None


class MountOrder(Enum):
    # Nested results land where their mount entry was registered.
    REGISTRATION = "registration"
    # Nested results jump ahead of everything collected so far.
    LEGACY = "legacy"


@dataclass(frozen=True, slots=True)
class RouteEntry:
    method: str
    path: str
    target: Union[Handler, "Router"]

    @property
    def is_mount(self) -> bool:
        return isinstance(self.target, Router)

    def accepts(self, method: str) -> bool:
        return self.method == ANY or self.method == method.upper()


@dataclass(frozen=True, slots=True)
class Resolved:
    entry: RouteEntry
    params: dict[str, str] = field(default_factory=dict)

    @property
    def handler(self) -> Handler:
        return self.entry.target


class Router:
    def __init__(self) -> None:
        self._entries: list[RouteEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        mounts = sum(1 for entry in self._entries if entry.is_mount)
        return f"<{type(self).__name__} entries={len(self._entries)} mounts={mounts}>"

    @property
    def entries(self) -> tuple[RouteEntry, ...]:
        return tuple(self._entries)

    def path(self, method: str | Method, path: str, *handlers: Handler) -> "Router":
        verb = Method.parse(method)

        if not isinstance(path, str):
            raise RegistrationError("Path must be a string")
        if not handlers:
            raise RegistrationError(f"Handlers are missing for {verb.value} {path}")
        for handler in handlers:
            self._check_handler(handler)

        logger.debug("registering %s %s: %d handlers", verb.value, path, len(handlers))

        for handler in handlers:
            self._entries.append(RouteEntry(verb.value, path, handler))
        return self

    def get(self, path: str, *handlers: Handler) -> "Router":
        return self.path(Method.GET, path, *handlers)

    def post(self, path: str, *handlers: Handler) -> "Router":
        return self.path(Method.POST, path, *handlers)

    def options(self, path: str, *handlers: Handler) -> "Router":
        return self.path(Method.OPTIONS, path, *handlers)

    def delete(self, path: str, *handlers: Handler) -> "Router":
        return self.path(Method.DELETE, path, *handlers)

    def head(self, path: str, *handlers: Handler) -> "Router":
        return self.path(Method.HEAD, path, *handlers)

    def update(self, path: str, *handlers: Handler) -> "Router":
        return self.path(Method.UPDATE, path, *handlers)

    def route(self, method: str | Method, path: str) -> Callable[[Handler], Handler]:
        verb = Method.parse(method)

        def decorator(fn: Handler) -> Handler:
            self.path(verb, path, fn)
            return fn
        return decorator

    def middleware(self, fn: Handler) -> Handler:
        self._check_handler(fn)
        logger.debug("registering middleware %r", fn)
        self._entries.append(RouteEntry(ANY, WILDCARD, fn))
        return fn

    def mount(self, prefix: str, router: "Router") -> "Router":
        if not isinstance(prefix, str):
            raise RegistrationError("Path must be a string")
        if not isinstance(router, Router):
            raise RegistrationError(f"Cannot mount {type(router).__name__}, expected a Router")
        if router is self:
            raise RegistrationError("A router cannot be mounted into itself")

        logger.debug("mounting %r at %s", router, prefix)
        self._entries.append(RouteEntry(ANY, prefix, router))
        return self

    def resolve(
        self,
        request: Request,
        prefix: str = "",
        order: MountOrder = MountOrder.REGISTRATION,
    ) -> list[Resolved]:
        """Collect every handler that applies to ``request``, in chain order.

        All entries are evaluated; nothing short-circuits. Handlers need a
        FULL match, mounted routers only a PARTIAL one, after which the
        child resolves against the same request with the mount's pattern
        as its prefix. An empty list means no route was found.
        """
        logger.debug("resolving %s %s under prefix %r", request.method, request.path, prefix)
        resolved: list[Resolved] = []

        for entry in self._entries:
            if entry.path == WILDCARD:
                pattern = WILDCARD
            else:
                pattern = join_paths(prefix, entry.path)

            result = match_path(pattern, request.path)
            satisfies = result.matched and entry.accepts(request.method)

            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "comparing %s %s verdict=%s -> %s",
                    entry.method, pattern, result.verdict.value, satisfies,
                )

            if not satisfies:
                continue

            match entry.target:
                case Router() as child:
                    logger.debug("descending into %r, remainder %r", child, result.remainder)
                    nested = child.resolve(
                        request,
                        prefix if entry.path == WILDCARD else mount_prefix(pattern),
                        order,
                    )
                    if order is MountOrder.LEGACY:
                        resolved = nested + resolved
                    else:
                        resolved.extend(nested)
                case _ if result.verdict is Verdict.FULL:
                    resolved.append(Resolved(entry, result.params))

        return resolved

    def _check_handler(self, handler: Any) -> None:
        if isinstance(handler, Router) or not callable(handler):
            raise RegistrationError(f"Handler must be callable, got {handler!r}")
