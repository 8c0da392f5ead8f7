from dataclasses import dataclass
from dataclasses import field
from enum import Enum

WILDCARD = "*"
PARAM_PREFIX = ":"


class Verdict(Enum):
    NONE = "none"
    PARTIAL = "partial"
    FULL = "full"


@dataclass(frozen=True, slots=True)
class MatchResult:
    verdict: Verdict
    captured: tuple[str, ...] = ()
    consumed: tuple[str, ...] = ()
    params: dict[str, str] = field(default_factory=dict)

    @property
    def matched(self) -> bool:
        return self.verdict is not Verdict.NONE

    @property
    def remainder(self) -> str:
        return "/".join(self.captured)


NO_MATCH = MatchResult(Verdict.NONE)


def split_path(path: str) -> list[str]:
    stripped = path.strip("/")
    if not stripped:
        return []
    return stripped.split("/")


def join_paths(prefix: str, pattern: str) -> str:
    if not prefix:
        return pattern
    return "/" + "/".join(split_path(prefix) + split_path(pattern))


def mount_prefix(pattern: str) -> str:
    # "/api/*" mounts its children under "/api"
    segments = split_path(pattern)
    if segments and segments[-1] == WILDCARD:
        return "/" + "/".join(segments[:-1])
    return pattern


def match(pattern: str, path: str) -> MatchResult:
    """Compare a route pattern against a concrete request path.

    ``*`` as a segment matches exactly one segment, or, in last position,
    everything that is left (captured as the remainder). ``:name`` matches
    one segment and records it in ``params``. A pattern that runs out
    before the path does yields a PARTIAL match whose ``captured`` holds
    the unmatched tail; this is what mounted routers are dispatched on.
    """
    if pattern == WILDCARD:
        return MatchResult(Verdict.FULL, consumed=tuple(split_path(path)))

    expected = split_path(pattern)
    actual = split_path(path)
    params: dict[str, str] = {}
    last = len(expected) - 1

    for i, segment in enumerate(expected):
        if i >= len(actual):
            return NO_MATCH

        if segment == WILDCARD:
            if i == last:
                return MatchResult(
                    Verdict.FULL,
                    captured=tuple(actual[i:]),
                    consumed=tuple(actual),
                    params=params,
                )
            continue

        if segment.startswith(PARAM_PREFIX) and len(segment) > 1:
            params[segment[1:]] = actual[i]
            continue

        if segment != actual[i]:
            return NO_MATCH

    consumed = tuple(actual[:len(expected)])
    rest = tuple(actual[len(expected):])
    if rest:
        return MatchResult(Verdict.PARTIAL, captured=rest, consumed=consumed, params=params)
    return MatchResult(Verdict.FULL, consumed=consumed, params=params)
