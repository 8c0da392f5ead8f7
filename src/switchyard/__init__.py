from .app import default_error_handler
from .app import Switchyard
from .chain import Chain
from .config import AppConfig
from .matcher import match
from .matcher import MatchResult
from .matcher import Verdict
from .router import Method
from .router import MountOrder
from .router import Resolved
from .router import RouteEntry
from .router import Router
from .types import ChainExhausted
from .types import ErrorCallbackContractViolation
from .types import HTTPException
from .types import RegistrationError
from .types import Request
from .types import Response
from .types import RouteNotFound
from .types import SwitchyardError

__version__ = "0.1.0"
__all__ = [
    "AppConfig",
    "Chain",
    "ChainExhausted",
    "default_error_handler",
    "ErrorCallbackContractViolation",
    "HTTPException",
    "match",
    "MatchResult",
    "Method",
    "MountOrder",
    "RegistrationError",
    "Request",
    "Resolved",
    "Response",
    "RouteEntry",
    "RouteNotFound",
    "Router",
    "Switchyard",
    "SwitchyardError",
    "Verdict",
]
