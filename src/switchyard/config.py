"""Application configuration.

AppConfig is a frozen dataclass, immutable once the app is built::

    app = Switchyard(AppConfig(debug=True, mount_order=MountOrder.LEGACY))
"""

from dataclasses import dataclass

from .router import MountOrder


@dataclass(frozen=True, slots=True)
class AppConfig:
    # Development server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Dispatch
    mount_order: MountOrder = MountOrder.REGISTRATION

    # Seeded into every fresh Response before the chain runs
    default_headers: tuple[tuple[str, str], ...] = ()
