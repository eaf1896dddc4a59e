"""Client for the Identity service of a CSI-Addons capable driver."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any, Optional, Protocol

import grpc

from .errors import StatusError

log = logging.getLogger(__name__)

# Name of the service type that marks a driver as offering the controller service.
CONTROLLER_SERVICE = "CONTROLLER_SERVICE"
DEFAULT_PROBE_INTERVAL = 1.0


class DriverError(RuntimeError):
    """Raised when the driver answers with something unusable."""


class ProbeError(DriverError):
    """Raised when probing the driver fails for a reason other than a timeout."""


class IdentityStub(Protocol):
    """The three Identity calls of a driver, each bounded by ``timeout`` seconds.

    ``probe`` returns the ready flag, or ``None`` when the driver left it out.
    ``get_identity`` returns the driver name. ``get_capabilities`` yields one
    entry per capability: the service type name for service capabilities,
    ``None`` for any other kind.
    """

    def probe(self, timeout: float) -> Optional[bool]: ...

    def get_identity(self, timeout: float) -> str: ...

    def get_capabilities(self, timeout: float) -> Iterable[Optional[str]]: ...


class DriverClient(ABC):
    """What the sidecar needs from its connection to the driver."""

    channel: Any = None

    @abstractmethod
    def probe(self) -> None:
        """Wait until the driver reports that it is ready."""

    @abstractmethod
    def get_driver_name(self) -> str:
        """Return the name of the driver."""

    @abstractmethod
    def has_controller_service(self) -> bool:
        """Tell whether the driver offers the controller service."""


class IdentityClient(DriverClient):
    """DriverClient that talks to the driver through an Identity stub."""

    def __init__(
        self,
        stub: IdentityStub,
        timeout: float,
        *,
        channel: Any = None,
        probe_interval: float = DEFAULT_PROBE_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.stub = stub
        self.timeout = timeout
        self.channel = channel
        self.probe_interval = probe_interval
        self._sleep = sleep

    def probe(self) -> None:
        """Probe the driver until it is ready; timeouts are retried."""
        while True:
            log.info("Probing CSI driver for readiness")
            try:
                ready = self.stub.probe(self.timeout)
            except grpc.RpcError as err:
                code = getattr(err, "code", None)
                if not callable(code) or code() != grpc.StatusCode.DEADLINE_EXCEEDED:
                    raise ProbeError(f"CSI driver probe failed: {err}") from err
                log.warning("CSI driver probe timed out")
            except Exception as err:
                raise ProbeError(f"CSI driver probe failed: {err}") from err
            else:
                # An absent ready flag means the driver is ready.
                if ready is None or ready:
                    return
                log.warning("CSI driver is not ready")
            self._sleep(self.probe_interval)

    def get_driver_name(self) -> str:
        """Return the driver name reported by the Identity service."""
        name = self.stub.get_identity(self.timeout)
        if not name:
            raise DriverError("driver name is empty")
        return name

    def has_controller_service(self) -> bool:
        """Tell whether any capability is the controller service."""
        capabilities = list(self.stub.get_capabilities(self.timeout))
        if not capabilities:
            raise DriverError("driver does not have any capabilities")
        return any(cap == CONTROLLER_SERVICE for cap in capabilities)


__all__ = [
    "CONTROLLER_SERVICE",
    "DriverClient",
    "DriverError",
    "IdentityClient",
    "IdentityStub",
    "ProbeError",
    "StatusError",
]