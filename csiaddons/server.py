"""The gRPC server on which the sidecar receives CSI-Addons requests."""

from __future__ import annotations

import logging
import threading
from concurrent import futures
from typing import Optional, Protocol

import grpc

log = logging.getLogger(__name__)


class SidecarService(Protocol):
    """A service that adds its handlers to a gRPC server."""

    def register_service(self, server: grpc.Server) -> None: ...


class SidecarServer:
    """gRPC server listening on a TCP endpoint for CSI-Addons requests.

    An empty IP address means all available addresses.
    """

    def __init__(self, ip: str, port: str, *, grace: Optional[float] = 30.0) -> None:
        self.endpoint = f"{ip or '[::]'}:{port}"
        self.grace = grace
        self.services: list[SidecarService] = []
        self.bound_port: Optional[int] = None
        self._server: Optional[grpc.Server] = None
        self._started = threading.Event()

    def register_service(self, service: SidecarService) -> None:
        """Add a service; it is registered on the server by :meth:`start`."""
        self.services.append(service)

    def wait_started(self, timeout: Optional[float] = None) -> bool:
        """Wait until the server is listening."""
        return self._started.wait(timeout)

    def start(self) -> None:
        """Create the server, register the services and serve until stopped."""
        server = grpc.server(futures.ThreadPoolExecutor())
        for service in self.services:
            service.register_service(server)

        try:
            port = server.add_insecure_port(self.endpoint)
        except RuntimeError as err:
            raise RuntimeError(f"failed to listen on {self.endpoint} (tcp): {err}") from err
        if not port:
            raise RuntimeError(f"failed to listen on {self.endpoint} (tcp)")

        self.bound_port = port
        self._server = server
        server.start()
        log.info("Listening for CSI-Addons requests on address: %s", self.endpoint)
        self._started.set()
        server.wait_for_termination()
        log.info("The CSI-Addons server at %r has been stopped", self.endpoint)

    def stop(self) -> None:
        """Stop the server, letting pending requests finish within the grace period."""
        if self._server is None:
            return
        self._server.stop(self.grace).wait()