"""Creation of the CSIAddonsNode object that announces this sidecar."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .client import DriverClient

log = logging.getLogger(__name__)

NODE_CREATION_RETRY = 5 * 60.0
NODE_CREATION_TIMEOUT = 3 * 60.0


class InvalidConfigError(ValueError):
    """Raised when information needed for the CSIAddonsNode is missing."""


class AlreadyExistsError(Exception):
    """Raised by a create function when the object exists already."""


@dataclass
class Manager:
    """Builds and creates the CSIAddonsNode for the running sidecar."""

    client: DriverClient
    node: str = ""
    endpoint: str = ""
    pod_name: str = ""
    pod_namespace: str = ""
    pod_uid: str = ""
    retry_interval: float = NODE_CREATION_RETRY
    timeout: float = NODE_CREATION_TIMEOUT
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def build_node(self) -> dict[str, Any]:
        """Return the CSIAddonsNode object for this sidecar."""
        required = [
            (self.pod_name, "missing Pod name"),
            (self.pod_namespace, "missing Pod namespace"),
            (self.pod_uid, "missing Pod UID"),
            (self.endpoint, "missing endpoint"),
            (self.node, "missing node"),
        ]
        for value, reason in required:
            if not value:
                raise InvalidConfigError(f"invalid configuration: {reason}")

        driver = self.client.get_driver_name()
        if not driver:
            raise InvalidConfigError(
                "invalid configuration: CSI-driver returned an empty driver name"
            )

        return {
            "metadata": {
                "name": self.pod_name,
                "namespace": self.pod_namespace,
                "ownerReferences": [
                    {
                        "apiVersion": "v1",
                        "kind": "Pod",
                        "name": self.pod_name,
                        "uid": self.pod_uid,
                    }
                ],
            },
            "spec": {
                "driver": {
                    "name": driver,
                    "endpoint": self.endpoint,
                    "nodeID": self.node,
                }
            },
        }

    def deploy(self, create: Callable[[dict[str, Any]], Any]) -> dict[str, Any]:
        """Create the CSIAddonsNode, retrying until the timeout runs out.

        ``create`` sends the object to the cluster; it raises
        :class:`AlreadyExistsError` when the object exists, which counts as
        success, and any other exception on failure.
        """
        obj = self.build_node()
        meta = obj["metadata"]
        deadline = self.clock() + self.timeout
        while True:
            try:
                create(obj)
                return obj
            except AlreadyExistsError:
                return obj
            except Exception as err:
                log.error(
                    "failed to create CSIAddonsNode %s/%s: %s",
                    meta["namespace"],
                    meta["name"],
                    err,
                )
                last_error = err

            remaining = deadline - self.clock()
            if self.retry_interval >= remaining:
                if remaining > 0:
                    self.sleep(remaining)
                raise TimeoutError(
                    f"timed out creating CSIAddonsNode "
                    f"{meta['namespace']}/{meta['name']}"
                ) from last_error
            self.sleep(self.retry_interval)