"""Validation and formatting of the sidecar's controller endpoint."""

from __future__ import annotations

import ipaddress
import re

_PORT = re.compile(r"[0-9]+", re.ASCII)


class InvalidEndpointError(ValueError):
    """Raised when an endpoint address or port is not valid."""


def _parse_ip(raw_ip: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
    if "%" not in raw_ip:
        try:
            return ipaddress.ip_address(raw_ip)
        except ValueError:
            pass
    raise InvalidEndpointError(
        f'invalid endpoint: invalid controller ip address "{raw_ip}"'
    )


def _parse_port(raw_port: str) -> int:
    if _PORT.fullmatch(raw_port):
        port = int(raw_port)
        if port <= 0xFFFF:
            return port
        reason = "value out of range"
    else:
        reason = "invalid syntax"
    raise InvalidEndpointError(
        f'invalid endpoint: invalid controller port "{raw_port}": {reason}'
    )


def validate_controller_endpoint(raw_ip: str, raw_port: str) -> str:
    """Return ``ip:port`` (IPv6 in brackets) after validating both parts."""
    ip = _parse_ip(raw_ip)
    port = _parse_port(raw_port)
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    if isinstance(ip, ipaddress.IPv4Address):
        return f"{ip}:{port}"
    return f"[{ip}]:{port}"


def build_endpoint_url(raw_ip: str, raw_port: str, pod: str, namespace: str) -> str:
    """Return the address under which the controller reaches this sidecar.

    With an IP address this is ``ip:port``; otherwise it is
    ``pod://<pod>[.<namespace>]:<port>``.
    """
    if raw_ip:
        return validate_controller_endpoint(raw_ip, raw_port)
    if not pod and not namespace:
        raise InvalidEndpointError(
            "invalid endpoint: missing IP-address or Pod and Namespace"
        )
    port = _parse_port(raw_port)
    endpoint = f"pod://{pod}"
    if namespace:
        endpoint += f".{namespace}"
    return f"{endpoint}:{port}"