"""Operator configuration that can be overridden through a ConfigMap."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from fractions import Fraction

CONFIG_MAP_NAME = "csi-addons-config"
RECLAIM_SPACE_TIMEOUT_KEY = "reclaim-space-timeout"
MAX_CONCURRENT_RECONCILES_KEY = "max-concurrent-reconciles"
DEFAULT_NAMESPACE = "csi-addons-system"
DEFAULT_MAX_CONCURRENT_RECONCILES = 100
DEFAULT_RECLAIM_SPACE_TIMEOUT = timedelta(minutes=3)

_NANOSECONDS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC Greek small letter mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_MAX_NANOSECONDS = 2**63 - 1
_DURATION_PART = re.compile(r"([0-9]*(?:\.[0-9]*)?)([^0-9.]*)")
_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)


class ConfigError(ValueError):
    """Raised when configuration data cannot be read or understood."""


def parse_duration(value: str) -> timedelta:
    """Parse a duration such as ``"10m"``, ``"1h30m"`` or ``"-1.5s"``."""
    text = value
    negative = False
    if text and text[0] in "+-":
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ConfigError(f'invalid duration "{value}"')

    total = Fraction(0)
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        number, unit = match.groups()
        if number in ("", "."):
            raise ConfigError(f'invalid duration "{value}"')
        if not unit:
            raise ConfigError(f'missing unit in duration "{value}"')
        if unit not in _NANOSECONDS:
            raise ConfigError(f'unknown unit "{unit}" in duration "{value}"')
        whole, _, frac = number.partition(".")
        amount = Fraction(int(whole or "0"))
        if frac:
            amount += Fraction(int(frac), 10 ** len(frac))
        total += amount * _NANOSECONDS[unit]
        pos = match.end()

    limit = _MAX_NANOSECONDS + 1 if negative else _MAX_NANOSECONDS
    if total > limit:
        raise ConfigError(f'invalid duration "{value}"')
    microseconds = round(total / 1000)
    return timedelta(microseconds=-microseconds if negative else microseconds)


def _parse_int(value: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise ValueError(f'invalid syntax "{value}"')
    number = int(value)
    if not -(2**63) <= number < 2**63:
        raise ValueError(f'value out of range "{value}"')
    return number


@dataclass
class Config:
    """Options of the controller that a ConfigMap may override."""

    namespace: str = DEFAULT_NAMESPACE
    reclaim_space_timeout: timedelta = field(
        default_factory=lambda: DEFAULT_RECLAIM_SPACE_TIMEOUT
    )
    max_concurrent_reconciles: int = DEFAULT_MAX_CONCURRENT_RECONCILES

    def read_config_map(
        self, fetch: Callable[[str, str], Mapping[str, str] | None]
    ) -> None:
        """Fetch the ConfigMap data and apply it.

        ``fetch(namespace, name)`` returns the ConfigMap's data, or ``None``
        when the ConfigMap does not exist; in that case nothing changes.
        """
        try:
            data = fetch(self.namespace, CONFIG_MAP_NAME)
        except Exception as err:
            raise ConfigError(
                f'failed to get configmap "{CONFIG_MAP_NAME}": {err}'
            ) from err
        if data is None:
            return
        self.read_config(data)

    def read_config(self, data_map: Mapping[str, str] | None) -> None:
        """Update the options from a mapping of ConfigMap keys to values."""
        for key, val in (data_map or {}).items():
            if key == RECLAIM_SPACE_TIMEOUT_KEY:
                try:
                    self.reclaim_space_timeout = parse_duration(val)
                except ConfigError as err:
                    raise ConfigError(
                        f'failed to parse key "{key}" value "{val}" as duration: {err}'
                    ) from err
            elif key == MAX_CONCURRENT_RECONCILES_KEY:
                try:
                    self.max_concurrent_reconciles = _parse_int(val)
                except ValueError as err:
                    raise ConfigError(
                        f'failed to parse key "{key}" value "{val}" as int: {err}'
                    ) from err
            else:
                raise ConfigError(f'unknown config key "{key}"')