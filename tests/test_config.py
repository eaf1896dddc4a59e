from datetime import timedelta

import pytest

from csiaddons.config import (
    CONFIG_MAP_NAME,
    DEFAULT_MAX_CONCURRENT_RECONCILES,
    DEFAULT_NAMESPACE,
    DEFAULT_RECLAIM_SPACE_TIMEOUT,
    Config,
    ConfigError,
    parse_duration,
)


def _defaults(**changes):
    values = {
        "namespace": DEFAULT_NAMESPACE,
        "reclaim_space_timeout": DEFAULT_RECLAIM_SPACE_TIMEOUT,
        "max_concurrent_reconciles": DEFAULT_MAX_CONCURRENT_RECONCILES,
    }
    values.update(changes)
    return Config(**values)


def test_defaults():
    cfg = Config()
    assert cfg.namespace == "csi-addons-system"
    assert cfg.reclaim_space_timeout == timedelta(minutes=3)
    assert cfg.max_concurrent_reconciles == 100


@pytest.mark.parametrize(
    "data_map, expected, want_err",
    [
        (None, _defaults(), False),
        ({}, _defaults(), False),
        (
            {"reclaim-space-timeout": "10m"},
            _defaults(reclaim_space_timeout=timedelta(minutes=10)),
            False,
        ),
        ({"reclaim-space-timeout": "hours"}, _defaults(), True),
        (
            {"max-concurrent-reconciles": "1"},
            _defaults(max_concurrent_reconciles=1),
            False,
        ),
        ({"max-concurrent-reconciles": "invalid"}, _defaults(), True),
        (
            {"reclaim-space-timeout": "10m", "max-concurrent-reconciles": "5"},
            _defaults(
                reclaim_space_timeout=timedelta(minutes=10),
                max_concurrent_reconciles=5,
            ),
            False,
        ),
        ({"network-fence-duration": "3m"}, _defaults(), True),
    ],
)
def test_read_config(data_map, expected, want_err):
    cfg = Config()
    if want_err:
        with pytest.raises(ConfigError):
            cfg.read_config(data_map)
    else:
        cfg.read_config(data_map)
    assert cfg == expected


def test_read_config_map_missing_keeps_defaults():
    calls = []

    def fetch(namespace, name):
        calls.append((namespace, name))
        return None

    cfg = Config()
    cfg.read_config_map(fetch)
    assert cfg == _defaults()
    assert calls == [(DEFAULT_NAMESPACE, CONFIG_MAP_NAME)]


def test_read_config_map_applies_data():
    cfg = Config()
    cfg.read_config_map(lambda ns, name: {"max-concurrent-reconciles": "5"})
    assert cfg.max_concurrent_reconciles == 5


def test_read_config_map_fetch_failure():
    def fetch(namespace, name):
        raise RuntimeError("forbidden")

    cfg = Config()
    with pytest.raises(ConfigError) as info:
        cfg.read_config_map(fetch)
    assert isinstance(info.value.__cause__, RuntimeError)
    assert cfg == _defaults()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("10m", timedelta(minutes=10)),
        ("0", timedelta(0)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("1.5h", timedelta(minutes=90)),
        ("-1s", timedelta(seconds=-1)),
        ("+2s", timedelta(seconds=2)),
        ("300ms", timedelta(milliseconds=300)),
        ("1500us", timedelta(microseconds=1500)),
        (".5s", timedelta(milliseconds=500)),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "hours", "10", "-", ".s", "5d", "1h x"])
def test_parse_duration_invalid(text):
    with pytest.raises(ConfigError):
        parse_duration(text)


def test_max_concurrent_reconciles_accepts_sign():
    cfg = Config()
    cfg.read_config({"max-concurrent-reconciles": "+7"})
    assert cfg.max_concurrent_reconciles == 7