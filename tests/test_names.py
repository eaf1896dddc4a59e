import pytest

from csiaddons.names import normalize_lease_name, remove_from_list


@pytest.mark.parametrize(
    "name, want",
    [
        ("some.csi.driver", "some-csi-driver"),
        ("some.csi/driver", "some-csi-driver"),
        ("some.csi.driver...", "some-csi-driver---X"),
        ("#some.csi.driver", "-some-csi-driver"),
    ],
)
def test_normalize_lease_name(name, want):
    assert normalize_lease_name(name) == want


def test_normalize_lease_name_empty():
    with pytest.raises(ValueError):
        normalize_lease_name("")


def test_normalize_keeps_valid_name():
    assert normalize_lease_name("driver-1") == "driver-1"


@pytest.mark.parametrize(
    "items, value, want",
    [
        (["hello", "hi", "hey"], "hello", ["hi", "hey"]),
        (["hello", "hi", "hey"], "bye", ["hello", "hi", "hey"]),
    ],
)
def test_remove_from_list(items, value, want):
    assert remove_from_list(items, value) == want


def test_remove_from_list_removes_every_occurrence():
    items = ["a", "b", "a", "c"]
    assert remove_from_list(items, "a") == ["b", "c"]
    assert items == ["a", "b", "a", "c"]