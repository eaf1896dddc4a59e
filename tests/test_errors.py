import grpc
import pytest

from csiaddons.errors import StatusError, get_error_message, is_unimplemented_error


@pytest.mark.parametrize(
    "err, want",
    [
        (None, ""),
        (StatusError(grpc.StatusCode.ABORTED, "aborted"), "aborted"),
        (ValueError("aborted"), "aborted"),
    ],
)
def test_get_error_message(err, want):
    assert get_error_message(err) == want


@pytest.mark.parametrize(
    "err, want",
    [
        (None, False),
        (StatusError(grpc.StatusCode.UNIMPLEMENTED, "unimplemented"), True),
        (StatusError(grpc.StatusCode.NOT_FOUND, "not found"), False),
        (ValueError("new error"), False),
    ],
)
def test_is_unimplemented_error(err, want):
    assert is_unimplemented_error(err) is want


def test_status_error_accessors():
    err = StatusError(grpc.StatusCode.ABORTED, "aborted")
    assert err.code() == grpc.StatusCode.ABORTED
    assert err.details() == "aborted"


def test_message_differs_from_string_form():
    err = StatusError(grpc.StatusCode.ABORTED, "aborted")
    assert str(err) != get_error_message(err)
    assert str(err).endswith("aborted")


def test_status_error_is_raisable_as_rpc_error():
    with pytest.raises(grpc.RpcError) as info:
        raise StatusError(grpc.StatusCode.NOT_FOUND, "not found")
    assert get_error_message(info.value) == "not found"