"""Helpers for inspecting gRPC status errors."""

from __future__ import annotations

import grpc


class StatusError(grpc.RpcError):
    """A gRPC error carrying a status code and a message."""

    def __init__(self, code: grpc.StatusCode, details: str) -> None:
        super().__init__(details)
        self._code = code
        self._details = details

    def code(self) -> grpc.StatusCode:
        """Return the status code."""
        return self._code

    def details(self) -> str:
        """Return the status message."""
        return self._details

    def __str__(self) -> str:
        return f"rpc error: code = {self._code.name} desc = {self._details}"


def _is_status(err: BaseException) -> bool:
    return (
        isinstance(err, grpc.RpcError)
        and callable(getattr(err, "code", None))
        and callable(getattr(err, "details", None))
    )


def get_error_message(err: BaseException | None) -> str:
    """Return the status message of a gRPC error, else ``str(err)``."""
    if err is None:
        return ""
    if _is_status(err):
        return err.details() or ""
    return str(err)


def is_unimplemented_error(err: BaseException | None) -> bool:
    """Tell whether the error is a gRPC UNIMPLEMENTED status."""
    if err is None or not _is_status(err):
        return False
    return err.code() == grpc.StatusCode.UNIMPLEMENTED