"""Helpers for a CSI-Addons sidecar: configuration, endpoints, gRPC errors, driver identity, node objects and a gRPC server."""

__version__ = "0.1.0"