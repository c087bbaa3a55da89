"""Application error types."""


class MemeGeniusError(Exception):
    """Base class for recoverable editor errors."""


class InputError(MemeGeniusError):
    """Uploaded file or template could not be read/decoded."""


class GatewayError(MemeGeniusError):
    """AI gateway call failed or returned a malformed response."""


class ExportError(MemeGeniusError):
    """Working image could not be decoded or composited for export."""
