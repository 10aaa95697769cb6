"""Exception types raised by ingest_io.

Upstream read errors are never wrapped in these; they surface verbatim.
"""


class ConfigurationError(ValueError):
    """Raised when a reader is constructed or reset with invalid arguments.

    Signals a programming error, not a data error.
    """
    pass


class PortNotFoundError(RuntimeError):
    """Raised when no matching serial port could be found."""
    pass


class MultiplePortsError(RuntimeError):
    """Raised when more than one matching serial port is found."""
    def __init__(self, message, ports):
        super().__init__(message)
        self.ports = ports  # list[str] of device names


class CsvParseError(ValueError):
    """Raised when a delimited record cannot be parsed."""
    def __init__(self, message: str, line_num: int):
        super().__init__(f"line {line_num}: {message}")
        self.line_num = line_num
