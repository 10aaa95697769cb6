"""Serial port byte source.

Instruments and USB CDC bridges often stream CSV or line-oriented records
over a serial port. SerialSource exposes such a port as a blocking
io.RawIOBase stream so it can feed a BytesReplacingReader or a
LineNumReportingCsvReader directly.

pyserial reads return empty on timeout, which is not end of stream. This
module hides the timeouts: readinto() keeps polling until data arrives
or the port stays silent for idle_timeout seconds. Reading after close()
raises ValueError, as for any closed io object.
"""
from __future__ import annotations

import io
import logging
import time
from typing import Optional

import serial
from serial.tools import list_ports

from ..errors import PortNotFoundError, MultiplePortsError

logger = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 115200
READ_TIMEOUT = 0.1  # seconds
READ_CHUNK_SIZE = 4096  # bytes


def _detect_port(vid: Optional[int], pid: Optional[int], product: Optional[str]) -> str:
    """Return the device name of the one port matching vid, pid and product.

    A criterion left as None matches anything. Product matching is a
    case-insensitive substring test.

    Raises:
        PortNotFoundError: No port matches
        MultiplePortsError: More than one port matches
    """
    devices = []
    for p in list_ports.comports():
        if vid is not None and p.vid != vid:
            continue
        if pid is not None and p.pid != pid:
            continue
        if product is not None and product.lower() not in (p.product or "").lower():
            continue
        devices.append(p.device)

    if not devices:
        raise PortNotFoundError(f"no serial port matches vid={vid} pid={pid} product={product!r}")
    if len(devices) > 1:
        raise MultiplePortsError(f"{len(devices)} serial ports match, pass port explicitly", ports=devices)
    return devices[0]


class SerialSource(io.RawIOBase):
    """Blocking byte stream over a serial port.

    Example:
        >>> with SerialSource("/dev/ttyACM0", idle_timeout=5.0) as src:
        ...     for record in LineNumReportingCsvReader(src):
        ...         print(record)
    """

    def __init__(self,
                 port: Optional[str] = None,
                 baudrate: int = DEFAULT_BAUDRATE,
                 timeout: float = READ_TIMEOUT,
                 idle_timeout: Optional[float] = None,
                 chunk_size: int = READ_CHUNK_SIZE,
                 expected_vid: Optional[int] = None,
                 expected_pid: Optional[int] = None,
                 product_substring: Optional[str] = None):
        """Initialize serial source. The port is not opened yet.

        Args:
            port: Serial port path, or None to auto-detect with the
                expected_vid / expected_pid / product_substring criteria
            baudrate: Serial baud rate
            timeout: pyserial read timeout in seconds (polling granularity)
            idle_timeout: Seconds without data after which the stream ends,
                or None to wait indefinitely
            chunk_size: Maximum bytes requested per pyserial read
        """
        super().__init__()
        self._port = port
        self._baudrate = baudrate
        self._timeout = timeout
        self._idle_timeout = idle_timeout
        self._chunk_size = chunk_size
        self._expected_vid = expected_vid
        self._expected_pid = expected_pid
        self._product_substring = product_substring
        self._serial: Optional[serial.Serial] = None

    @property
    def port(self) -> Optional[str]:
        """Port name, filled in by auto-detection on open()."""
        return self._port

    @property
    def is_open(self) -> bool:
        return self._serial is not None

    def open(self) -> SerialSource:
        """Open the serial port. Does nothing if already open.

        Raises:
            PortNotFoundError: Auto-detection found no matching port
            MultiplePortsError: Auto-detection found several matching ports
            serial.SerialException: The port could not be opened
        """
        if self.closed:
            raise ValueError("cannot reopen a closed serial source")
        if self._serial is not None:
            return self

        if self._port is None:
            try:
                self._port = _detect_port(self._expected_vid, self._expected_pid, self._product_substring)
            except (PortNotFoundError, MultiplePortsError) as e:
                logger.error(f"Serial port auto-detection failed: {e}")
                raise
            logger.info(f"Auto-detected serial port {self._port}")

        try:
            self._serial = serial.Serial(
                port=self._port,
                baudrate=self._baudrate,
                timeout=self._timeout,
            )
        except serial.SerialException as e:
            logger.error(f"Failed to open {self._port}: {e}")
            raise

        # Drop bytes queued before we started listening.
        self._serial.reset_input_buffer()
        logger.info(f"Opened {self._port} @ {self._baudrate} baud")
        return self

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        """Block until at least one byte is available and copy it into b.

        Opens the port on first use.

        Returns:
            Number of bytes read, 0 once the port has been idle for
            idle_timeout seconds

        Raises:
            serial.SerialException: Read failure (e.g. device unplugged)
        """
        if self.closed:
            raise ValueError("I/O operation on closed serial source")
        if self._serial is None:
            self.open()

        size = min(len(b), self._chunk_size)
        if size == 0:
            return 0

        last_data = time.monotonic()
        while True:
            chunk = self._serial.read(size)
            if chunk:
                n = len(chunk)
                b[:n] = chunk
                return n

            if self._idle_timeout is not None and time.monotonic() - last_data >= self._idle_timeout:
                logger.info(f"No data from {self._port} for {self._idle_timeout}s, ending stream")
                return 0

    def close(self) -> None:
        """Close the port. Safe to call multiple times."""
        if self._serial is not None:
            try:
                self._serial.close()
            except serial.SerialException as e:
                logger.error(f"Error closing serial port: {e}")
            finally:
                self._serial = None
            logger.info(f"Closed {self._port}")
        super().close()

    def __enter__(self) -> SerialSource:
        return self.open()
