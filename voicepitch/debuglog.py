"""Binary and text dump files for debugging an audio stream."""

from __future__ import annotations

import itertools
import logging
import threading
from typing import BinaryIO

from voicepitch.audio_format import get_system_ticks

__all__ = ["AudioLog", "FILE_PREFIX", "MODULE_NAME"]

FILE_PREFIX = "/sdcard/data/audio"
MODULE_NAME = "AUDIO-ECHO"

_log = logging.getLogger(MODULE_NAME)


class AudioLog:
    """Writes raw data or text to numbered files ``<prefix>[_<name>]_<n>``.

    The file is opened on creation and again after every :meth:`flush` if more
    is logged; each opening takes the next number from a counter shared by all
    logs.  A file that cannot be opened is reported and the data is dropped.
    """

    _file_index = itertools.count()

    def __init__(self, name: str | None = None, prefix: str = FILE_PREFIX) -> None:
        self.base_name = f"{prefix}_{name}" if name else prefix
        self.path: str | None = None
        self._fp: BinaryIO | None = None
        self._prev_tick = 0
        self._lock = threading.RLock()
        self._open_file()

    def __repr__(self) -> str:
        return f"AudioLog(base_name={self.base_name!r}, path={self.path!r})"

    def __enter__(self) -> AudioLog:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.flush()

    def _open_file(self) -> BinaryIO | None:
        with self._lock:
            if self._fp is not None:
                return self._fp
            path = f"{self.base_name}_{next(AudioLog._file_index)}"
            try:
                self._fp = open(path, "wb")
            except OSError:
                _log.error("====failed to open file %s", path)
                self._fp = None
            else:
                self.path = path
            return self._fp

    def log(self, data: bytes | str) -> None:
        """Append raw bytes, or text encoded as UTF-8; empty data is ignored."""
        with self._lock:
            if not data:
                return
            payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
            fp = self._open_file()
            if fp is not None:
                fp.write(payload)

    def log_time(self) -> None:
        """Log the current tick and the time since the previous call, in microseconds.

        The first call after creation or :meth:`flush` only starts the clock.
        """
        if self._prev_tick == 0:
            self._prev_tick = get_system_ticks()
            return
        cur = get_system_ticks()
        self.log(f"{cur}    {cur - self._prev_tick}\n")
        self._prev_tick = cur

    def flush(self) -> None:
        """Close the current file and restart the tick clock."""
        with self._lock:
            if self._fp is not None:
                self._fp.flush()
                self._fp.close()
                self._fp = None
            self._prev_tick = 0