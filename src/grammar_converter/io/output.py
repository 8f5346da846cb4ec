"""
Source reading and output writing for the grammar converter.

Responsibilities
- Read grammar source text from a file or standard input.
- Write rendered text plus a trailing newline to a file or standard output.
- Use the atomic write path for files: tmp write → fsync → os.replace.

Notes
- ``None`` and ``"-"`` select the standard streams. They are read and written
  through their binary ``buffer`` with the configured encoding.
- Atomicity via os.replace holds only when tmp and destination share a filesystem;
  the tmp file is created next to the destination.
"""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from pathlib import Path

from .errors import IoWriteError

__all__ = [
    "is_stdio",
    "read_source",
    "write_output",
]

logger = logging.getLogger(__name__)


def is_stdio(path: str | os.PathLike[str] | None) -> bool:
    """True when ``path`` designates a standard stream (None or "-")."""
    return path is None or str(path) == "-"


def read_source(path: str | os.PathLike[str] | None, encoding: str = "utf-8") -> str:
    """
    Read grammar source text.

    Args:
        path: File path, or None / "-" for standard input.
        encoding: Text encoding of the file or of standard input. Text-only
            stdin replacements (no ``buffer``) are read as they are.

    Returns:
        str: Source text.

    Raises:
        OSError: The file cannot be read.
        UnicodeDecodeError: The bytes do not decode with ``encoding``.
        LookupError: ``encoding`` is unknown.
    """
    if is_stdio(path):
        buffer = getattr(sys.stdin, "buffer", None)
        if buffer is None:
            return sys.stdin.read()
        return buffer.read().decode(encoding)
    return Path(path).read_text(encoding=encoding)  # type: ignore[arg-type]


def _write_stdout(payload: str, encoding: str) -> None:
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        sys.stdout.write(payload)
        sys.stdout.flush()
        return
    try:
        data = payload.encode(encoding)
    except (LookupError, UnicodeEncodeError) as exc:
        raise IoWriteError(f"cannot encode output as {encoding}: {exc}") from exc
    sys.stdout.flush()
    buffer.write(data)
    buffer.flush()


def write_output(
    text: str, path: str | os.PathLike[str] | None = None, encoding: str = "utf-8"
) -> None:
    """
    Write rendered text followed by a newline.

    Args:
        text: Rendered document without trailing newline.
        path: Destination file, or None / "-" for standard output.
        encoding: Text encoding for the file or standard output.

    Raises:
        IoWriteError: The destination cannot be written.
    """
    payload = text + "\n"
    if is_stdio(path):
        _write_stdout(payload, encoding)
        return

    dst = Path(path)  # type: ignore[arg-type]
    tmp_name: str | None = None
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{dst.name}.", suffix=".tmp", dir=dst.parent)
        with os.fdopen(fd, "wb") as fh:
            fh.write(payload.encode(encoding))
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, dst)
    except (OSError, LookupError, UnicodeEncodeError) as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise IoWriteError(f"cannot write {dst}: {exc}") from exc
    logger.info("Wrote %s", dst)
