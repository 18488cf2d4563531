"""Reading todo sources and writing rendered output.

Input is read whole before any output is written. Text is decoded as UTF-8
with ``surrogateescape`` so bytes that are not valid UTF-8 still round-trip
through passthrough lines unchanged.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from chop.errors import IOFailure

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
ERRORS = "surrogateescape"


def split_lines(text: str) -> Iterator[str]:
    """Split on ``\\n`` only, keeping terminators. A final partial line is kept."""
    start = 0
    while start < len(text):
        end = text.find("\n", start)
        if end == -1:
            yield text[start:]
            return
        yield text[start : end + 1]
        start = end + 1


def read_lines(path: Path | None, stdin: BinaryIO | None = None) -> list[str]:
    """Read every line from ``path``, or from ``stdin`` when no path is given."""
    try:
        if path is not None:
            data = Path(path).read_bytes()
        elif stdin is not None:
            data = stdin.read()
        else:
            raise IOFailure("no input source")
    except OSError as e:
        source = str(path) if path is not None else "<stdin>"
        raise IOFailure(f"cannot read {source}: {e.strerror or e}") from e

    lines = list(split_lines(data.decode(ENCODING, ERRORS)))
    logger.debug("input_read", extra={"bytes": len(data), "line_count": len(lines)})
    return lines


def write_stream(text: str, stdout: BinaryIO) -> None:
    try:
        stdout.write(text.encode(ENCODING, ERRORS))
        stdout.flush()
    except OSError as e:
        raise IOFailure(f"cannot write output: {e.strerror or e}") from e


def replace_file(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` without ever leaving it half written.

    The content goes to a temporary file in the directory of the real file,
    which then takes the original's permissions and is renamed over it. A
    symlinked ``path`` keeps pointing at the updated file.
    """
    target = Path(path).resolve()
    data = text.encode(ENCODING, ERRORS)
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
    except OSError as e:
        raise IOFailure(f"cannot write {path}: {e.strerror or e}") from e

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        if target.exists():
            shutil.copymode(target, tmp_path)
        os.replace(tmp_path, target)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise IOFailure(f"cannot write {path}: {e.strerror or e}") from e

    logger.debug("file_replaced", extra={"path": str(target), "bytes": len(data)})
