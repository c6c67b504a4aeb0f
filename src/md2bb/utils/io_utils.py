#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2bb/utils/io_utils.py
"""Input and output helpers for Markdown sources and BBCode destinations."""

from __future__ import annotations

import builtins
from io import BufferedIOBase, RawIOBase, TextIOBase
from pathlib import Path
from typing import IO, Union

from md2bb.exceptions import FileAccessError, FileNotFoundError

TextSource = Union[str, Path, IO[bytes], IO[str]]
TextDestination = Union[str, Path, IO[bytes], IO[str]]


def _decode(data: bytes, file_path: str) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FileAccessError(file_path, f"Input is not valid UTF-8: {file_path}", original_error=e) from e


def read_text_file(path: Union[str, Path]) -> str:
    """Read a UTF-8 text file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    FileAccessError
        If the file cannot be read or is not valid UTF-8

    """
    file_path = str(path)
    try:
        data = Path(path).read_bytes()
    except builtins.FileNotFoundError as e:
        raise FileNotFoundError(file_path, original_error=e) from e
    except OSError as e:
        raise FileAccessError(file_path, f"Cannot read file {file_path}: {e}", original_error=e) from e
    return _decode(data, file_path)


def read_text_input(source: TextSource) -> str:
    """Load Markdown text from a string, path or stream.

    A ``str`` is treated as Markdown content; pass a ``Path`` to read a file.
    Binary streams are decoded as UTF-8.

    """
    if isinstance(source, str):
        return source
    if isinstance(source, Path):
        return read_text_file(source)

    data = source.read()
    if isinstance(data, bytes):
        return _decode(data, getattr(source, "name", "<stream>"))
    return data


def write_text_output(text: str, output: TextDestination) -> None:
    """Write text to a file path or stream.

    Paths are written as UTF-8. Binary streams receive UTF-8 bytes.

    Raises
    ------
    FileAccessError
        If a file path cannot be written

    """
    if isinstance(output, (str, Path)):
        try:
            Path(output).write_text(text, encoding="utf-8")
        except OSError as e:
            raise FileAccessError(str(output), f"Cannot write file {output}: {e}", original_error=e) from e
        return

    if isinstance(output, TextIOBase):
        output.write(text)
    elif isinstance(output, (RawIOBase, BufferedIOBase)) or "b" in getattr(output, "mode", ""):
        output.write(text.encode("utf-8"))  # type: ignore[arg-type]
    else:
        output.write(text)  # type: ignore[arg-type]
