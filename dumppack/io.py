"""Read dump text from plain or zstd-compressed files."""

from __future__ import annotations

import io
from pathlib import Path

import zstandard as zstd

ZSTD_SUFFIX = ".zst"


class DumpReadError(Exception):
    """Dump file could not be decoded."""


def read_dump_text(path: str | Path) -> str:
    """Read a dump file as UTF-8 text, decompressing `.zst` files first."""
    target = Path(path)
    try:
        raw = target.read_bytes()
    except FileNotFoundError:
        raise
    except OSError as error:
        raise DumpReadError(f"Dump could not be read: {target} ({error.strerror})") from error

    if target.suffix == ZSTD_SUFFIX:
        raw = _decompress_zstd(raw, target)

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as error:
        raise DumpReadError(f"Dump is not valid UTF-8 text: {target}") from error


def _decompress_zstd(raw: bytes, target: Path) -> bytes:
    decompressor = zstd.ZstdDecompressor()
    try:
        with decompressor.stream_reader(io.BytesIO(raw)) as reader:
            return reader.read()
    except zstd.ZstdError as error:
        raise DumpReadError(f"Dump is not valid zstd data: {target} ({error})") from error
