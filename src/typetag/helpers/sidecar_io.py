from __future__ import annotations
from contextlib import contextmanager
from pathlib import Path
from typing import Optional
import codecs
import logging
import os
import tempfile

import chardet

logger = logging.getLogger(__name__)

"""
Sidecar I/O Helpers
===================

Scoped read/write of sidecar store files.

New sidecars are written as UTF-8. Reading falls back to encoding detection
for files that were re-saved by an editor in a legacy encoding, and a
rewrite keeps the encoding and byte order mark the file was read with.
There is no retry policy: failures are logged and re-raised.
"""


def infer_encoding(data: bytes) -> Optional[str]:
    encoding = chardet.detect(data[:10000])["encoding"]
    if encoding == "ascii":
        encoding = "utf-8"
    return encoding


def decode_sidecar(data: bytes, *, source: str = "<bytes>") -> tuple[str, str, bool]:
    """Return the text, the encoding it was read with, and whether a UTF-8 BOM led it."""
    bom = data.startswith(codecs.BOM_UTF8)
    if bom:
        data = data[len(codecs.BOM_UTF8):]
    try:
        return data.decode("utf-8"), "utf-8", bom
    except UnicodeDecodeError:
        encoding = infer_encoding(data)
        if encoding is None:
            raise
    logger.warning(f"{source} is not valid UTF-8, decoding as {encoding}")
    return data.decode(encoding), encoding, bom


def encode_sidecar(text: str, *, encoding: str = "utf-8", bom: bool = False) -> bytes:
    data = text.encode(encoding)
    if bom:
        data = codecs.BOM_UTF8 + data
    return data


@contextmanager
def sidecar_scope(path: Path, action: str):
    try:
        yield
    except OSError as e:
        logger.error(f"Error during sidecar {action} of {path}: {e}")
        raise


def read_sidecar(path: Path, *, missing_ok: bool = False) -> Optional[bytes]:
    with sidecar_scope(path, "read"):
        try:
            with open(path, "rb") as f:
                return f.read()
        except FileNotFoundError:
            if missing_ok:
                logger.info(f"Sidecar {path} not found, starting from an empty registry")
                return None
            raise


def write_sidecar(path: Path, data: bytes) -> None:
    path = Path(path)
    with sidecar_scope(path, "write"):
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    logger.info(f"Wrote sidecar {path} ({len(data)} bytes)")
