"""Base64 JSON encoding of session descriptions, and random dummy strings."""

from __future__ import annotations

import base64
import gzip
import json
import random
import string
from typing import Any

# Compressing the payload lets it pass terminal input limits.
_COMPRESS = False

_LETTERS = string.ascii_lowercase + string.ascii_uppercase
_ESCAPES = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026", "\u2028": "\\u2028", "\u2029": "\\u2029"}


def _to_json(obj: Any) -> bytes:
    text = json.dumps(obj, ensure_ascii=False, separators=(",", ":"))
    for char, escaped in _ESCAPES.items():
        text = text.replace(char, escaped)
    return text.encode("utf-8")


def _zip(data: bytes) -> bytes:
    return gzip.compress(data)


def _unzip(data: bytes) -> bytes:
    return gzip.decompress(data)


def encode(obj: Any) -> str:
    """Serialise ``obj`` as compact JSON and encode it in base64."""
    data = _to_json(obj)
    if _COMPRESS:
        data = _zip(data)
    return base64.b64encode(data).decode("ascii")


def decode(data: str) -> Any:
    """Reverse :func:`encode`; raises ``ValueError`` on malformed input."""
    raw = base64.b64decode(data, validate=True)
    if _COMPRESS:
        raw = _unzip(raw)
    return json.loads(raw)


def rand_seq(n: int) -> str:
    """Return ``n`` random ASCII letters."""
    if n < 0:
        raise ValueError("length must not be negative")
    return "".join(random.choices(_LETTERS, k=n))