from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Iterator, Optional

_BLOCK = re.compile(
    r"-----BEGIN (?P<label>[A-Z0-9 ]+)-----\r?\n"
    r"(?P<body>.*?)"
    r"-----END (?P=label)-----",
    re.DOTALL,
)
# RFC 1421 style headers, e.g. "Proc-Type: 4,ENCRYPTED"
_HEADER = re.compile(r"^[A-Za-z0-9-]+:")


@dataclass(frozen=True)
class PemBlock:
    label: str
    body: bytes


def _decode_body(body: str) -> Optional[bytes]:
    lines = [ln.strip() for ln in body.splitlines()]
    b64 = "".join(ln for ln in lines if ln and not _HEADER.match(ln))
    try:
        return base64.b64decode(b64, validate=True)
    except (binascii.Error, ValueError):
        return None


def iter_blocks(text: str) -> Iterator[PemBlock]:
    for m in _BLOCK.finditer(text):
        body = _decode_body(m.group("body"))
        if body is None:
            continue
        yield PemBlock(label=m.group("label"), body=body)


def decode_first(text: str) -> Optional[PemBlock]:
    """Return the first well-formed PEM block in ``text``, or None."""
    return next(iter_blocks(text), None)
