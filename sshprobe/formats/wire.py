"""Big-endian, length-prefixed reads over the OpenSSH wire encoding.

Every reader returns ``(value, rest, ok)``. On failure ``value`` is empty,
``rest`` is the untouched input and ``ok`` is False, so callers can chain
reads and bail out on the first ``not ok``.
"""
from typing import Tuple

UINT32_SIZE = 4


def read_fixed(buf: bytes, n: int) -> Tuple[bytes, bytes, bool]:
    if n < 0 or len(buf) < n:
        return b"", buf, False
    return buf[:n], buf[n:], True


def read_uint32(buf: bytes) -> Tuple[int, bytes, bool]:
    raw, rest, ok = read_fixed(buf, UINT32_SIZE)
    if not ok:
        return 0, buf, False
    return int.from_bytes(raw, "big"), rest, True


def read_length_prefixed(buf: bytes) -> Tuple[bytes, bytes, bool]:
    ln, rest, ok = read_uint32(buf)
    if not ok:
        return b"", buf, False
    value, rest, ok = read_fixed(rest, ln)
    if not ok:
        return b"", buf, False
    return value, rest, True


def read_string(buf: bytes) -> Tuple[str, bytes, bool]:
    value, rest, ok = read_length_prefixed(buf)
    if not ok:
        return "", buf, False
    return value.decode("utf-8", "replace"), rest, True
