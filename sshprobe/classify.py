"""Content sniffing: which files hold which kind of SSH key.

File names and extensions are never consulted; a file matches only if its
content parses as the requested (algorithm, public/private) combination.
Unreadable files never match and never raise.
"""
from __future__ import annotations

import dataclasses
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .formats.openssh import (
    ED25519_ALGORITHM,
    RSA_ALGORITHM,
    parse_private_key,
    parse_public_key,
)
from .records import PrivateKeyRecord, PublicKeyRecord

log = logging.getLogger(__name__)

Reader = Callable[[str], bytes]


def read_file(path: str) -> bytes:
    return Path(path).read_bytes()


def bounded_reader(max_bytes: int) -> Reader:
    """A reader that refuses files larger than ``max_bytes``."""

    def _read(path: str) -> bytes:
        size = os.stat(path).st_size
        if size > max_bytes:
            raise OSError(f"{path} is {size} bytes, limit is {max_bytes}")
        return read_file(path)

    return _read


def _content_of(path: str, reader: Reader) -> Optional[str]:
    try:
        data = reader(path)
    except OSError as e:
        log.debug("skipping unreadable file %s: %s", path, e)
        return None
    return data.decode("utf-8", "replace")


def is_rsa_public_key(text: str) -> bool:
    pub = parse_public_key(text)
    return pub is not None and pub.is_algorithm(RSA_ALGORITHM)


def is_ed25519_public_key(text: str) -> bool:
    pub = parse_public_key(text)
    return pub is not None and pub.is_algorithm(ED25519_ALGORITHM)


def is_rsa_private_key(text: str) -> bool:
    priv = parse_private_key(text)
    return priv is not None and priv.is_algorithm(RSA_ALGORITHM)


def is_ed25519_private_key(text: str) -> bool:
    priv = parse_private_key(text)
    return priv is not None and priv.is_algorithm(ED25519_ALGORITHM)


def public_key_record_for(path: str, algorithm: str, reader: Reader = read_file) -> Optional[PublicKeyRecord]:
    text = _content_of(path, reader)
    if text is None:
        return None
    pub = parse_public_key(text)
    if pub is None or not pub.is_algorithm(algorithm):
        return None
    return dataclasses.replace(pub, path=path)


def private_key_record_for(path: str, algorithm: str, reader: Reader = read_file) -> Optional[PrivateKeyRecord]:
    text = _content_of(path, reader)
    if text is None:
        return None
    priv = parse_private_key(text)
    if priv is None or not priv.is_algorithm(algorithm):
        return None
    return dataclasses.replace(priv, path=path)


def public_key_records_from(paths: Iterable[str], algorithm: str, reader: Reader = read_file) -> List[PublicKeyRecord]:
    found = [public_key_record_for(p, algorithm, reader) for p in paths]
    records = [r for r in found if r is not None]
    log.debug("%d %s public key file(s): %s", len(records), algorithm, [r.path for r in records])
    return records


def private_key_records_from(paths: Iterable[str], algorithm: str, reader: Reader = read_file) -> List[PrivateKeyRecord]:
    found = [private_key_record_for(p, algorithm, reader) for p in paths]
    records = [r for r in found if r is not None]
    log.debug("%d %s private key file(s): %s", len(records), algorithm, [r.path for r in records])
    return records


def files_containing_rsa_public_keys(paths: Iterable[str], reader: Reader = read_file) -> List[str]:
    return [r.path for r in public_key_records_from(paths, RSA_ALGORITHM, reader)]


def files_containing_ed25519_public_keys(paths: Iterable[str], reader: Reader = read_file) -> List[str]:
    return [r.path for r in public_key_records_from(paths, ED25519_ALGORITHM, reader)]


def files_containing_rsa_private_keys(paths: Iterable[str], reader: Reader = read_file) -> List[str]:
    return [r.path for r in private_key_records_from(paths, RSA_ALGORITHM, reader)]


def files_containing_ed25519_private_keys(paths: Iterable[str], reader: Reader = read_file) -> List[str]:
    return [r.path for r in private_key_records_from(paths, ED25519_ALGORITHM, reader)]
