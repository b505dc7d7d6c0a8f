import base64
import binascii
import re
from typing import Optional

from . import pem
from .wire import read_fixed, read_length_prefixed, read_string, read_uint32
from ..records import PrivateKeyRecord, PublicKeyRecord

RSA_ALGORITHM = "ssh-rsa"
ED25519_ALGORITHM = "ssh-ed25519"

PRIVATE_KEY_LABEL = "OPENSSH PRIVATE KEY"
MAGIC = b"openssh-key-v1\x00"
UNENCRYPTED_CIPHER = "none"
CHECK_VALUES_SIZE = 8

_WHITESPACE = re.compile(r"\s+")

# Moduli are mpints: a leading zero byte keeps the sign bit clear, and a
# modulus with a few leading zero bits may come out one byte short.
_CANONICAL_MODULUS_BYTES = {
    127: 128, 128: 128, 129: 128,
    255: 256, 256: 256, 257: 256,
    383: 384, 384: 384, 385: 384,
    511: 512, 512: 512, 513: 512,
}


def canonical_modulus_length(n: int) -> int:
    return _CANONICAL_MODULUS_BYTES.get(n, n)


def rsa_key_size(blob: bytes) -> int:
    """Bit size of an ``ssh-rsa`` public key blob, or 0 if it can't be read."""
    _, rest, ok = read_length_prefixed(blob)  # algorithm
    if not ok:
        return 0
    _, rest, ok = read_length_prefixed(rest)  # e
    if not ok:
        return 0
    modulus, _, ok = read_length_prefixed(rest)  # n
    if not ok:
        return 0
    return canonical_modulus_length(len(modulus)) * 8


def parse_public_key(text: str) -> Optional[PublicKeyRecord]:
    """Parse ``<algorithm> <base64 blob> [comment]``.

    The comment is everything after the blob, so it may contain whitespace.
    """
    fields = _WHITESPACE.split(text.strip(), maxsplit=2)
    if len(fields) < 2:
        return None

    algorithm = fields[0]
    if not algorithm:
        return None
    try:
        key = base64.b64decode(fields[1], validate=True)
    except (binascii.Error, ValueError):
        return None

    comment = fields[2] if len(fields) == 3 else ""
    size = rsa_key_size(key) if algorithm == RSA_ALGORITHM else 0
    return PublicKeyRecord(algorithm=algorithm, key=key, comment=comment, size=size)


def _read_private_blob(text: str) -> Optional[bytes]:
    block = pem.decode_first(text)
    if block is None or block.label != PRIVATE_KEY_LABEL:
        return None
    if not block.body.startswith(MAGIC):
        return None
    return block.body[len(MAGIC):]


def _parse_private_blob(blob: bytes) -> Optional[PrivateKeyRecord]:
    cipher, rest, ok = read_string(blob)
    if not ok:
        return None
    _kdf, rest, ok = read_string(rest)
    if not ok:
        return None
    _kdf_opts, rest, ok = read_length_prefixed(rest)
    if not ok:
        return None
    nkeys, rest, ok = read_uint32(rest)
    if not ok or nkeys != 1:
        return None
    public_blob, rest, ok = read_length_prefixed(rest)
    if not ok:
        return None
    private_blob, _, ok = read_length_prefixed(rest)
    if not ok:
        return None

    public_algorithm, _, public_ok = read_string(public_blob)

    if cipher == UNENCRYPTED_CIPHER:
        # checkint1/checkint2 are only meaningful after decryption; not compared
        _, rest, ok = read_fixed(private_blob, CHECK_VALUES_SIZE)
        if not ok:
            return None
        algorithm, _, ok = read_string(rest)
        if not ok:
            return None
        protected = False
    else:
        if not public_ok:
            return None
        algorithm = public_algorithm
        protected = True

    if not algorithm:
        return None

    size = 0
    if public_ok and public_algorithm == RSA_ALGORITHM:
        size = rsa_key_size(public_blob)
    return PrivateKeyRecord(algorithm=algorithm, password_protected=protected, size=size)


def parse_private_key(text: str) -> Optional[PrivateKeyRecord]:
    """Parse a PEM-wrapped ``openssh-key-v1`` private key.

    Encrypted keys are not decrypted: their algorithm comes from the
    cleartext public section instead.
    """
    blob = _read_private_blob(text)
    if blob is None:
        return None
    return _parse_private_blob(blob)
