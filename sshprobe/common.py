import base64
import hashlib
from dataclasses import dataclass
from typing import Literal


def sha1_digest(data: bytes) -> bytes:
    return hashlib.sha1(data).digest()


def sha256_digest(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def colon_hex(digest: bytes) -> str:
    """``b"\\x01\\xab"`` -> ``"01:AB"``"""
    return ":".join(f"{b:02X}" for b in digest)


def openssh_sha256(digest: bytes) -> str:
    # same shape as `ssh-keygen -l`
    return "SHA256:" + base64.b64encode(digest).decode("ascii").rstrip("=")


Severity = Literal["info", "warn", "error"]

@dataclass
class Warn:
    code: str
    message: str
    severity: Severity = "warn"

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "severity": self.severity}
