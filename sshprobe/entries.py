"""Key entries handed to consumers: a public key, a private key, or a pair."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Union

from .formats.openssh import ED25519_ALGORITHM, RSA_ALGORITHM
from .records import PrivateKeyRecord, PublicKeyRecord


class Algorithm(Enum):
    RSA = "RSA"
    ED25519 = "Ed25519"
    # No classifier produces DSA keys.
    DSA = "DSA"

    @property
    def has_key_size(self) -> bool:
        return self is Algorithm.RSA


class KeyType(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    PAIR = "pair"


_ALGORITHMS = {
    RSA_ALGORITHM: Algorithm.RSA,
    ED25519_ALGORITHM: Algorithm.ED25519,
}


def algorithm_for(ssh_name: str) -> Optional[Algorithm]:
    return _ALGORITHMS.get(ssh_name)


class KeyPairContractError(RuntimeError):
    """A key pair was built without both of its halves."""


def _locations(path: str) -> List[str]:
    return [path] if path else []


@dataclass(frozen=True)
class PrivateKeyEntry:
    path: str
    algorithm: Optional[Algorithm]
    size: int = 0
    password_protected: bool = False

    @classmethod
    def from_record(cls, record: PrivateKeyRecord) -> "PrivateKeyEntry":
        return cls(
            path=record.path,
            algorithm=algorithm_for(record.algorithm),
            size=record.size,
            password_protected=record.password_protected,
        )

    @property
    def key_type(self) -> KeyType:
        return KeyType.PRIVATE

    @property
    def locations(self) -> List[str]:
        return _locations(self.path)

    @property
    def private_key_locations(self) -> List[str]:
        return self.locations

    @property
    def public_key_locations(self) -> List[str]:
        return []


@dataclass(frozen=True)
class PublicKeyEntry:
    path: str
    algorithm: Optional[Algorithm]
    key: bytes = field(repr=False)
    size: int = 0
    user_id: str = ""

    @classmethod
    def from_record(cls, record: PublicKeyRecord) -> "PublicKeyEntry":
        return cls(
            path=record.path,
            algorithm=algorithm_for(record.algorithm),
            key=record.key,
            size=record.size,
            user_id=record.comment,
        )

    @property
    def key_type(self) -> KeyType:
        return KeyType.PUBLIC

    @property
    def locations(self) -> List[str]:
        return _locations(self.path)

    @property
    def private_key_locations(self) -> List[str]:
        return []

    @property
    def public_key_locations(self) -> List[str]:
        return self.locations

    def with_digest_content(self, digest: Callable[[bytes], bytes]) -> bytes:
        """Apply ``digest`` (e.g. a hash) to the raw public key blob."""
        return digest(self.key)


@dataclass(frozen=True)
class KeyPairEntry:
    """A private key and the public key found next to it as ``<path>.pub``.

    Size, algorithm, user id and digests come from the public half; password
    protection comes from the private half.
    """

    private: PrivateKeyEntry
    public: PublicKeyEntry

    def __post_init__(self) -> None:
        if self.private is None:
            raise KeyPairContractError("key pair built without a private key; this is a programming error")
        if self.public is None:
            raise KeyPairContractError("key pair built without a public key; this is a programming error")

    @property
    def key_type(self) -> KeyType:
        return KeyType.PAIR

    @property
    def locations(self) -> List[str]:
        return self.private.locations + self.public.locations

    @property
    def private_key_locations(self) -> List[str]:
        return self.private.private_key_locations

    @property
    def public_key_locations(self) -> List[str]:
        return self.public.public_key_locations

    @property
    def algorithm(self) -> Optional[Algorithm]:
        return self.public.algorithm

    @property
    def size(self) -> int:
        return self.public.size

    @property
    def user_id(self) -> str:
        return self.public.user_id

    @property
    def password_protected(self) -> bool:
        return self.private.password_protected

    def with_digest_content(self, digest: Callable[[bytes], bytes]) -> bytes:
        return self.public.with_digest_content(digest)


KeyEntry = Union[PublicKeyEntry, PrivateKeyEntry, KeyPairEntry]
