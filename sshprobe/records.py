from dataclasses import dataclass


@dataclass(frozen=True)
class PublicKeyRecord:
    """One parsed public key line."""

    algorithm: str
    key: bytes
    comment: str = ""
    size: int = 0
    path: str = ""

    def is_algorithm(self, name: str) -> bool:
        return self.algorithm == name


@dataclass(frozen=True)
class PrivateKeyRecord:
    """One parsed ``openssh-key-v1`` container."""

    algorithm: str
    password_protected: bool = False
    size: int = 0
    path: str = ""

    def is_algorithm(self, name: str) -> bool:
        return self.algorithm == name
