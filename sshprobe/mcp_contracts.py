# sshprobe/mcp_contracts.py
from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field


class WarningItem(BaseModel):
    code: str = Field(..., examples=["SSH_UNENCRYPTED_PRIVATE_KEY"])
    message: str
    severity: str = "warn"


class KeyEntrySummary(BaseModel):
    key_type: str = Field(..., examples=["public", "private", "pair"])
    algorithm: Optional[str] = Field(None, examples=["RSA", "Ed25519"])
    algorithm_label: str = Field(..., examples=["RSA (2048 bits)", "Ed25519"])
    size: int = 0
    locations: List[str] = []
    public_key_locations: List[str] = []
    private_key_locations: List[str] = []
    user_id: Optional[str] = None
    password_protected: Optional[bool] = None
    fingerprint_sha1: Optional[str] = None
    fingerprint_sha256: Optional[str] = None
    fingerprint_openssh: Optional[str] = None
    warnings: List[WarningItem] = []


class KeyMatch(BaseModel):
    kind: str = Field(..., examples=["public", "private"])
    algorithm: str = Field(..., examples=["ssh-rsa", "ssh-ed25519"])
    size: int = 0
    comment: Optional[str] = None
    password_protected: Optional[bool] = None
