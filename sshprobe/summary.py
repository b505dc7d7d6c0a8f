from typing import Any, Dict, List, Sequence

from .access import SUPPORTED_ALGORITHMS
from .classify import Reader, private_key_record_for, public_key_record_for, read_file
from .common import Warn, colon_hex, openssh_sha256, sha1_digest, sha256_digest
from .entries import Algorithm, KeyEntry, PrivateKeyEntry
from .mcp_contracts import KeyEntrySummary, KeyMatch

MIN_RSA_BITS = 2048


def algorithm_label(entry: KeyEntry) -> str:
    algo = entry.algorithm
    if algo is None:
        return "unknown"
    if algo.has_key_size:
        return f"{algo.value} ({entry.size} bits)"
    return algo.value


def _warnings_for(entry: KeyEntry) -> List[dict]:
    warns: List[Warn] = []
    if getattr(entry, "password_protected", True) is False:
        warns.append(Warn("SSH_UNENCRYPTED_PRIVATE_KEY", "private key is not password protected"))
    if entry.algorithm is Algorithm.RSA and 0 < entry.size < MIN_RSA_BITS:
        warns.append(Warn("SSH_WEAK_RSA_KEY", f"RSA key size {entry.size} is below {MIN_RSA_BITS} bits"))
    return [w.as_dict() for w in warns]


def summarize_entry(entry: KeyEntry) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "key_type": entry.key_type.value,
        "algorithm": entry.algorithm.value if entry.algorithm else None,
        "algorithm_label": algorithm_label(entry),
        "size": entry.size,
        "locations": entry.locations,
        "public_key_locations": entry.public_key_locations,
        "private_key_locations": entry.private_key_locations,
    }

    # private keys expose no public material and no user id
    if not isinstance(entry, PrivateKeyEntry):
        out["user_id"] = entry.user_id
        out["fingerprint_sha1"] = colon_hex(entry.with_digest_content(sha1_digest))
        sha256 = entry.with_digest_content(sha256_digest)
        out["fingerprint_sha256"] = colon_hex(sha256)
        out["fingerprint_openssh"] = openssh_sha256(sha256)
    if hasattr(entry, "password_protected"):
        out["password_protected"] = entry.password_protected

    out["warnings"] = _warnings_for(entry)
    return KeyEntrySummary(**out).model_dump(exclude_none=True)


def summarize_entries(entries: Sequence[KeyEntry]) -> Dict[str, Any]:
    return {"count": len(entries), "entries": [summarize_entry(e) for e in entries]}


def classify_file(path: str, reader: Reader = read_file) -> List[Dict[str, Any]]:
    """Every (kind, algorithm) combination the file's content matches."""
    matches: List[KeyMatch] = []
    for algorithm in SUPPORTED_ALGORITHMS:
        pub = public_key_record_for(path, algorithm, reader)
        if pub is not None:
            matches.append(KeyMatch(kind="public", algorithm=pub.algorithm, size=pub.size, comment=pub.comment))
        priv = private_key_record_for(path, algorithm, reader)
        if priv is not None:
            matches.append(KeyMatch(kind="private", algorithm=priv.algorithm, size=priv.size,
                                    password_protected=priv.password_protected))
    return [m.model_dump(exclude_none=True) for m in matches]
