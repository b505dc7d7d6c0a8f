from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from .entries import KeyEntry, KeyPairEntry, PrivateKeyEntry, PublicKeyEntry

log = logging.getLogger(__name__)

PUBLIC_KEY_SUFFIX = ".pub"


def public_key_path_for(private: PrivateKeyEntry) -> str:
    return f"{private.path}{PUBLIC_KEY_SUFFIX}"


class KeyEntryPartitioner:
    """Pairs private keys with ``<private path>.pub`` public keys.

    Private entries come out in input order, each either paired or alone,
    followed by the public entries nothing claimed, in input order.
    """

    def __init__(self, publics: Sequence[PublicKeyEntry]) -> None:
        self._result: List[KeyEntry] = []
        self._publics: Dict[str, PublicKeyEntry] = {}
        for pub in publics:
            self._publics[pub.path] = pub

    def _process_private(self, priv: PrivateKeyEntry) -> None:
        pub = self._publics.pop(public_key_path_for(priv), None)
        if pub is None:
            self._result.append(priv)
            return
        log.debug("paired %s with %s", priv.path, pub.path)
        self._result.append(KeyPairEntry(private=priv, public=pub))

    def partition(self, privates: Sequence[PrivateKeyEntry]) -> List[KeyEntry]:
        for priv in privates:
            self._process_private(priv)
        self._result.extend(self._publics.values())
        self._publics = {}
        return self._result


def partition_key_entries(
    privates: Sequence[PrivateKeyEntry],
    publics: Sequence[PublicKeyEntry],
) -> List[KeyEntry]:
    return KeyEntryPartitioner(publics).partition(privates)
