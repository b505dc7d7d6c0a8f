"""Entry point of the scan: directory listing -> classifiers -> partitioner."""
from __future__ import annotations

import logging
import os
from typing import List, Optional, Sequence

from .classify import Reader, bounded_reader, private_key_records_from, public_key_records_from
from .entries import KeyEntry, PrivateKeyEntry, PublicKeyEntry
from .formats.openssh import ED25519_ALGORITHM, RSA_ALGORITHM
from .partition import partition_key_entries
from .path_utils import list_files_in
from .settings import Settings

log = logging.getLogger(__name__)

SUPPORTED_ALGORITHMS = (RSA_ALGORITHM, ED25519_ALGORITHM)


def private_key_entries_from(paths: Sequence[str], reader: Reader) -> List[PrivateKeyEntry]:
    return [
        PrivateKeyEntry.from_record(r)
        for algorithm in SUPPORTED_ALGORITHMS
        for r in private_key_records_from(paths, algorithm, reader)
    ]


def public_key_entries_from(paths: Sequence[str], reader: Reader) -> List[PublicKeyEntry]:
    return [
        PublicKeyEntry.from_record(r)
        for algorithm in SUPPORTED_ALGORITHMS
        for r in public_key_records_from(paths, algorithm, reader)
    ]


def keys_in(paths: Sequence[str], reader: Reader) -> List[KeyEntry]:
    return partition_key_entries(
        private_key_entries_from(paths, reader),
        public_key_entries_from(paths, reader),
    )


def all_keys(
    directory: Optional[str | os.PathLike[str]] = None,
    settings: Optional[Settings] = None,
) -> List[KeyEntry]:
    """Every SSH key entry found in ``directory`` (default: ``settings.KEY_DIR``)."""
    settings = settings or Settings.from_env()
    target = directory if directory is not None else settings.KEY_DIR
    files = list_files_in(target)
    entries = keys_in(files, bounded_reader(settings.MAX_FILE_BYTES))
    log.info("found %d key entries among %d file(s) in %s", len(entries), len(files), target)
    return entries
