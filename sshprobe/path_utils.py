import logging
import os
import pathlib
from typing import List
from urllib.parse import urlparse, unquote

log = logging.getLogger(__name__)

def _norm(p: pathlib.Path) -> pathlib.Path:
    return p.expanduser().resolve(strict=False)

def parse_file_uri(uri_or_path: str) -> pathlib.Path:
    if uri_or_path.startswith("file://"):
        parsed = urlparse(uri_or_path)
        path = parsed.path or ""
        if os.name == "nt":
            import re
            m = re.match(r"^/([A-Za-z]:/.*)$", path)
            if m:
                path = m.group(1)
        return pathlib.Path(unquote(path))
    return pathlib.Path(uri_or_path)

def resolve_path(path_like: str | os.PathLike[str]) -> pathlib.Path:
    return _norm(parse_file_uri(str(path_like)))

def list_files_in(directory: str | os.PathLike[str]) -> List[str]:
    """Absolute paths of the regular files directly under ``directory``.

    A missing or unreadable directory is an empty listing.
    """
    root = resolve_path(directory)
    try:
        names = sorted(os.listdir(root))
    except OSError as e:
        log.debug("cannot list %s: %s", root, e)
        return []
    return [str(root / n) for n in names if (root / n).is_file()]
