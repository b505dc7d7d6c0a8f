import os
from dataclasses import dataclass, field

_DEFAULT_MAX_FILE_BYTES = 1024 * 1024


def _default_key_dir() -> str:
    return os.path.join(os.path.expanduser("~"), ".ssh")


@dataclass(frozen=True)
class Settings:
    LOG_LEVEL: str = field(default="INFO")
    KEY_DIR: str = field(default_factory=_default_key_dir)
    MAX_FILE_BYTES: int = field(default=_DEFAULT_MAX_FILE_BYTES)

    @staticmethod
    def from_env() -> "Settings":
        log_level = os.getenv("SSHPROBE_LOG_LEVEL", "INFO").upper()
        key_dir = os.path.expanduser(os.getenv("SSHPROBE_KEY_DIR", "") or _default_key_dir())
        try:
            max_bytes = int(os.getenv("SSHPROBE_MAX_FILE_BYTES", str(_DEFAULT_MAX_FILE_BYTES)))
            if max_bytes <= 0:
                raise ValueError
        except ValueError:
            max_bytes = _DEFAULT_MAX_FILE_BYTES
        return Settings(LOG_LEVEL=log_level, KEY_DIR=key_dir, MAX_FILE_BYTES=max_bytes)
