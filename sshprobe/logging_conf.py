import json
import logging
import os
import re
from typing import Any

from .settings import Settings

_SECRET_KV = re.compile(r"(pass(word|phrase)?|token|secret)\s*=\s*([^\s,;]+)", re.IGNORECASE)
_ARMORED_PRIVATE_KEY = re.compile(
    r"-----BEGIN ([A-Z0-9 ]*)PRIVATE KEY-----.*?-----END \1PRIVATE KEY-----",
    re.DOTALL,
)
# base64 of "openssh-key-v1\0" without the PEM armor, e.g. a key pasted into an env var
_BARE_OPENSSH_KEY = re.compile(r"b3BlbnNzaC1rZXktdjEA[A-Za-z0-9+/=\r\n]*")


def redact(text: str) -> str:
    text = _ARMORED_PRIVATE_KEY.sub("[REDACTED-PRIVATE-KEY]", text)
    text = _BARE_OPENSSH_KEY.sub("[REDACTED-PRIVATE-KEY]", text)
    return _SECRET_KV.sub(lambda m: f"{m.group(1)}=[REDACTED]", text)


class _Redact(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(redact(a) if isinstance(a, str) else a for a in record.args)
        return True


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(settings: Settings, json_mode: bool | None = None) -> None:
    """Install one redacting stderr handler on the root logger; later calls are no-ops."""
    root = logging.getLogger()
    if getattr(root, "_sshprobe_configured", False):
        return

    level = getattr(logging, settings.LOG_LEVEL, logging.INFO)
    root.setLevel(level)

    if json_mode is None:
        json_mode = os.getenv("SSHPROBE_LOG_JSON", "false").lower() in ("1", "true", "yes")

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.addFilter(_Redact())
    handler.setFormatter(_JsonFormatter() if json_mode else logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)

    setattr(root, "_sshprobe_configured", True)
