from pathlib import Path
from typing import Annotated, Optional

from fastmcp import FastMCP
from pydantic import Field

from .access import all_keys
from .classify import bounded_reader
from .logging_conf import setup_logging
from .path_utils import resolve_path
from .settings import Settings
from .summary import classify_file, summarize_entries

mcp = FastMCP(
    name="SSHProbe",
    instructions=(
        "Purpose: find SSH keys in a key directory (by default ~/.ssh) and report them as public keys, "
        "private keys, or matched key pairs. Files are classified by content, never by name. "
        "No network access, no file writes.\n\n"
        "Use me when: you need to know which RSA/Ed25519 keys a user has, which private keys have a "
        "matching `<name>.pub`, which private keys are password protected, key sizes, and fingerprints.\n"
        "Do NOT use me for: decrypting keys, generating keys, or validating key material.\n\n"
        "How to call:\n"
        "- Whole directory → `list_ssh_keys(directory=?)` (omit `directory` for the configured key dir).\n"
        "- Single file → `classify_key_file(path=...)`.\n\n"
        "Outputs: `list_ssh_keys` returns `count` and `entries`; each entry has `key_type` "
        "(public/private/pair), `algorithm`, `algorithm_label`, `size`, `locations`, and, when available, "
        "`user_id`, `password_protected`, `fingerprint_sha1`, `fingerprint_sha256`, `fingerprint_openssh`, "
        "and `warnings`.\n\n"
        "Safety: read-only and idempotent; private key material is never returned."
    ),
)


@mcp.tool(
    description="Health check. Returns 'pong'.",
    tags={"sshprobe", "health"},
    annotations={"title": "Ping", "readOnlyHint": True, "idempotentHint": True, "openWorldHint": False},
)
def ping() -> str:
    return "pong"


@mcp.tool(
    description=(
        "Scan an SSH key directory and return every public key, private key and key pair found in it. "
        "Read-only and idempotent."
    ),
    tags={"sshprobe", "ssh", "scan", "filesystem"},
    annotations={
        "title": "List SSH keys",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def list_ssh_keys(
    directory: Annotated[
        Optional[Path],
        Field(description="Directory to scan. Leave null to scan the configured key directory (~/.ssh)."),
    ] = None,
) -> dict:
    """
    Examples:

    - Default key directory:
      {}

    - Explicit directory:
      { "directory": "/home/alice/.ssh" }
    """
    settings = Settings.from_env()
    target = resolve_path(str(directory)) if directory is not None else resolve_path(settings.KEY_DIR)
    return {"directory": str(target), **summarize_entries(all_keys(target, settings))}


@mcp.tool(
    description=(
        "Report which kinds of SSH key (RSA/Ed25519, public/private) a single file contains. "
        "Read-only and idempotent."
    ),
    tags={"sshprobe", "ssh", "analysis", "filesystem"},
    annotations={
        "title": "Classify key file",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def classify_key_file(
    path: Annotated[Path, Field(description="Local path to the file to classify.")],
) -> dict:
    settings = Settings.from_env()
    p = resolve_path(str(path))
    return {"path": str(p), "matches": classify_file(str(p), bounded_reader(settings.MAX_FILE_BYTES))}


@mcp.prompt(
    name="audit_ssh_directory",
    description=(
        "Audit an SSH key directory by calling `list_ssh_keys`, then report risky or unpaired keys."
    ),
    tags={"sshprobe", "prompt", "audit"},
)
def audit_ssh_directory(
    directory: Annotated[
        str, Field(description="Directory to audit; empty string for the configured key directory.")
    ] = "",
) -> str:
    args = f'{{ "directory": "{directory}" }}' if directory else "{}"
    return (
        "Task: Audit the SSH keys in a key directory.\n\n"
        f"1) Call the MCP tool `list_ssh_keys` with the JSON arguments {args}.\n\n"
        "2) From the returned entries, flag:\n"
        "- private keys (or pairs) that are not password protected;\n"
        "- RSA keys smaller than 2048 bits;\n"
        "- private keys without a matching public key, and public keys without a private key.\n\n"
        "OUTPUT a short bullet list, one bullet per finding, naming the file locations and the "
        "SHA256 fingerprint when there is one. "
        "If the tool call fails, output ERROR: <message> and stop. Do not invent results.\n"
    )


if __name__ == "__main__":
    setup_logging(Settings.from_env())
    mcp.run()
