import pytest
from fastmcp import Client

from _util import SSH, copy_fixture, expected_fingerprint, write_file


@pytest.mark.asyncio
async def test_server_name_and_ping():
    from sshprobe.server import mcp

    assert getattr(mcp, "name", "") == "SSHProbe"

    async with Client(mcp) as client:
        result = await client.call_tool("ping", {})
        assert result.data == "pong"


@pytest.mark.asyncio
async def test_list_ssh_keys(tmp_path):
    copy_fixture("id_rsa_2048", tmp_path)
    copy_fixture("id_rsa_2048.pub", tmp_path)
    copy_fixture("id_ed25519_enc", tmp_path, "lonely")
    write_file(tmp_path, "config", "Host *\n  IdentitiesOnly yes\n")

    from sshprobe.server import mcp
    async with Client(mcp) as client:
        res = await client.call_tool("list_ssh_keys", {"directory": str(tmp_path)})
        meta = res.data
        assert meta["directory"] == str(tmp_path)
        assert meta["count"] == 2
        pair, lonely = meta["entries"]
        assert pair["key_type"] == "pair"
        assert pair["algorithm_label"] == "RSA (2048 bits)"
        assert pair["fingerprint_openssh"] == expected_fingerprint("id_rsa_2048")
        assert lonely["key_type"] == "private"
        assert lonely["algorithm"] == "Ed25519"
        assert lonely["password_protected"] is True


@pytest.mark.asyncio
async def test_list_ssh_keys_uses_configured_directory(tmp_path, monkeypatch):
    copy_fixture("id_ed25519.pub", tmp_path)
    monkeypatch.setenv("SSHPROBE_KEY_DIR", str(tmp_path))

    from sshprobe.server import mcp
    async with Client(mcp) as client:
        res = await client.call_tool("list_ssh_keys", {})
        assert res.data["count"] == 1
        assert res.data["entries"][0]["key_type"] == "public"


@pytest.mark.asyncio
async def test_classify_key_file():
    p = SSH / "id_ed25519"
    from sshprobe.server import mcp
    async with Client(mcp) as client:
        res = await client.call_tool("classify_key_file", {"path": str(p)})
        assert res.data["path"] == str(p.resolve())
        assert res.data["matches"] == [
            {"kind": "private", "algorithm": "ssh-ed25519", "size": 0, "password_protected": False}
        ]


@pytest.mark.asyncio
async def test_audit_prompt_mentions_tool():
    from sshprobe.server import mcp
    async with Client(mcp) as client:
        res = await client.get_prompt("audit_ssh_directory", {"directory": "/home/alice/.ssh"})
        text = res.messages[0].content.text
        assert "list_ssh_keys" in text
        assert "/home/alice/.ssh" in text
