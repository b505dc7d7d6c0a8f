import hashlib

from sshprobe.access import keys_in
from sshprobe.classify import read_file
from sshprobe.common import colon_hex, openssh_sha256
from sshprobe.entries import PrivateKeyEntry, PublicKeyEntry
from sshprobe.records import PrivateKeyRecord, PublicKeyRecord
from sshprobe.summary import algorithm_label, classify_file, summarize_entries, summarize_entry
from _util import SSH, copy_fixture, expected_fingerprint, write_file


def _codes(summary):
    return {w["code"] for w in summary.get("warnings", [])}


def test_colon_hex():
    assert colon_hex(b"\x01\xab\x00") == "01:AB:00"
    assert colon_hex(b"") == ""


def test_algorithm_label():
    rsa = PublicKeyEntry.from_record(PublicKeyRecord(algorithm="ssh-rsa", key=b"", size=3072, path="k.pub"))
    ed = PublicKeyEntry.from_record(PublicKeyRecord(algorithm="ssh-ed25519", key=b"", path="e.pub"))
    assert algorithm_label(rsa) == "RSA (3072 bits)"
    assert algorithm_label(ed) == "Ed25519"


def test_pair_summary_matches_ssh_keygen(tmp_path):
    files = [copy_fixture("id_ed25519", tmp_path), copy_fixture("id_ed25519.pub", tmp_path)]
    [entry] = keys_in(files, read_file)

    s = summarize_entry(entry)

    assert s["key_type"] == "pair"
    assert s["algorithm"] == "Ed25519"
    assert s["algorithm_label"] == "Ed25519"
    assert s["size"] == 0
    assert s["locations"] == files
    assert s["private_key_locations"] == files[:1]
    assert s["public_key_locations"] == files[1:]
    assert s["user_id"] == "alice@sshprobe.test"
    assert s["password_protected"] is False
    assert s["fingerprint_openssh"] == expected_fingerprint("id_ed25519")
    assert len(s["fingerprint_sha1"].split(":")) == 20
    assert len(s["fingerprint_sha256"].split(":")) == 32
    assert _codes(s) == {"SSH_UNENCRYPTED_PRIVATE_KEY"}


def test_public_summary_fingerprints(tmp_path):
    path = copy_fixture("id_rsa_2048.pub", tmp_path)
    [entry] = keys_in([path], read_file)
    s = summarize_entry(entry)

    blob = entry.key
    assert s["key_type"] == "public"
    assert s["algorithm_label"] == "RSA (2048 bits)"
    assert s["fingerprint_sha1"] == colon_hex(hashlib.sha1(blob).digest())
    assert s["fingerprint_sha256"] == colon_hex(hashlib.sha256(blob).digest())
    assert s["fingerprint_openssh"] == openssh_sha256(hashlib.sha256(blob).digest())
    assert s["fingerprint_openssh"] == expected_fingerprint("id_rsa_2048")
    assert "password_protected" not in s
    assert _codes(s) == set()


def test_private_summary_has_no_public_material():
    entry = PrivateKeyEntry.from_record(
        PrivateKeyRecord(algorithm="ssh-rsa", password_protected=True, size=1024, path="/k/id_rsa")
    )
    s = summarize_entry(entry)
    assert s["key_type"] == "private"
    assert s["password_protected"] is True
    assert "user_id" not in s
    assert not any(k.startswith("fingerprint") for k in s)
    assert _codes(s) == {"SSH_WEAK_RSA_KEY"}


def test_summarize_entries():
    entry = PrivateKeyEntry.from_record(PrivateKeyRecord(algorithm="ssh-ed25519", path="/k/id"))
    out = summarize_entries([entry])
    assert out["count"] == 1
    assert out["entries"][0]["locations"] == ["/k/id"]
    assert summarize_entries([]) == {"count": 0, "entries": []}


def test_classify_file(tmp_path):
    matches = classify_file(str(SSH / "id_rsa_enc"))
    assert matches == [{"kind": "private", "algorithm": "ssh-rsa", "size": 2048, "password_protected": True}]

    pub = write_file(tmp_path, "whatever", "ssh-ed25519 AAAA alfred@debian\n")
    assert classify_file(pub) == [{"kind": "public", "algorithm": "ssh-ed25519", "size": 0, "comment": "alfred@debian"}]

    assert classify_file(str(tmp_path / "missing")) == []
    assert classify_file(str(SSH / "id_ecdsa")) == []
