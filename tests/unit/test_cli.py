"""
CLI Unit Tests
Tests for hashlock_cli (argument parsing and command output).
"""
import json

import pytest

from core.codec.order_codec import decode_order_msg
from core.crypto.commitment import derive_hex
from core.merkle.merkle_proofs import MerkleVerifier, SecretTree
from hashlock_cli.main import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, EXIT_VERIFICATION_FAILED, main

from fixtures import ONE_TOKEN, make_secrets


pytestmark = pytest.mark.cli


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, clean_env):
    """Run each command in an empty directory with no HASHLOCK_* env."""
    clean_env.chdir(tmp_path)
    clean_env.setenv("HOME", str(tmp_path))
    return tmp_path


def run_json(capsys, argv):
    code = main(argv)
    return code, json.loads(capsys.readouterr().out)


def encode_order(capsys, *extra):
    return run_json(capsys, [
        "order", "encode",
        "--token", "token-1",
        "--amount", str(ONE_TOKEN),
        "--maker", "maker.id",
        "--json",
        *extra,
    ])


class TestHashlockCommands:
    """hashlock / verify-secret."""

    def test_hashlock(self, capsys):
        assert main(["hashlock", "test_secret_123"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == derive_hex("test_secret_123")

    def test_hashlock_hex_secret(self, capsys):
        code, out = run_json(capsys, ["hashlock", "--hex-secret", "0xdeadbeef", "--json"])
        assert code == EXIT_SUCCESS
        assert out["hashlock"] == derive_hex(b"\xde\xad\xbe\xef")

    def test_hashlock_bad_hex_secret(self, capsys):
        assert main(["hashlock", "--hex-secret", "xyz"]) == EXIT_RUNTIME_ERROR

    def test_verify_secret(self, capsys):
        assert main(["verify-secret", "open", "0x" + derive_hex("open")]) == EXIT_SUCCESS
        assert "valid: true" in capsys.readouterr().out

    def test_verify_secret_mismatch(self, capsys):
        code, out = run_json(capsys, ["verify-secret", "closed", derive_hex("open"), "--json"])
        assert code == EXIT_VERIFICATION_FAILED
        assert out["ok"] is False


class TestSecretsCommands:
    """secrets generate / proof."""

    def test_generate_single(self, capsys):
        code, out = run_json(capsys, ["secrets", "generate", "--json"])
        assert code == EXIT_SUCCESS
        assert len(out["secrets"]) == 1
        assert out["root_hash"] == derive_hex(out["secrets"][0]["secret"])

    def test_generate_multi(self, capsys):
        code, out = run_json(capsys, ["secrets", "generate", "--parts", "3", "--json"])
        assert code == EXIT_SUCCESS
        secrets = [s["secret"] for s in out["secrets"]]
        assert len(secrets) == 4
        assert out["root_hash"] == SecretTree.for_parts(secrets, 3).root_hex

    def test_generate_invalid_parts(self, capsys):
        assert main(["secrets", "generate", "--parts", "0"]) == EXIT_RUNTIME_ERROR

    def test_generate_size_from_config(self, capsys, clean_env):
        clean_env.setenv("HASHLOCK_SECRET_BYTES", "16")
        _, out = run_json(capsys, ["secrets", "generate", "--json"])
        assert len(out["secrets"][0]["secret"]) == 32
        _, out = run_json(capsys, ["secrets", "generate", "--bytes", "20", "--json"])
        assert len(out["secrets"][0]["secret"]) == 40

    def test_generate_too_few_bytes(self, capsys):
        assert main(["secrets", "generate", "--bytes", "8"]) == EXIT_RUNTIME_ERROR

    def test_proof(self, capsys):
        secrets = make_secrets(4)
        code, out = run_json(capsys, ["secrets", "proof", "--index", "2", "--json", *secrets])
        assert code == EXIT_SUCCESS
        assert out["hashlock"] == derive_hex(secrets[2])
        assert MerkleVerifier.verify_fill(2, out["hashlock"], out["proof"], out["root_hash"])

    def test_proof_index_out_of_range(self, capsys):
        assert main(["secrets", "proof", "--index", "9", "a", "b"]) == EXIT_RUNTIME_ERROR


class TestOrderCommands:
    """order encode / decode / check."""

    def test_encode_single_secret(self, capsys):
        code, out = encode_order(capsys, "--secret", "test_secret_123")
        assert code == EXIT_SUCCESS
        assert out["size"] == 149
        assert out["order"]["root_hash"] == derive_hex("test_secret_123")
        assert out["order"]["total_amount"] == str(ONE_TOKEN)
        assert decode_order_msg(out["msg"]).root_hash == derive_hex("test_secret_123")

    def test_encode_without_escrow_has_no_transfer_args(self, capsys):
        _, out = encode_order(capsys, "--secret", "s")
        assert "ft_transfer_call" not in out

    def test_encode_with_escrow_emits_transfer_args(self, capsys, clean_env):
        clean_env.setenv("HASHLOCK_ESCROW_ACCOUNT", "escrow-src.near")
        code, out = encode_order(capsys, "--secret", "s")
        assert code == EXIT_SUCCESS
        assert out["ft_transfer_call"] == {
            "receiver_id": "escrow-src.near",
            "amount": str(ONE_TOKEN),
            "msg": out["msg"],
        }

    def test_encode_root_hash_with_newline_rejected(self, capsys):
        code, out = encode_order(capsys, "--root-hash", "ab" * 32 + "\n")
        assert code == EXIT_RUNTIME_ERROR
        assert out["error"]["code"] == "SCHEMA_VALIDATION_ERROR"

    def test_encode_plain_output(self, capsys):
        argv = [
            "order", "encode", "--token", "token-1", "--amount", "5",
            "--maker", "maker.id", "--secret", "s",
        ]
        assert main(argv) == EXIT_SUCCESS
        msg = capsys.readouterr().out.strip()
        assert decode_order_msg(msg).total_amount == 5

    def test_encode_multi_part(self, capsys):
        secrets = make_secrets(3)
        extra = ["--parts", "2"]
        for s in secrets:
            extra += ["--secret", s]
        code, out = encode_order(capsys, *extra)
        assert code == EXIT_SUCCESS
        assert out["order"]["parts"] == 2
        assert out["order"]["root_hash"] == SecretTree.from_secrets(secrets).root_hex

    def test_encode_wrong_secret_count(self, capsys):
        code, out = encode_order(capsys, "--parts", "2", "--secret", "only-one")
        assert code == EXIT_RUNTIME_ERROR
        assert out["error"]["code"] == "SCHEMA_VALIDATION_ERROR"

    def test_encode_amount_out_of_range(self, capsys):
        argv = [
            "order", "encode", "--token", "t", "--amount", str(2**128),
            "--maker", "m", "--secret", "s", "--json",
        ]
        code, out = run_json(capsys, argv)
        assert code == EXIT_RUNTIME_ERROR
        assert out["error"]["code"] == "VALUE_OUT_OF_RANGE"

    def test_encode_bad_amount(self, capsys):
        code, out = encode_order(capsys, "--secret", "s", "--amount", "-5")
        assert code == EXIT_RUNTIME_ERROR

    def test_decode(self, capsys):
        _, encoded = encode_order(capsys, "--secret", "test_secret_123")
        code, out = run_json(capsys, ["order", "decode", encoded["msg"], "--json"])
        assert code == EXIT_SUCCESS
        assert out == encoded["order"]

    def test_decode_plain(self, capsys):
        _, encoded = encode_order(capsys, "--secret", "test_secret_123")
        assert main(["order", "decode", encoded["msg"]]) == EXIT_SUCCESS
        assert "maker: maker.id" in capsys.readouterr().out

    def test_decode_truncated(self, capsys):
        _, encoded = encode_order(capsys, "--secret", "s")
        code, out = run_json(capsys, ["order", "decode", encoded["msg"][:-2], "--json"])
        assert code == EXIT_RUNTIME_ERROR
        assert out["error"]["code"] == "TRUNCATED"

    def test_decode_invalid_hex(self, capsys):
        code, out = run_json(capsys, ["order", "decode", "xyz", "--json"])
        assert code == EXIT_RUNTIME_ERROR
        assert out["error"]["code"] == "INVALID_HEX"

    def test_check_passes(self, capsys):
        _, encoded = encode_order(capsys, "--secret", "s")
        code, out = run_json(capsys, [
            "order", "check", encoded["msg"], "--sender", "maker.id", "--token", "token-1", "--json",
        ])
        assert code == EXIT_SUCCESS
        assert out["ok"] is True

    def test_check_wrong_sender(self, capsys):
        _, encoded = encode_order(capsys, "--secret", "s")
        code = main(["order", "check", encoded["msg"], "--sender", "thief", "--token", "token-1"])
        assert code == EXIT_VERIFICATION_FAILED
        assert "maker_matches_sender" in capsys.readouterr().out


class TestConfigCommand:
    """config --init / --show."""

    def test_init_creates_file(self, capsys, isolated_cwd):
        assert main(["config", "--init"]) == EXIT_SUCCESS
        assert (isolated_cwd / "hashlock.json").exists()
        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR

    def test_show(self, capsys):
        code, out = run_json(capsys, ["config", "--show"])
        assert code == EXIT_SUCCESS
        assert out["orders"]["ttl_seconds"] == 86400
        assert out["contract"]["min_expiration_margin_ns"] == 500

    def test_show_reads_env(self, capsys, clean_env):
        clean_env.setenv("HASHLOCK_ORDER_PARTS", "3")
        _, out = run_json(capsys, ["config", "--show"])
        assert out["orders"]["parts"] == 3


class TestMain:
    """Top-level behaviour."""

    def test_no_command(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "hashlock" in capsys.readouterr().out

    def test_bad_config_file(self, capsys, isolated_cwd):
        (isolated_cwd / "hashlock.json").write_text("{not json")
        assert main(["hashlock", "x"]) == EXIT_RUNTIME_ERROR
