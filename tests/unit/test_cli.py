"""
CLI Unit Tests
Tests for symmerkle_cli: argument parsing, commands and exit codes.
"""
import json

import pytest

from core.crypto.hashing import leaf_from_bytes, to_hex
from core.merkle.merkle_tree import build_merkle_proof, build_merkle_root
from core.schemas.errors import ErrorCodes, InvalidInputException
from fixtures.common import make_leaves, write_leaves_file
from symmerkle_cli.commands.demo import pick_wrong_index, run_demo
from symmerkle_cli.io import parse_leaf_value, parse_leaves
from symmerkle_cli.main import create_parser, main


@pytest.fixture
def leaves():
    return make_leaves(5)


@pytest.fixture
def leaves_file(tmp_path, leaves):
    return write_leaves_file(tmp_path / "leaves.txt", leaves)


@pytest.fixture
def proof_file(tmp_path, leaves_file, capsys):
    out = tmp_path / "out" / "proof.json"
    assert main(["prove", leaves_file, "--index", "4", "--out", str(out)]) == 0
    capsys.readouterr()
    return str(out)


class TestParser:
    """Tests for argument parsing."""

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_prove_requires_index(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["prove", "leaves.txt"])

    def test_leaf_and_record_exclusive(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["verify", "p.json", "--leaf", "0x1", "--record", "x"])

    def test_unknown_algorithm_rejected(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["root", "leaves.txt", "--algorithm", "md5"])


class TestRootCommand:
    """Tests for `symmerkle root`."""

    def test_prints_hex_root(self, leaves, leaves_file, capsys):
        assert main(["root", leaves_file]) == 0

        assert capsys.readouterr().out.strip() == to_hex(build_merkle_root(leaves))

    def test_json_commitment(self, leaves, leaves_file, capsys):
        assert main(["root", leaves_file, "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["root"] == to_hex(build_merkle_root(leaves))
        assert data["leaf_count"] == 5
        assert data["depth"] == 4
        assert data["algorithm"] == "keccak256"

    def test_json_array_input(self, tmp_path, leaves, capsys):
        path = tmp_path / "leaves.json"
        path.write_text(json.dumps([to_hex(v) for v in leaves]))

        assert main(["root", str(path)]) == 0
        assert capsys.readouterr().out.strip() == to_hex(build_merkle_root(leaves))

    def test_raw_records(self, tmp_path, capsys):
        path = tmp_path / "records.txt"
        path.write_text("a\nb\nc\n")
        expected = build_merkle_root([leaf_from_bytes(r) for r in (b"a", b"b", b"c")])

        assert main(["root", str(path), "--raw"]) == 0
        assert capsys.readouterr().out.strip() == to_hex(expected)

    def test_sha256(self, leaves, leaves_file, capsys):
        assert main(["root", leaves_file, "--algorithm", "sha256"]) == 0

        assert capsys.readouterr().out.strip() == to_hex(build_merkle_root(leaves, "sha256"))

    def test_empty_file(self, tmp_path, capsys):
        path = tmp_path / "empty.txt"
        path.write_text("# nothing here\n\n")

        assert main(["root", str(path)]) == 1
        assert "Error" in capsys.readouterr().err

    def test_non_utf8_file(self, tmp_path, capsys):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"0x01\n\xff\xfe\n")

        assert main(["root", str(path)]) == 1
        assert "not valid UTF-8" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        assert main(["root", str(tmp_path / "nope.txt")]) == 1

    def test_sentinel_leaf_rejected(self, tmp_path):
        path = tmp_path / "zero.txt"
        path.write_text("0x01\n0x00\n")

        assert main(["root", str(path)]) == 1


class TestProveCommand:
    """Tests for `symmerkle prove`."""

    def test_prove_to_stdout(self, leaves, leaves_file, capsys):
        assert main(["prove", leaves_file, "-i", "4"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["leaf"] == to_hex(leaves[4])
        assert data["siblings"] == [to_hex(s) for s in build_merkle_proof(leaves, 4)]
        assert "index" not in data

    def test_prove_to_file(self, tmp_path, leaves_file, capsys):
        out = tmp_path / "nested" / "proof.json"

        assert main(["prove", leaves_file, "-i", "1", "-o", str(out)]) == 0

        assert out.exists()
        assert "3 siblings" in capsys.readouterr().out

    def test_index_out_of_range(self, leaves_file, capsys):
        assert main(["prove", leaves_file, "-i", "5"]) == 1
        assert "out of range" in capsys.readouterr().err


class TestVerifyCommand:
    """Tests for `symmerkle verify`."""

    def test_valid_bundle(self, proof_file, capsys):
        assert main(["verify", proof_file]) == 0

        assert "valid: true" in capsys.readouterr().out

    def test_published_root(self, proof_file, leaves, capsys):
        root = to_hex(build_merkle_root(leaves))

        assert main(["verify", proof_file, "--root", root, "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["ok"] is True
        assert data["root_source"] == "argument"
        assert data["proof_length"] == 3

    def test_wrong_root(self, proof_file, capsys):
        assert main(["verify", proof_file, "--root", "0x1234", "--json"]) == 2

        data = json.loads(capsys.readouterr().out)
        assert data["ok"] is False
        assert data["errors"][0]["code"] == ErrorCodes.ROOT_MISMATCH

    def test_wrong_leaf(self, proof_file, leaves, capsys):
        assert main(["verify", proof_file, "--leaf", to_hex(leaves[0])]) == 2

        assert "valid: false" in capsys.readouterr().out

    def test_record_claim(self, tmp_path, capsys):
        records = tmp_path / "records.txt"
        records.write_text("a\nb\nc\nd\ne\n")
        out = tmp_path / "proof.json"
        assert main(["prove", str(records), "--raw", "-i", "2", "-o", str(out)]) == 0

        assert main(["verify", str(out), "--record", "c"]) == 0
        assert main(["verify", str(out), "--record", "a"]) == 2

    def test_missing_proof(self, tmp_path, capsys):
        assert main(["verify", str(tmp_path / "missing.json")]) == 1

        assert "Error loading proof" in capsys.readouterr().err

    def test_malformed_proof(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        assert main(["verify", str(path)]) == 1

    def test_invalid_bundle_fields(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"root": "0xzz", "leaf": "0x01", "siblings": []}))

        assert main(["verify", str(path)]) == 1

    def test_non_utf8_proof(self, tmp_path, capsys):
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe{}")

        assert main(["verify", str(path)]) == 1
        assert "not valid UTF-8" in capsys.readouterr().err


class TestDemoCommand:
    """Tests for `symmerkle demo`."""

    def test_default_demo(self, capsys):
        assert main(["demo"]) == 0

        out = capsys.readouterr().out
        assert "Merkle root: 0x" in out
        assert "Should be true (good proof): true" in out
        assert "Should be false (bad proof, item 0): false" in out

    def test_demo_json(self, capsys):
        assert main(["demo", "x", "y", "z", "--index", "1", "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["records"] == ["x", "y", "z"]
        assert data["good_proof_valid"] is True
        assert data["bad_proof_valid"] is False

    def test_demo_index_out_of_range(self):
        assert main(["demo", "--index", "9"]) == 1

    def test_run_demo_matches_scenario(self):
        result = run_demo(["a", "b", "c", "d", "e"], 4, "keccak256")

        assert len(result["proof"]) == 3
        assert result["proof"][0] == to_hex(0)
        assert result["wrong_index"] == 0

    def test_pick_wrong_index(self):
        assert pick_wrong_index(4, 5) == 0
        assert pick_wrong_index(1, 5) == 3
        assert pick_wrong_index(0, 2) == 1

        with pytest.raises(InvalidInputException):
            pick_wrong_index(0, 1)


class TestConfigCommand:
    """Tests for `symmerkle config`."""

    def test_init_creates_file(self, tmp_path, capsys):
        path = tmp_path / "cfg.json"

        assert main(["config", "--init", "--path", str(path)]) == 0
        assert json.loads(path.read_text())["hash_algorithm"] == "keccak256"

        assert main(["config", "--init", "--path", str(path)]) == 1

    def test_show(self, capsys):
        assert main(["config", "--show"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["default_output_format"] == "human"

    def test_config_file_sets_output_format(self, tmp_path, leaves_file, capsys):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"default_output_format": "json"}))

        assert main(["--config", str(path), "root", leaves_file]) == 0

        assert "leaf_count" in json.loads(capsys.readouterr().out)

    def test_bad_config_file(self, tmp_path, capsys):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"hash_algorithm": "md5"}))

        assert main(["--config", str(path), "config", "--show"]) == 1
        assert "Error loading configuration" in capsys.readouterr().err

    def test_env_algorithm(self, monkeypatch, leaves, leaves_file, capsys):
        monkeypatch.setenv("SYMMERKLE_HASH_ALGORITHM", "sha256")

        assert main(["root", leaves_file]) == 0
        assert capsys.readouterr().out.strip() == to_hex(build_merkle_root(leaves, "sha256"))

    def test_env_output_format_rejected(self, monkeypatch, leaves_file, capsys):
        monkeypatch.setenv("SYMMERKLE_OUTPUT_FORMAT", "xml")

        assert main(["root", leaves_file]) == 1
        assert "Error loading configuration" in capsys.readouterr().err

    def test_env_debug_shows_traceback(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("SYMMERKLE_DEBUG", "true")

        assert main(["root", str(tmp_path / "nope.txt")]) == 1
        assert "Traceback" in capsys.readouterr().err

    def test_errors_terse_without_debug(self, tmp_path, capsys):
        assert main(["root", str(tmp_path / "nope.txt")]) == 1

        err = capsys.readouterr().err
        assert "Traceback" not in err
        assert "Error: File not found" in err


class TestLeafParsing:
    """Tests for symmerkle_cli.io leaf parsing."""

    @pytest.mark.parametrize(
        "entry,expected",
        [(5, 5), ("0x0a", 10), ("42", 42), (" 7 ", 7)],
    )
    def test_parse_leaf_value(self, entry, expected):
        assert parse_leaf_value(entry, 0) == expected

    @pytest.mark.parametrize("entry", [-1, 2**256, "abc", "0xzz", True, 1.5, "١٢"])
    def test_parse_leaf_value_rejects(self, entry):
        with pytest.raises(InvalidInputException):
            parse_leaf_value(entry, 3)

    def test_comments_and_blanks_skipped(self):
        assert parse_leaves("# header\n0x01\n\n2\n") == [1, 2]

    def test_json_must_be_array_of_values(self):
        with pytest.raises(InvalidInputException):
            parse_leaves("[1, {}]")

    def test_raw_hex_record(self):
        assert parse_leaves("0x1234", raw=True) == [leaf_from_bytes(bytes([0x12, 0x34]))]
