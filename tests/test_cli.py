"""Tests for the binsize-tree command-line interface.

WHY: The CLI is what CI jobs run. Its exit codes, stdout/stderr split,
and output file naming are the contract scripts rely on.

HOW: main() is called with an explicit argv. Analyzer results are
written to tmp_path; capsys captures stdout (rendered output) and stderr
(status and errors).

RULES:
- Errors exit with SystemExit code 1 and an "Error:" line on stderr
- Nothing but rendered output is written to stdout
"""

from __future__ import annotations

import json

import pytest

from binsize_tree.cli import _resolve_output_path, build_parser, main


@pytest.fixture
def reference_file(tmp_path, reference_result_dict):
    path = tmp_path / "bin.json"
    path.write_text(json.dumps(reference_result_dict), encoding="utf-8")
    return path


@pytest.fixture
def rich_file(tmp_path, rich_result_dict):
    path = tmp_path / "server.json"
    path.write_text(json.dumps(rich_result_dict), encoding="utf-8")
    return path


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["result.json"])
        assert args.input_file == "result.json"
        assert args.output_dir is None
        assert args.order is None
        assert args.negative_leftover is None
        assert args.max_depth is None
        assert args.verbose is False

    def test_policy_choices_enforced(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["r.json", "--negative-leftover", "clamp"])


class TestStdoutOutput:
    def test_text_tree_default(self, reference_file, capsys):
        main([str(reference_file)])
        captured = capsys.readouterr()
        lines = captured.out.splitlines()
        assert lines[0] == "bin  1000 B  [result]"
        assert "│       └── p Disasm  50 B  [disasm]" in lines
        assert "Loading bin.json" in captured.err
        assert "bin (1000 B), 8 entries" in captured.err

    def test_json_format(self, reference_file, capsys):
        main([str(reference_file), "--formats", "json_tree"])
        document = json.loads(capsys.readouterr().out)
        assert document["id"] == 1
        assert document["children"][-1]["size"] == 760

    def test_multiple_formats_in_order(self, reference_file, capsys):
        main([str(reference_file), "--formats", "text_tree,flat_csv"])
        out = capsys.readouterr().out
        assert out.index("bin  1000 B  [result]") < out.index("id,parent_id,depth")

    def test_max_depth(self, reference_file, capsys):
        main([str(reference_file), "--max-depth", "0"])
        assert capsys.readouterr().out == "bin  1000 B  [result]\n"

    def test_input_order(self, rich_file, capsys):
        main([str(rich_file), "--order", "input", "--formats", "flat_csv"])
        out = capsys.readouterr().out
        assert "server > Std Packages Size > fmt" in out


class TestOutputDir:
    def test_saves_files_with_stem(self, rich_file, tmp_path, capsys):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        main([str(rich_file), "--formats", "text_tree,json_tree,flat_csv",
              "--output-dir", str(out_dir)])
        assert sorted(p.name for p in out_dir.iterdir()) == [
            "server-entries.csv", "server-tree.json", "server-tree.txt",
        ]
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Saved 3 file(s)" in captured.err

    def test_conflict_gets_numeric_suffix(self, reference_file, tmp_path):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        main([str(reference_file), "--output-dir", str(out_dir)])
        main([str(reference_file), "--output-dir", str(out_dir)])
        assert sorted(p.name for p in out_dir.iterdir()) == ["bin-tree-2.txt", "bin-tree.txt"]

    def test_resolve_output_path_counter(self, tmp_path):
        (tmp_path / "a-tree.txt").write_text("", encoding="utf-8")
        (tmp_path / "a-tree-2.txt").write_text("", encoding="utf-8")
        assert _resolve_output_path("a", "-tree.txt", tmp_path).name == "a-tree-3.txt"


class TestErrors:
    def _assert_fails(self, argv, capsys, message):
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Error:" in err
        assert message in err

    def test_missing_input(self, tmp_path, capsys):
        self._assert_fails([str(tmp_path / "missing.json")], capsys, "File not found")

    def test_missing_output_dir(self, reference_file, tmp_path, capsys):
        self._assert_fails(
            [str(reference_file), "--output-dir", str(tmp_path / "nope")],
            capsys,
            "Output directory does not exist",
        )

    def test_unknown_format(self, reference_file, capsys):
        self._assert_fails([str(reference_file), "--formats", "docx"], capsys, "Unknown format")

    def test_negative_max_depth(self, reference_file, capsys):
        self._assert_fails([str(reference_file), "--max-depth", "-1"], capsys, "--max-depth")

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        self._assert_fails([str(path)], capsys, "not valid JSON")

    def test_non_utf8_input(self, tmp_path, capsys):
        path = tmp_path / "bad-bytes.json"
        path.write_bytes(b'{"name": "\xff\xfe", "size": 1}')
        self._assert_fails([str(path)], capsys, "not valid JSON")

    def test_known_size_above_file_size(self, tmp_path, capsys):
        path = tmp_path / "section.json"
        path.write_text(json.dumps({
            "name": "b",
            "size": 100,
            "sections": [{"name": "s", "file_size": 10, "known_size": 60}],
            "packages": {},
        }), encoding="utf-8")
        self._assert_fails([str(path)], capsys, "$.sections[0]")

    def test_schema_violation(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"name": "bad", "size": -1}), encoding="utf-8")
        self._assert_fails([str(path)], capsys, "$.size")

    def test_leftover_mismatch_with_error_policy(self, tmp_path, capsys):
        path = tmp_path / "small.json"
        path.write_text(json.dumps({
            "name": "small",
            "size": 10,
            "packages": {"p": {"name": "p", "type": "main", "size": 50}},
        }), encoding="utf-8")
        self._assert_fails(
            [str(path), "--negative-leftover", "error"], capsys, "'small'",
        )
