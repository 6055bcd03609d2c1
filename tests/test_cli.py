"""Tests for the command-line interface."""

import io
import json

import pytest

from gapchain.cli import main


class TestChainCommand:
    def test_text_output(self, match_file, capsys):
        main(["chain", str(match_file)])
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "> query1"
        assert out[1] == "     500      520    250    none      -      -"
        assert out[2] == "> query1 Reverse"
        assert len(out) == 6

    def test_min_score_option(self, match_file, capsys):
        main(["chain", str(match_file), "-l", "0"])
        out = capsys.readouterr().out.splitlines()
        assert "#" in out
        assert len(out) == 9

    def test_extent_option(self, match_file, capsys):
        main(["chain", str(match_file), "-e", "-l", "30"])
        out = capsys.readouterr().out.splitlines()
        # the short pair spans 30 reference bases, enough in extent mode
        assert out[:3] == ["> query1", "     500      520    250    none      -      -", "#"]

    def test_stdin(self, match_list, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(match_list))
        main(["chain"])
        assert capsys.readouterr().out.startswith("> query1\n")

    def test_json_output(self, match_file, capsys):
        main(["chain", str(match_file), "--output", "json", "-s", "500"])
        data = json.loads(capsys.readouterr().out)
        assert data["params"]["max_separation"] == 500
        assert len(data["queries"]) == 3

    def test_config_file_overridden_by_options(self, match_file, tmp_path, capsys):
        config = tmp_path / "params.json"
        config.write_text(json.dumps({"min_output_score": 0, "fixed_separation": 9}))
        main(["chain", str(match_file), "--config", str(config), "-l", "300", "--output", "json"])
        params = json.loads(capsys.readouterr().out)["params"]
        assert params["min_output_score"] == 300
        assert params["fixed_separation"] == 9

    def test_check_labels_passes(self, match_file, capsys):
        main(["chain", "-C", str(match_file)])
        assert capsys.readouterr().out.startswith("> query1")

    def test_check_labels_fails(self, tmp_path, capsys):
        p = tmp_path / "bad.txt"
        p.write_text("> a\n> b\n")
        with pytest.raises(SystemExit) as exc:
            main(["chain", "-C", str(p)])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["chain", str(tmp_path / "missing.txt")])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_parameter(self, match_file, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["chain", str(match_file), "-d", "-3"])
        assert exc.value.code == 1


class TestOtherCommands:
    def test_no_command(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 0
        assert "gapchain" in capsys.readouterr().out

    def test_stats(self, match_file, capsys):
        main(["stats", str(match_file)])
        out = capsys.readouterr().out.splitlines()
        assert out[0].split("\t")[0] == "label"
        assert out[1].split("\t") == ["> query1", "3", "3", "1", "1", "250"]
        assert out[2].split("\t") == ["> query1 Reverse", "0", "0", "0", "0", "0"]
        assert out[3].split("\t") == ["> query2", "2", "2", "1", "1", "270"]
