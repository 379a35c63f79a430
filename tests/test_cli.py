"""Tests for the command line entry point."""

import json
from unittest.mock import patch

import pytest
from contrib_terrain.cli import main, parse_args, settings
from contrib_terrain.github.fetch import ContributionFetchError


class TestParseArgs:
    def test_defaults(self):
        args = parse_args(["alice"])

        assert args.username == "alice"
        assert args.rotation == -30.5
        assert not args.sample
        assert not args.contours
        assert args.output is None
        assert args.style == "graph"

    def test_unknown_style_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["alice", "--style", "bars"])


class TestMain:
    """Test end-to-end runs of the CLI."""

    def test_sample_run(self, tmp_path, capsys):
        output = tmp_path / "out.svg"

        assert main(["alice", "--sample", "--seed", "1", "--output", str(output)]) == 0

        assert output.read_text(encoding="utf-8").startswith("<?xml")
        stdout = capsys.readouterr().out
        assert "Total contributions:" in stdout
        assert f"Saved SVG to {output}" in stdout

    def test_input_file(self, tmp_path, api_payload):
        source = tmp_path / "response.json"
        source.write_text(json.dumps(api_payload), encoding="utf-8")
        output = tmp_path / "out.svg"

        assert main(["alice", "--input", str(source), "--style", "terrain", "--contours", "--no-credit", "--output", str(output)]) == 0

        svg = output.read_text(encoding="utf-8")
        assert "alice" in svg
        assert "generated by" not in svg

    def test_invalid_input(self, tmp_path):
        source = tmp_path / "response.json"
        source.write_text(json.dumps({"data": {}}), encoding="utf-8")

        assert main(["alice", "--input", str(source), "--output", str(tmp_path / "out.svg")]) == 1

    def test_fetch_failure(self, tmp_path):
        with patch(
            "contrib_terrain.cli.retrieve_contribution_data",
            side_effect=ContributionFetchError("Missing GitHub token"),
        ):
            assert main(["alice", "--output", str(tmp_path / "out.svg")]) == 1

    @pytest.mark.parametrize("style, title", [
        ("graph", "GitHub Contribution Graph"),
        ("terrain", "GitHub Contribution Terrain"),
    ])
    def test_style_picks_generator_and_filename(self, tmp_path, monkeypatch, style, title):
        monkeypatch.setattr(settings, "output_dir", str(tmp_path))

        assert main(["alice", "--sample", "--seed", "3", "--style", style]) == 0

        output = tmp_path / f"{style}-alice.svg"
        assert output.exists()
        assert f"{title} for alice" in output.read_text(encoding="utf-8")
