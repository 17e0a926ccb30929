"""Tests for the pfm-normalize command line."""

import json

import pytest
import numpy as np
from click.testing import CliRunner

from pfm_normalize.cli.normalize import main
from pfm_normalize.io.image_io import load_image


@pytest.fixture
def runner(monkeypatch):
    for var in ('PFM_NORMALIZE_EPSILON', 'PFM_NORMALIZE_IGNORE', 'PFM_NORMALIZE_CLAMP'):
        monkeypatch.delenv(var, raising=False)
    return CliRunner()


class TestNormalizeCli:
    """Tests for the main command."""

    def test_normalizes_file(self, runner, ramp_pfm, temp_output_dir):
        out = temp_output_dir / "out.pfm"

        result = runner.invoke(main, [str(ramp_pfm), str(out)])

        assert result.exit_code == 0, result.output
        values = load_image(out).values()
        assert values[0] == 0.0
        assert values[9] == 1.0

    def test_epsilon_and_clamp(self, runner, ramp_pfm, temp_output_dir):
        out = temp_output_dir / "out.pfm"

        result = runner.invoke(main, ['-e', '0.2', '-c', str(ramp_pfm), str(out)])

        assert result.exit_code == 0, result.output
        values = load_image(out).values()
        assert values[0] == 0.0
        assert values[1] == 0.0
        assert values[8] == 1.0
        assert values[9] == 1.0

    def test_epsilon_discard_uses_ignore_value(self, runner, ramp_pfm, temp_output_dir):
        out = temp_output_dir / "out.pfm"

        result = runner.invoke(main, ['-e', '0.2', '--ignore=-5', str(ramp_pfm), str(out)])

        assert result.exit_code == 0, result.output
        values = load_image(out).values()
        assert values[0] == -5.0
        assert values[9] == -5.0

    def test_reference_images(self, runner, ramp_pfm, write_pfm, temp_output_dir):
        other = write_pfm("other.pfm", np.array([[18.0]], dtype=np.float32))
        out = temp_output_dir / "out.pfm"

        result = runner.invoke(main, ['--images', f"{other},{ramp_pfm}", str(ramp_pfm), str(out)])

        assert result.exit_code == 0, result.output
        assert load_image(out).values()[9] == 0.5

    def test_report_written(self, runner, ramp_pfm, temp_output_dir):
        out = temp_output_dir / "out.pfm"
        report = temp_output_dir / "report.json"

        result = runner.invoke(main, ['-q', '--minimum', '2', '--report', str(report),
                                      str(ramp_pfm), str(out)])

        assert result.exit_code == 0, result.output
        data = json.loads(report.read_text())
        assert data["minimum"] == 2.0
        assert data["maximum"] == 9.0
        assert data["outliers"] == 2
        assert data["valid_values"] == 10

    def test_config_file(self, runner, ramp_pfm, temp_output_dir, temp_config_file):
        out = temp_output_dir / "out.pfm"

        result = runner.invoke(main, ['--config', str(temp_config_file), str(ramp_pfm), str(out)])

        assert result.exit_code == 0, result.output
        values = load_image(out).values()
        assert values[0] == 0.0
        assert values[9] == 1.0

    def test_epsilon_out_of_range(self, runner, ramp_pfm, temp_output_dir):
        out = temp_output_dir / "out.pfm"

        result = runner.invoke(main, ['-e', '1.5', str(ramp_pfm), str(out)])

        assert result.exit_code == 2
        assert "epsilon" in result.output
        assert not out.exists()

    @pytest.mark.parametrize("option", ["--minimum", "--maximum"])
    def test_nan_override_rejected(self, runner, ramp_pfm, temp_output_dir, option):
        out = temp_output_dir / "out.pfm"

        result = runner.invoke(main, [option, "nan", str(ramp_pfm), str(out)])

        assert result.exit_code == 2
        assert not out.exists()

    def test_inverted_overrides(self, runner, ramp_pfm, temp_output_dir):
        out = temp_output_dir / "out.pfm"

        result = runner.invoke(main, ['--minimum', '3', '--maximum', '2', str(ramp_pfm), str(out)])

        assert result.exit_code == 2
        assert not out.exists()

    def test_requires_two_arguments(self, runner, ramp_pfm):
        result = runner.invoke(main, [str(ramp_pfm)])
        assert result.exit_code == 2

    def test_missing_input_fails(self, runner, temp_output_dir):
        out = temp_output_dir / "out.pfm"

        result = runner.invoke(main, [str(temp_output_dir / "missing.pfm"), str(out)])

        assert result.exit_code == 1
        assert not out.exists()

    def test_unsupported_output_fails(self, runner, ramp_pfm, temp_output_dir):
        result = runner.invoke(main, [str(ramp_pfm), str(temp_output_dir / "out.png")])
        assert result.exit_code == 1

    def test_unwritable_report_fails(self, runner, ramp_pfm, temp_output_dir):
        blocker = temp_output_dir / "blocker"
        blocker.write_text("a file, not a directory")

        result = runner.invoke(main, ['--report', str(blocker / "report.json"),
                                      str(ramp_pfm), str(temp_output_dir / "out.pfm")])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
