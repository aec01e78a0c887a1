"""
Tests for CLI functionality: text shell, replay and display presets.
"""

import io
import json
import math

import pytest

from tapbpm.cli import main, parse_timestamps, replay_taps, run_text_shell
from tapbpm.config import PRESETS, DisplayConfig, format_stats, get_preset, list_presets
from tapbpm.core.statistics import TapStats


class TestDisplayPresets:
    """Test display configuration."""

    def test_classic_renders_unset_as_zero(self):
        lines = format_stats(TapStats(), get_preset("classic"))
        assert lines == ["Lower 95% CI: 0.00", "BPM: 0.00", "Upper 95% CI: 0.00"]

    def test_two_decimal_precision(self):
        stats = TapStats(bpm=120.0, ci_low=118.2, ci_high=121.849)
        lines = format_stats(stats)
        assert lines == ["Lower 95% CI: 118.20", "BPM: 120.00", "Upper 95% CI: 121.85"]

    def test_blank_placeholder(self):
        lines = format_stats(TapStats(bpm=90.0), get_preset("blank"))
        assert lines == ["Lower 95% CI: --", "BPM: 90.00", "Upper 95% CI: --"]

    def test_precise_preset(self):
        assert get_preset("precise").format_value(66.666666) == "66.6667"

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            get_preset("fancy")

    def test_list_presets(self):
        presets = list_presets()
        assert set(presets) == set(PRESETS)
        assert presets["classic"]["placeholder"] == "0.00"


class TestTextShell:
    """Test the line-based text shell."""

    def test_each_line_is_a_tap(self, session, clock):
        """Test empty lines register taps and print three lines each."""
        output: list[str] = []

        def lines():
            for _ in range(4):
                yield ""
                clock.advance(0.5)

        taps = run_text_shell(session, lines(), write=output.append)

        assert taps == 4
        assert len(output) == 12
        assert output[-3:] == [
            "Lower 95% CI: 120.00",
            "BPM: 120.00",
            "Upper 95% CI: 120.00",
        ]

    def test_reset_command(self, session):
        output: list[str] = []

        taps = run_text_shell(session, ["t\n", "t\n", "reset\n"], write=output.append)

        assert taps == 2
        assert session.is_empty
        assert output[-3:] == format_stats(TapStats())

    def test_quit_stops_reading(self, session):
        taps = run_text_shell(session, ["t", "q", "t", "t"], write=lambda line: None)

        assert taps == 1
        assert session.tap_count == 1

    def test_unknown_command_prints_help(self, session):
        output: list[str] = []

        run_text_shell(session, ["bogus"], write=output.append)

        assert session.is_empty
        assert len(output) == 1
        assert "tap" in output[0]


class TestReplay:
    """Test replay of recorded timestamps."""

    def test_parse_skips_blank_lines(self):
        assert parse_timestamps(["0.0", " ", "0.5\n"]) == [0.0, 0.5]

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_timestamps(["0.0", "soon"])

    def test_replay_report(self):
        report = replay_taps([3.0, 4.0, 4.8])

        assert report.tap_count == 3
        assert report.taps == pytest.approx([0.0, 1.0, 1.8])
        assert report.summary.count == 2
        assert report.stats.bpm == pytest.approx(66.67, abs=0.01)
        assert report.stats.ci_low == pytest.approx(54.74, abs=0.01)
        assert report.stats.ci_high == pytest.approx(85.23, abs=0.01)

    def test_replay_needs_two_taps(self):
        with pytest.raises(ValueError):
            replay_taps([1.0])

    def test_replay_rejects_decreasing_timestamps(self):
        with pytest.raises(ValueError):
            replay_taps([0.0, 1.0, 0.5])

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf", "Infinity"])
    def test_parse_rejects_non_finite(self, value):
        with pytest.raises(ValueError, match="Invalid timestamp"):
            parse_timestamps(["0.0", value])


class TestMain:
    """Integration tests for the CLI entry point."""

    @pytest.fixture(autouse=True)
    def in_tmp_dir(self, tmp_path, monkeypatch):
        """Keep log files out of the working tree."""
        monkeypatch.chdir(tmp_path)

    def test_replay_json(self, capsys):
        code = main(["replay", "0.0", "0.5", "1.0", "1.5", "--json"])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["tap_count"] == 4
        assert data["stats"]["bpm"] == pytest.approx(120.0)
        assert data["stats"]["ci_low"] == pytest.approx(120.0)

    def test_replay_text_report(self, capsys):
        code = main(["--display", "blank", "replay", "0.0", "0.5"])

        assert code == 0
        out = capsys.readouterr().out
        assert "BPM: 120.00" in out
        assert "Lower 95% CI: --" in out

    def test_replay_from_stdin(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("0.0\n1.0\n1.8\n"))

        code = main(["replay"])

        assert code == 0
        assert "Upper 95% CI: 85.23" in capsys.readouterr().out

    def test_replay_error_exit_code(self, capsys):
        code = main(["replay", "1.0"])

        assert code == 2
        assert "Error" in capsys.readouterr().err

    def test_log_file_written(self, tmp_path):
        main(["replay", "0.0", "0.5"])
        assert (tmp_path / "logs" / "tapbpm.log").exists()

    def test_shell_is_default(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("\n\nq\n"))

        code = main([])

        assert code == 0
        out = capsys.readouterr().out
        assert out.count("BPM:") == 2

    def test_replay_json_keeps_infinite_bpm(self, capsys):
        """Test duplicate timestamps report an infinite BPM, not null."""
        code = main(["replay", "0.0", "0.0", "0.0", "--json"])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["stats"]["bpm"] == math.inf
        assert data["stats"]["ci_low"] is not None

    def test_replay_non_finite_timestamp(self, capsys):
        code = main(["replay", "0", "nan", "1"])

        assert code == 2
        err = capsys.readouterr().err
        assert "Invalid timestamp: 'nan'" in err
        assert "validation error" not in err

    def test_shell_display_option(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("\nq\n"))

        code = main(["shell", "--display", "blank"])

        assert code == 0
        assert "BPM: --" in capsys.readouterr().out

    def test_global_display_applies_to_shell(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("\nq\n"))

        main(["--display", "blank", "shell"])

        assert "BPM: --" in capsys.readouterr().out

    def test_shell_interrupt_exits_cleanly(self, capsys, monkeypatch):
        class InterruptedInput:
            def __iter__(self):
                yield "\n"
                raise KeyboardInterrupt

        monkeypatch.setattr("sys.stdin", InterruptedInput())

        code = main(["shell"])

        assert code == 0
        assert capsys.readouterr().out.count("BPM:") == 1

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])

        assert excinfo.value.code == 0
        assert "tapbpm 0.1.0" in capsys.readouterr().out

    def test_ui_command_launches_app(self, monkeypatch):
        launched = []
        monkeypatch.setattr(
            "tapbpm.ui.app.TapBpmApp.run",
            lambda self: launched.append(self.display_config),
        )

        code = main(["--display", "precise", "ui"])

        assert code == 0
        assert launched == [get_preset("precise")]


class TestCustomDisplay:
    """Test a hand-built display config."""

    def test_custom_labels(self):
        config = DisplayConfig(bpm_label="Tempo", placeholder="n/a")
        assert format_stats(TapStats(), config)[1] == "Tempo: n/a"
