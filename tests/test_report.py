# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""Tests for console reports and plots."""

from conftest import AlternatingClock, StubSteeringFunction

from steering_benchmark.report import (
    format_report_line,
    plot_timing_distributions,
    print_summary,
)
from steering_benchmark.runner import BenchmarkRunner
from steering_benchmark.schema import TimingConfig
from steering_benchmark.stats import SampleSummary
from steering_benchmark.steering_function import SteeringFunctionId


def run_stub_benchmark(**kwargs):
    config = TimingConfig(samples=10, description="stub run", **kwargs)
    stubs = {SteeringFunctionId.DUBINS: StubSteeringFunction()}
    return BenchmarkRunner(config, stubs, clock=AlternatingClock(0.01)).run()


class TestFormatReportLine:
    """Tests for format_report_line()."""

    def test_format(self):
        line = format_report_line("Dubins", SampleSummary(mean=0.01, std=0.0, count=3))

        assert line == "Dubins mean [s] +/- std [s]: 0.01 +/- 0"

    def test_six_significant_digits(self):
        line = format_report_line(
            SteeringFunctionId.HCPMPM,
            SampleSummary(mean=1.23456789e-5, std=2.5e-7, count=10),
        )

        assert line == "HCpmpm mean [s] +/- std [s]: 1.23457e-05 +/- 2.5e-07"


class TestPrintSummary:
    """Tests for print_summary()."""

    def test_summary(self, capsys):
        result = run_stub_benchmark(implementations=["Dubins", "HC00"])
        capsys.readouterr()

        print_summary(result)

        out = capsys.readouterr().out
        assert "Description: stub run" in out
        assert "timing of control computation" in out
        assert "timing of full path construction" in out
        assert "FAILED" in out
        assert "10000.00" in out


class TestPlotTimingDistributions:
    """Tests for plot_timing_distributions()."""

    def test_writes_png(self, tmp_path):
        result = run_stub_benchmark()

        path = plot_timing_distributions(
            result.scenarios[0], tmp_path / "plots" / "controls_timing.png"
        )

        assert path.exists()
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
