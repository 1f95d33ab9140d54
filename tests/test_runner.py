# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""Tests for the benchmark runner."""

import pytest
from conftest import AlternatingClock, StubSteeringFunction, counting_provider

from steering_benchmark.driver import Operation
from steering_benchmark.errors import ConfigurationError
from steering_benchmark.records import read_records
from steering_benchmark.runner import BenchmarkRunner
from steering_benchmark.schema import RecordsConfig, TimingConfig
from steering_benchmark.steering_function import SteeringFunctionId

DUBINS = SteeringFunctionId.DUBINS
RS = SteeringFunctionId.RS


def make_config(**kwargs) -> TimingConfig:
    kwargs.setdefault("samples", 20)
    kwargs.setdefault("seed", 3)
    return TimingConfig(**kwargs)


class TestBenchmarkRunner:
    """Tests for BenchmarkRunner with stub steering functions."""

    def test_end_to_end(self, tmp_path, capsys):
        """Both scenarios run, print one line per identity and write control records."""
        config = make_config(
            records=RecordsConfig(enabled=True, output_dir=str(tmp_path))
        )
        stubs = {DUBINS: StubSteeringFunction(), RS: StubSteeringFunction(distance=4.0)}

        result = BenchmarkRunner(config, stubs, clock=AlternatingClock(0.01)).run()

        assert [s.operation for s in result.scenarios] == [
            Operation.CONTROLS,
            Operation.PATH,
        ]
        assert result.n_failures == 0
        controls, path = result.scenarios
        assert [r.steering_id for r in controls.results] == [DUBINS, RS]
        for r in controls.results:
            assert r.timing.mean == pytest.approx(0.01)
            assert r.timing.std == pytest.approx(0.0, abs=1e-12)
            assert r.timing.count == 20
            assert r.record_file == tmp_path / f"{r.steering_id}_stats.csv"
        assert controls.results[1].path_length.mean == pytest.approx(4.0)
        assert all(r.path_length is None for r in path.results)
        assert all(r.record_file is None for r in path.results)

        records = read_records(tmp_path / "Dubins_stats.csv")
        assert len(records) == 20
        assert sorted(p.name for p in tmp_path.iterdir()) == [
            "Dubins_stats.csv",
            "RS_stats.csv",
        ]

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 4
        assert lines[0].startswith("Dubins mean [s] +/- std [s]: 0.01 +/- ")
        assert lines[1].startswith("RS mean [s] +/- std [s]: 0.01 +/- ")

    def test_scenarios_share_workload(self):
        """Every scenario and every steering function sees the same query pairs."""
        stubs = {DUBINS: StubSteeringFunction(), RS: StubSteeringFunction()}

        BenchmarkRunner(make_config(), stubs).run()

        def pairs(stub, kind):
            return [(s, g) for k, s, g in stub.calls if k == kind]

        expected = pairs(stubs[DUBINS], "controls")
        assert len(expected) == 20
        assert pairs(stubs[DUBINS], "path") == expected
        assert pairs(stubs[RS], "controls") == expected
        assert pairs(stubs[RS], "path") == expected

    def test_workload_reproducible(self):
        """The workload depends on the seed only."""
        runner = BenchmarkRunner(make_config(), {DUBINS: StubSteeringFunction()})

        assert runner.generate_workload().pairs == runner.generate_workload().pairs

        other = BenchmarkRunner(make_config(seed=4), {DUBINS: StubSteeringFunction()})
        assert other.generate_workload().pairs != runner.generate_workload().pairs

    def test_selected_operations(self):
        """Only the configured scenarios run."""
        stub = StubSteeringFunction()

        result = BenchmarkRunner(
            make_config(operations=["path"]), {DUBINS: stub}
        ).run()

        assert [s.operation for s in result.scenarios] == [Operation.PATH]
        assert {kind for kind, _, _ in stub.calls} == {"path"}


class TestFailures:
    """Tests for failure handling in the runner."""

    def test_unconstructed_identity_isolated(self, capsys):
        """Requested identities without an instance fail alone."""
        config = make_config(implementations=["CC_RS", "Dubins"])

        result = BenchmarkRunner(config, {DUBINS: StubSteeringFunction()}).run()

        for scenario in result.scenarios:
            assert scenario.failed == [SteeringFunctionId.CC_RS]
            assert scenario.results[1].succeeded
        assert result.n_failures == 2
        out = capsys.readouterr().out
        assert "CC_RS mean" not in out
        assert out.count("Dubins mean [s] +/- std [s]") == 2

    def test_missing_backend_isolated(self):
        """Identities no backend provides are reported as failures."""
        config = make_config(samples=5, implementations=["HC00", "Dubins"])

        result = BenchmarkRunner(config).run()

        for scenario in result.scenarios:
            hc00, dubins = scenario.results
            assert "backend.provider" in hc00.error
            assert dubins.succeeded
            assert dubins.timing.count == 5

    def test_unknown_identity_isolated(self, capsys):
        """Unknown labels fail alone while the other identities run."""
        config = make_config(samples=5, implementations=["Dubins", "Spline"])

        runner = BenchmarkRunner(config)
        result = runner.run()

        assert runner.steering_ids == [DUBINS, "Spline"]
        for scenario in result.scenarios:
            dubins, spline = scenario.results
            assert dubins.succeeded
            assert spline.steering_id == "Spline"
            assert "Unknown steering function 'Spline'" in spline.error
            assert spline.timing is None
        assert result.n_failures == 2
        assert capsys.readouterr().out.count("Dubins mean [s] +/- std [s]") == 2

    def test_unknown_identity_with_prebuilt(self):
        """Unknown labels are isolated with injected steering functions too."""
        config = make_config(implementations=["Bezier", "Dubins"])

        result = BenchmarkRunner(config, {DUBINS: StubSteeringFunction()}).run()

        for scenario in result.scenarios:
            assert scenario.failed == ["Bezier"]

    def test_record_write_failure_isolated(self, tmp_path, capsys):
        """A failing record write marks only that identity and keeps its timing."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        config = make_config(
            operations=["controls"],
            records=RecordsConfig(enabled=True, output_dir=str(blocker / "records")),
        )
        stubs = {DUBINS: StubSteeringFunction(), RS: StubSteeringFunction()}

        result = BenchmarkRunner(config, stubs, clock=AlternatingClock(0.01)).run()

        dubins, rs = result.scenarios[0].results
        assert "Failed to write records" in dubins.error
        assert dubins.timing.mean == pytest.approx(0.01)
        assert dubins.record_file is None
        assert len(stubs[RS].calls) == 2 * 20
        assert rs.timing is not None
        assert result.n_failures == 2
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("Dubins mean [s] +/- std [s]: 0.01 +/- ")
        assert lines[1].startswith("RS mean [s] +/- std [s]: 0.01 +/- ")

    def test_exceptions_propagate(self):
        """Steering function exceptions abort the benchmark by default."""
        stubs = {DUBINS: StubSteeringFunction(fail_on_call=3)}

        with pytest.raises(RuntimeError):
            BenchmarkRunner(make_config(), stubs).run()

    def test_isolate_failures(self):
        """With isolate_failures, a failing steering function does not stop the others."""
        stubs = {
            DUBINS: StubSteeringFunction(fail_on_call=3),
            RS: StubSteeringFunction(),
        }

        result = BenchmarkRunner(make_config(isolate_failures=True), stubs).run()

        for scenario in result.scenarios:
            failing, ok = scenario.results
            assert failing.error.startswith("RuntimeError")
            assert failing.timing is None
            assert ok.succeeded

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"samples": 0},
            {"clock": "sundial"},
            {"operations": ["controls", "distance"]},
        ],
    )
    def test_invalid_config(self, kwargs):
        with pytest.raises(ConfigurationError):
            BenchmarkRunner(make_config(**kwargs), {DUBINS: StubSteeringFunction()})

    def test_nothing_selected(self):
        """An empty selection is a configuration error."""
        with pytest.raises(ConfigurationError):
            BenchmarkRunner(make_config(), {})

    @pytest.mark.parametrize("prebuilt", [True, False])
    def test_explicitly_empty_selection(self, prebuilt):
        """An empty implementations list does not fall back to every identity."""
        stubs = {DUBINS: StubSteeringFunction()} if prebuilt else None

        with pytest.raises(ConfigurationError, match="No steering functions"):
            BenchmarkRunner(make_config(implementations=[]), stubs)


class TestBuiltinRun:
    """Tests for BenchmarkRunner with the built-in backend."""

    def test_default_selection(self):
        """Without a selection every buildable identity is benchmarked."""
        runner = BenchmarkRunner(make_config(samples=10))

        assert runner.steering_ids == [
            SteeringFunctionId.DUBINS,
            SteeringFunctionId.DUBINS_BACKWARDS,
            SteeringFunctionId.RS,
        ]

        result = runner.run()
        assert result.n_failures == 0
        for r in result.scenarios[0].results:
            assert r.timing.mean >= 0.0
            assert r.path_length.mean > 0.0

    def test_provider_from_config(self):
        """Providers named in the config supply extra identities."""
        config = make_config(samples=5, implementations=["CC_RS"])
        config.backend.provider = "conftest:stub_provider"

        result = BenchmarkRunner(config).run()

        controls = result.scenarios[0].results[0]
        assert controls.succeeded
        assert controls.path_length.mean == pytest.approx(7.0)

    def test_default_selection_constructs_once(self):
        """Every steering function is constructed exactly once per runner."""
        counting_provider.calls.clear()
        config = make_config(samples=5)
        config.backend.provider = "conftest:counting_provider"

        runner = BenchmarkRunner(config)
        runner.run()

        assert counting_provider.calls == {i: 1 for i in SteeringFunctionId}
        assert runner.steering_ids == [
            SteeringFunctionId.DUBINS,
            SteeringFunctionId.DUBINS_BACKWARDS,
            SteeringFunctionId.CC_RS,
            SteeringFunctionId.RS,
        ]

    def test_default_selection_with_broken_identity(self):
        """A provider broken for one identity fails only that identity."""
        config = make_config(samples=5)
        config.backend.provider = "conftest:hc00_broken_provider"

        runner = BenchmarkRunner(config)
        result = runner.run()

        assert SteeringFunctionId.HC00 in runner.steering_ids
        for scenario in result.scenarios:
            assert scenario.failed == [SteeringFunctionId.HC00]
            failed = next(
                r for r in scenario.results if r.steering_id == SteeringFunctionId.HC00
            )
            assert "lacks" in failed.error
        assert result.n_failures == 2
