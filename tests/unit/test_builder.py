"""
Unit tests for builder module.
"""
import sys

import numpy as np
import pytest

from nmsimplex.builder import (
    axis_simplex,
    build_evaluator_from_config,
    build_optimizer_from_config,
    load_and_run,
    load_yaml,
)
from nmsimplex.core import ArityMismatch, ConfigurationError, DimensionMismatch
from nmsimplex.evaluator import ExternalEvaluator
from nmsimplex.observer import HistoryObserver, PrintObserver


# =============================================================================
# Start Point Tests
# =============================================================================


class TestAxisSimplex:
    """Tests for axis_simplex."""

    def test_scalar_step(self) -> None:
        points = axis_simplex([1.0, 2.0], 0.5)
        assert len(points) == 3
        np.testing.assert_array_equal(points[0], [1.0, 2.0])
        np.testing.assert_array_equal(points[1], [1.5, 2.0])
        np.testing.assert_array_equal(points[2], [1.0, 2.5])

    def test_vector_step(self) -> None:
        points = axis_simplex([0.0, 0.0, 0.0], [1.0, -2.0, 3.0])
        np.testing.assert_array_equal(points[2], [0.0, -2.0, 0.0])
        np.testing.assert_array_equal(points[3], [0.0, 0.0, 3.0])

    def test_points_read_only(self) -> None:
        points = axis_simplex([1.0, 2.0], 1.0)
        with pytest.raises(ValueError):
            points[1][0] = 0.0

    def test_step_size_mismatch(self) -> None:
        with pytest.raises(DimensionMismatch):
            axis_simplex([0.0, 0.0], [1.0, 1.0, 1.0])

    @pytest.mark.parametrize("step", [0.0, [1.0, 0.0]])
    def test_zero_step(self, step) -> None:
        with pytest.raises(ConfigurationError):
            axis_simplex([0.0, 0.0], step)


# =============================================================================
# Config Loader Tests
# =============================================================================


class TestLoadYaml:
    """Tests for load_yaml."""

    def test_load(self, tmp_path) -> None:
        pytest.importorskip("yaml")
        path = tmp_path / "config.yaml"
        path.write_text("optimizer:\n  tolerance: 1.0e-5\n")
        assert load_yaml(path) == {"optimizer": {"tolerance": 1e-5}}

    def test_top_level_must_be_mapping(self, tmp_path) -> None:
        pytest.importorskip("yaml")
        path = tmp_path / "config.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_yaml(path)

    def test_malformed_yaml(self, tmp_path) -> None:
        pytest.importorskip("yaml")
        path = tmp_path / "config.yaml"
        path.write_text("optimizer: [1, 2\n")
        with pytest.raises(ConfigurationError, match="invalid YAML"):
            load_yaml(path)


class TestBuildOptimizer:
    """Tests for build_optimizer_from_config."""

    def test_explicit_start_points(self) -> None:
        config = {
            "optimizer": {"tolerance": 1e-5, "expansion_factor": 2.0},
            "start_points": [[10, 37], [7, 2], [51, 32]],
        }
        opt = build_optimizer_from_config(config)
        assert opt.config.dimension == 3
        assert opt.config.tolerance == 1e-5
        assert opt.config.expansion_factor == 2.0
        assert len(opt.start_points) == 3

    def test_origin_and_step(self) -> None:
        config = {"initial": {"origin": [1.0, 1.0, 1.0], "step": 0.1}}
        opt = build_optimizer_from_config(config)
        assert opt.config.dimension == 4
        np.testing.assert_array_almost_equal(opt.start_points[3], [1.0, 1.0, 1.1])

    def test_default_step(self) -> None:
        opt = build_optimizer_from_config({"initial": {"origin": [0.0]}})
        np.testing.assert_array_equal(opt.start_points[1], [1.0])

    def test_explicit_dimension_must_match(self) -> None:
        config = {
            "optimizer": {"dimension": 4},
            "start_points": [[10, 37], [7, 2], [51, 32]],
        }
        with pytest.raises(ArityMismatch):
            build_optimizer_from_config(config)

    @pytest.mark.parametrize(
        "config",
        [
            {},
            {"start_points": "[[0, 0]]"},
            {"initial": {"step": 1.0}},
            {"optimizer": {"tol": 1e-3}, "start_points": [[0.0], [1.0]]},
            {"optimizer": [1e-3], "start_points": [[0.0], [1.0]]},
            {"observers": "quiet", "start_points": [[0.0], [1.0]]},
            {"initial": None},
            {"observers": {"print_interval": 0}, "start_points": [[0.0], [1.0]]},
            {"observers": {"print_interval": "5"}, "start_points": [[0.0], [1.0]]},
        ],
    )
    def test_invalid(self, config) -> None:
        with pytest.raises(ConfigurationError):
            build_optimizer_from_config(config)

    def test_default_observers(self) -> None:
        opt = build_optimizer_from_config({"start_points": [[0.0], [1.0]]})
        assert len(opt.observers) == 1
        assert isinstance(opt.observers[0], PrintObserver)

    def test_configured_observers(self) -> None:
        config = {
            "start_points": [[0.0], [1.0]],
            "observers": {"print": True, "print_interval": 10, "history": True},
        }
        opt = build_optimizer_from_config(config)
        assert opt.observers[0].interval == 10
        assert isinstance(opt.observers[1], HistoryObserver)

    def test_silent(self) -> None:
        config = {"start_points": [[0.0], [1.0]], "observers": {"print": False}}
        assert build_optimizer_from_config(config).observers == []

    def test_empty_sections(self) -> None:
        """Keys written without a body (YAML null) fall back to defaults."""
        config = {"start_points": [[0.0], [1.0]], "optimizer": None, "observers": None}
        opt = build_optimizer_from_config(config)
        assert opt.config.tolerance == 0.001
        assert isinstance(opt.observers[0], PrintObserver)


class TestBuildEvaluator:
    """Tests for build_evaluator_from_config."""

    def test_external(self, tmp_path) -> None:
        config = {
            "evaluator": {
                "type": "external",
                "command": ["deform", "{input}"],
                "parameters": ["var1", "var2"],
                "template": {"input_file": str(tmp_path / "input"), "in_ext": "in"},
                "output_file": "result.txt",
                "timeout": 60,
            }
        }
        evaluator = build_evaluator_from_config(config)
        assert isinstance(evaluator, ExternalEvaluator)
        assert evaluator.parameter_names == ["var1", "var2"]
        assert evaluator.scanner.template_path == tmp_path / "input.in"
        assert evaluator.output_file.name == "result.txt"
        assert evaluator.timeout == 60

    @pytest.mark.parametrize(
        "config",
        [
            {},
            {"evaluator": {"type": "python", "command": ["x"], "parameters": ["a"]}},
            {"evaluator": {"command": ["x"]}},
            {"evaluator": {"parameters": ["a"]}},
            {"evaluator": None},
            {"evaluator": {"command": ["x"], "parameters": ["a"], "template": {"bogus": 1}}},
            {"evaluator": {"command": ["x"], "parameters": ["a"], "template": "input"}},
            {"evaluator": {"command": ["x"], "parameters": ["a"], "timeout": 0}},
            {"evaluator": {"command": ["x"], "parameters": ["a"], "timeout": "abc"}},
            {
                "evaluator": {
                    "command": ["x"],
                    "parameters": ["a"],
                    "template": {"in_ext": "txt", "out_ext": "txt"},
                }
            },
        ],
    )
    def test_invalid(self, config) -> None:
        with pytest.raises(ConfigurationError):
            build_evaluator_from_config(config)


class TestLoadAndRun:
    """Tests for load_and_run with a Python script as the external program."""

    def write_setup(self, tmp_path, run_section="run:\n  max_steps: 500\n") -> None:
        (tmp_path / "input.tpl").write_text("x = <$x$>\ny = <$y$>\n")
        (tmp_path / "bowl.py").write_text(
            "import sys\n"
            "v = {}\n"
            "for line in open(sys.argv[1]):\n"
            "    k, x = line.split('=')\n"
            "    v[k.strip()] = float(x)\n"
            "print(v['x'] ** 2 + v['y'] ** 2)\n"
        )
        (tmp_path / "config.yaml").write_text(
            "optimizer:\n"
            "  tolerance: 1.0e-5\n"
            "start_points:\n"
            "  - [10, 37]\n"
            "  - [7, 2]\n"
            "  - [51, 32]\n"
            "observers:\n"
            "  print: false\n"
            "evaluator:\n"
            f"  command: [{sys.executable!r}, {str(tmp_path / 'bowl.py')!r}, '{{input}}']\n"
            "  parameters: [x, y]\n"
            "  template:\n"
            f"    input_file: {str(tmp_path / 'input')!r}\n"
            + run_section
        )

    def test_runs_to_convergence(self, tmp_path) -> None:
        pytest.importorskip("yaml")
        self.write_setup(tmp_path)
        result = load_and_run(tmp_path / "config.yaml")
        assert result.converged
        np.testing.assert_allclose(result.best_point, [0.0, 0.0], atol=1e-2)

    def test_max_steps_override(self, tmp_path) -> None:
        pytest.importorskip("yaml")
        self.write_setup(tmp_path)
        result = load_and_run(tmp_path / "config.yaml", max_steps=4)
        assert not result.converged
        assert result.n_steps == 4
        assert result.n_evaluations == 4

    def test_empty_run_section(self, tmp_path) -> None:
        pytest.importorskip("yaml")
        self.write_setup(tmp_path, run_section="run:\n")
        result = load_and_run(tmp_path / "config.yaml")
        assert result.converged

    def test_max_steps_must_be_integer(self, tmp_path) -> None:
        pytest.importorskip("yaml")
        self.write_setup(tmp_path, run_section="run:\n  max_steps: lots\n")
        with pytest.raises(ConfigurationError, match="max_steps"):
            load_and_run(tmp_path / "config.yaml")
