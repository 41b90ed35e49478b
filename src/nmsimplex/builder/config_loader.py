"""
Configuration loader for YAML-based optimization setup.

Provides functions to build an Optimizer and an external Evaluator from
a YAML file and to run the whole optimization from it.
"""
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from nmsimplex.core import ConfigurationError
from nmsimplex.evaluator import ExternalEvaluator, TemplateScanner
from nmsimplex.observer import HistoryObserver, Observer, PrintObserver
from nmsimplex.optimizer import OptimizationResult, Optimizer, OptimizerConfig

from .simplex_builder import axis_simplex


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        path: Path to YAML file.

    Returns:
        Dictionary with configuration.
    """
    try:
        import yaml
    except ImportError:
        raise ImportError("PyYAML is required: pip install pyyaml")

    with open(path, "r") as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"{path}: invalid YAML: {exc}") from exc
    if not isinstance(config, dict):
        raise ConfigurationError(f"{path}: expected a mapping at top level")
    return config


def _section(config: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Return an optional mapping section; an empty section counts as absent."""
    section = config.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{key}' must be a mapping, got {section!r}")
    return section


def _parse_start_points(config: Dict[str, Any]) -> List[List[float]]:
    """Parse explicit start points or an origin/step pair."""
    if "start_points" in config:
        points = config["start_points"]
        if not isinstance(points, list):
            raise ConfigurationError("'start_points' must be a list of points")
        return points

    initial = _section(config, "initial")
    if not initial:
        raise ConfigurationError("Config needs either 'start_points' or 'initial'")
    if "origin" not in initial:
        raise ConfigurationError("'initial' needs an 'origin'")
    return axis_simplex(initial["origin"], initial.get("step", 1.0))


def _parse_observers(config: Dict[str, Any]) -> List[Observer]:
    """Parse observers from config."""
    obs_config = _section(config, "observers")
    observers: List[Observer] = []
    if obs_config.get("print", True):
        interval = obs_config.get("print_interval", 1)
        if isinstance(interval, bool) or not isinstance(interval, int) or interval < 1:
            raise ConfigurationError(
                f"'print_interval' must be a positive integer, got {interval!r}"
            )
        observers.append(PrintObserver(interval=interval))
    if obs_config.get("history", False):
        observers.append(HistoryObserver())
    return observers


def build_optimizer_from_config(config: Dict[str, Any]) -> Optimizer:
    """
    Build an Optimizer with its start points from a configuration dictionary.

    The simplex dimension defaults to the number of start points.

    Args:
        config: Configuration dictionary (typically from YAML).

    Returns:
        Optimizer ready to run.

    Example config:
        optimizer:
          tolerance: 1.0e-5
          expansion_factor: 1.5
          contraction_factor: 0.5
        start_points:
          - [10, 37]
          - [7, 2]
          - [51, 32]
        observers:
          print: true
          history: false
    """
    start_points = _parse_start_points(config)

    opt_config = dict(_section(config, "optimizer"))
    opt_config.setdefault("dimension", len(start_points))
    optimizer = Optimizer.from_config(
        OptimizerConfig.from_dict(opt_config),
        observers=_parse_observers(config),
    )
    optimizer.start_points = start_points
    return optimizer


def build_evaluator_from_config(config: Dict[str, Any]) -> ExternalEvaluator:
    """
    Build an ExternalEvaluator from the ``evaluator`` section.

    Example config:
        evaluator:
          type: external
          command: ["deform", "{input}"]
          parameters: [var1, var2, var3]
          template:
            input_file: input
            tag_open: "<$"
            tag_close: "$>"
          output_file: result.txt
          timeout: 600
    """
    eval_config = _section(config, "evaluator")
    if not eval_config:
        raise ConfigurationError("Config has no 'evaluator' section")

    eval_type = str(eval_config.get("type", "external")).lower()
    if eval_type != "external":
        raise ConfigurationError(f"Unknown evaluator type: {eval_type}")

    for key in ("command", "parameters"):
        if key not in eval_config:
            raise ConfigurationError(f"External evaluator needs '{key}'")

    template = _section(eval_config, "template")
    try:
        scanner = TemplateScanner(**template)
        return ExternalEvaluator(
            parameter_names=eval_config["parameters"],
            command=eval_config["command"],
            scanner=scanner,
            output_file=eval_config.get("output_file"),
            timeout=eval_config.get("timeout"),
            cwd=eval_config.get("cwd"),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid evaluator configuration: {exc}") from exc


def load_and_run(
    path: Union[str, Path],
    max_steps: Optional[int] = None,
) -> OptimizationResult:
    """
    Load configuration from YAML and run the optimization.

    Args:
        path: Path to YAML configuration file.
        max_steps: Step cap; overrides ``run.max_steps`` from the file.

    Returns:
        OptimizationResult of the run.
    """
    config = load_yaml(path)
    optimizer = build_optimizer_from_config(config)
    evaluator = build_evaluator_from_config(config)

    run_config = _section(config, "run")
    if max_steps is None:
        max_steps = run_config.get("max_steps")
    if max_steps is not None and (
        isinstance(max_steps, bool) or not isinstance(max_steps, int)
    ):
        raise ConfigurationError(f"max_steps must be an integer, got {max_steps!r}")

    return optimizer.run(evaluator, max_steps=max_steps)
