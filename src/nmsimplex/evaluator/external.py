"""
Evaluator that runs an external simulation program.

For every candidate the evaluator writes a parameter file through a
TemplateScanner, runs a command on it and reads the objective value back
from the program's output. Process failures (non-zero exit, timeout,
missing executable) propagate as the usual subprocess exceptions.
"""
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

from nmsimplex.core import DimensionMismatch, OutputParseError, TemplateError, Vector

from .evaluator import Evaluator
from .template import TemplateScanner


def parse_last_float(text: str) -> float:
    """
    Parse the last non-empty line of text as a float.

    Raises:
        OutputParseError: If there is no such line or it is not a number.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        raise OutputParseError("Evaluation produced no output")
    try:
        return float(lines[-1])
    except ValueError as exc:
        raise OutputParseError(
            f"Cannot read objective value from {lines[-1]!r}"
        ) from exc


class ExternalEvaluator(Evaluator):
    """
    Evaluate the objective by running an external program.

    Every ``{input}`` in a command argument is replaced by the path of the
    written parameter file, so ``["deform", "{input}"]`` runs
    ``deform input.txt``. Other braces are passed through unchanged.

    Attributes:
        parameter_names: Template tag name for each coordinate.
        command: Command line, one string per argument.
        scanner: TemplateScanner writing the parameter file.
        output_parser: Function turning output text into the objective value.
        output_file: File to parse instead of stdout (None = stdout).
        timeout: Seconds before the process is killed (None = no limit).

    Example:
        >>> scanner = TemplateScanner(input_file="input")
        >>> evaluator = ExternalEvaluator(
        ...     parameter_names=["var1", "var2", "var3"],
        ...     command=["deform", "{input}"],
        ...     scanner=scanner,
        ... )
        >>> value = evaluator([13.0, 2.7, 28.5])
    """

    def __init__(
        self,
        parameter_names: Sequence[str],
        command: Sequence[str],
        scanner: Optional[TemplateScanner] = None,
        output_parser: Optional[Callable[[str], float]] = None,
        output_file: Optional[Union[str, Path]] = None,
        timeout: Optional[float] = None,
        cwd: Optional[Union[str, Path]] = None,
    ) -> None:
        """
        Initialize external evaluator.

        Raises:
            ValueError: If parameter_names or command is empty, or timeout
                is not positive.
        """
        super().__init__()
        if not parameter_names:
            raise ValueError("parameter_names cannot be empty")
        if isinstance(command, str):
            command = [command]
        if not command:
            raise ValueError("command cannot be empty")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        self.parameter_names: List[str] = list(parameter_names)
        self.command: List[str] = list(command)
        self.scanner = scanner or TemplateScanner()
        self.output_parser = output_parser or parse_last_float
        self.output_file = Path(output_file) if output_file is not None else None
        self.timeout = timeout
        self.cwd = cwd

    def parameters_for(self, point: Vector) -> Dict[str, float]:
        """Map point coordinates onto the template tag names."""
        if len(point) != len(self.parameter_names):
            raise DimensionMismatch(
                f"Expected {len(self.parameter_names)} coordinates, got {len(point)}"
            )
        return {name: float(x) for name, x in zip(self.parameter_names, point)}

    def _evaluate(self, point: Vector) -> float:
        input_path = self.scanner.write_input(self.parameters_for(point))
        if self.scanner.error_count:
            raise TemplateError(
                f"{self.scanner.error_count} unresolved tag(s) in "
                f"{self.scanner.template_path}"
            )

        input_text = str(input_path.resolve())
        args = [arg.replace("{input}", input_text) for arg in self.command]
        completed = subprocess.run(
            args,
            capture_output=True,
            text=True,
            check=True,
            timeout=self.timeout,
            cwd=self.cwd,
        )

        if self.output_file is not None:
            output_path = self.output_file
            if self.cwd is not None and not output_path.is_absolute():
                output_path = Path(self.cwd) / output_path
            text = output_path.read_text()
        else:
            text = completed.stdout
        return self.output_parser(text)

    def get_name(self) -> str:
        return f"ExternalEvaluator({' '.join(self.command)})"
