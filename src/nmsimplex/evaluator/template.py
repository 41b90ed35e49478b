"""
Template scanner for parameterized input files.

External simulation programs usually read their parameters from a text
file. The scanner fills a template in which parameters appear as tags,
``<$ name $>`` by default, and counts lines and unresolved tags.
"""
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Union

from nmsimplex.core import TypeMismatch


class TemplateScanner:
    """
    Writes ``<input_file>.<out_ext>`` from the template ``<input_file>.<in_ext>``.

    Tag names are alphanumeric; whitespace inside the tag delimiters is
    ignored. A tag whose name has no value is replaced by
    ``***ERROR: <tag>***`` and counted in error_count.

    Attributes:
        line_count: Lines written by the last write_input() call.
        error_count: Unresolved tags in the last write_input() call.

    Example:
        >>> scanner = TemplateScanner(input_file="run/input")
        >>> path = scanner.write_input({"var1": 13.0, "var2": 2.7})
        >>> scanner.error_count
        0
    """

    def __init__(
        self,
        input_file: Union[str, Path] = "input",
        tag_open: str = "<$",
        tag_close: str = "$>",
        in_ext: str = "tpl",
        out_ext: str = "txt",
        value_format: str = "{}",
    ) -> None:
        """
        Initialize scanner.

        Args:
            input_file: Path of the input file without extension.
            tag_open: Opening tag delimiter.
            tag_close: Closing tag delimiter.
            in_ext: Template file extension.
            out_ext: Written file extension.
            value_format: str.format pattern applied to every value.

        Raises:
            ValueError: If a delimiter is empty or the extensions coincide.
        """
        if not tag_open or not tag_close:
            raise ValueError("Tag delimiters cannot be empty")
        if in_ext == out_ext:
            raise ValueError(f"Template and output extension are both {in_ext!r}")

        self.input_file = Path(input_file)
        self.tag_open = tag_open
        self.tag_close = tag_close
        self.in_ext = in_ext
        self.out_ext = out_ext
        self.value_format = value_format
        self.line_count = 0
        self.error_count = 0
        self._pattern = re.compile(
            re.escape(tag_open) + r"\s*([a-zA-Z0-9]*)\s*" + re.escape(tag_close)
        )

    @property
    def template_path(self) -> Path:
        return self.input_file.with_name(f"{self.input_file.name}.{self.in_ext}")

    @property
    def output_path(self) -> Path:
        return self.input_file.with_name(f"{self.input_file.name}.{self.out_ext}")

    def substitute(self, line: str, values: Mapping) -> str:
        """Replace the tags of a single line, counting unresolved ones."""

        def _replace(match: re.Match) -> str:
            name = match.group(1)
            if name in values:
                return self.value_format.format(values[name])
            self.error_count += 1
            return f"***ERROR: {match.group(0)}***"

        return self._pattern.sub(_replace, line)

    def write_input(self, values: Mapping) -> Path:
        """
        Fill the template with values and write the input file.

        Args:
            values: Mapping of tag name to value.

        Returns:
            Path of the written file.

        Raises:
            TypeMismatch: If values is not a mapping.
            FileNotFoundError: If the template does not exist.
        """
        if not isinstance(values, Mapping):
            raise TypeMismatch(f"Expecting a mapping of tag values, got {values!r}")

        self.line_count = 0
        self.error_count = 0
        with open(self.template_path, "r") as src, open(self.output_path, "w") as dst:
            for line in src:
                dst.write(self.substitute(line, values))
                self.line_count += 1
        return self.output_path

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input_file": str(self.input_file),
            "tag_open": self.tag_open,
            "tag_close": self.tag_close,
            "in_ext": self.in_ext,
            "out_ext": self.out_ext,
            "value_format": self.value_format,
        }
