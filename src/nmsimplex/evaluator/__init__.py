"""
Evaluator module for objective functions.

Provides:
- Evaluator: Abstract base for objective evaluators
- FunctionEvaluator: Wraps a plain Python callable
- TemplateScanner: Fills parameterized input-file templates
- ExternalEvaluator: Runs an external program per candidate
"""

from .evaluator import Evaluator, FunctionEvaluator
from .external import ExternalEvaluator, parse_last_float
from .template import TemplateScanner

__all__ = [
    "Evaluator",
    "FunctionEvaluator",
    "TemplateScanner",
    "ExternalEvaluator",
    "parse_last_float",
]
