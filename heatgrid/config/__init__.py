"""Typed config models and parsers."""

from .models import ExportConfig, KernelConfig, SimulationConfig
from .parser import load_input, parse_deck_mapping, parse_input_text, validate_sources
from .validators import as_mapping, ensure_choice, ensure_nonnegative, opt_mapping, required, to_float, to_int

__all__ = [
    "ExportConfig",
    "KernelConfig",
    "SimulationConfig",
    "as_mapping",
    "ensure_choice",
    "ensure_nonnegative",
    "load_input",
    "opt_mapping",
    "parse_deck_mapping",
    "parse_input_text",
    "required",
    "to_float",
    "to_int",
    "validate_sources",
]
