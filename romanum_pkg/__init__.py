"""Romanum package: Roman numeral codec, mixed-input interpreter, expression evaluator, and CLI."""

__all__ = [
    "config",
    "numerals",
    "uncia",
    "validator",
    "interpreter",
    "expression",
    "calculator",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "interpret_keystroke",
    "resolve_expression",
    "evaluate",
    "to_display_numeral",
    "to_display_fraction",
    "operator_glyph",
    "operator_name",
]
