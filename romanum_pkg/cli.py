"""Terminal host for the Romanum core: one-shot evaluation and an interactive REPL."""

from __future__ import annotations

import argparse
import json
from typing import Any

from . import config
from .api import evaluate, interpret_keystroke, operator_glyph, operator_name, resolve_expression
from .calculator import CalculationLog, create_calculation_entry
from .config import OPERATOR_CHARS, VERSION, WHITESPACE_RE
from .expression import EVALUATORS, split_expression
from .interpreter import get_current_roman_sequence, has_incomplete_roman_sequence
from .logging_config import get_logger
from .types import EvalResult
from .uncia import get_fraction_name, has_fraction
from .validator import can_add_roman_char, get_valid_next_roman_chars, is_roman_char

logger = get_logger("cli")


def print_result_pretty(res: dict[str, Any], output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Result dictionary (EvalResult.to_dict())
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res, indent=2, ensure_ascii=False))
        return
    if not res.get("ok"):
        print("Error:", res.get("error"))
        return

    value = res.get("value")
    numeral = res.get("numeral") or "nulla"
    try:
        print(numeral)
        if value is not None and has_fraction(value):
            fraction_name = get_fraction_name(value)
            print(f"Fraction: {res.get('fraction')} ({fraction_name})")
    except UnicodeEncodeError:
        # Console cannot show vinculum or dot glyphs
        print(numeral.encode("ascii", "replace").decode("ascii"))
    if value is not None:
        print("Decimal:", f"{value:g}")


def _evaluate_line(line: str, strategy: str | None) -> tuple[EvalResult, str]:
    text = WHITESPACE_RE.sub("", line)
    resolved = resolve_expression(text)
    return evaluate(resolved, strategy), resolved


def _record(log: CalculationLog, resolved: str, result: EvalResult) -> None:
    parsed = split_expression(resolved)
    if parsed is not None:
        entry = create_calculation_entry(
            parsed.operand1, parsed.operator, parsed.operand2, result.value
        )
    else:
        entry = create_calculation_entry(resolved, None, None, result.value)
    log.record(entry)


def replay_keys(keys: str) -> list[str]:
    """Feed characters one at a time through the keystroke interpreter.

    Roman letters that cannot extend the current run are ignored, as a
    keypad would disable them.

    Returns:
        One line of description per keystroke
    """
    display = ""
    lines = []
    for char in keys:
        if char.isspace():
            continue
        if is_roman_char(char) and not can_add_roman_char(display, char):
            run = get_current_roman_sequence(display)
            lines.append(f"{char!r}: ignored, cannot extend {run!r}")
            continue
        display = interpret_keystroke(display, char)
        line = f"{char!r}: {display}"
        run = get_current_roman_sequence(display)
        if run:
            allowed = "".join(get_valid_next_roman_chars(run)) or "-"
            line += f"  [next: {allowed}]"
        if has_incomplete_roman_sequence(display):
            line += "  (incomplete numeral)"
        if char in OPERATOR_CHARS:
            line += f"  ({operator_glyph(char)} {operator_name(char)})"
        lines.append(line)
    return lines


def print_history(log: CalculationLog) -> None:
    entries = log.entries()
    if not entries:
        print("No calculations yet.")
        return
    for i, entry in enumerate(entries, 1):
        if entry.operator is not None:
            operands = f" {operator_glyph(entry.operator)} ".join(
                f"{operand:g}" for operand in entry.operands
            )
        else:
            operands = str(entry.operands[0])
        print(f"{i:>3}. {operands} = {entry.result:g}")


def print_help_text() -> None:
    print(
        """Romanum - Roman numeral calculator

Type an expression mixing Arabic digits, Roman letters (I V X L C D M)
and operators (+ - * / ^), then press Enter. Examples:
  XIV+XII          -> XXVI
  9XIV3            -> 9143 (Roman runs are read inside numbers)
  X/III            -> III∷ (fractions in twelfths)

Commands:
  keys <chars>     replay characters one keystroke at a time
  history          show calculations of this session
  clear            clear the history
  help             show this help
  quit, exit       leave"""
    )


def repl_loop(
    output_format: str = "human", strategy: str | None = None, history_limit: int = 0
) -> None:
    """Interactive REPL loop with graceful interrupt handling."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    log = CalculationLog(limit=history_limit)
    print("Romanum - type 'help' for commands, 'quit' to exit.")

    while True:
        try:
            raw = input(">>> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        line = raw.strip()
        if not line:
            continue
        command, _, argument = line.partition(" ")
        command = command.lower()

        if command in ("quit", "exit"):
            break
        if command == "help":
            print_help_text()
            continue
        if command == "history":
            print_history(log)
            continue
        if command == "clear":
            log.clear()
            continue
        if command == "keys":
            for key_line in replay_keys(argument):
                print(key_line)
            continue

        try:
            result, resolved = _evaluate_line(line, strategy)
        except Exception as e:
            logger.exception("Unexpected error in REPL")
            print(f"Error: {e}")
            continue
        if result.ok:
            _record(log, resolved, result)
        print_result_pretty(result.to_dict(), output_format=output_format)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Romanum CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="romanum")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--keys",
        type=str,
        help="Replay characters one keystroke at a time and exit",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--evaluator",
        type=str,
        choices=sorted(EVALUATORS),
        help=f"Evaluation strategy (default: {config.DEFAULT_EVALUATOR})",
    )
    parser.add_argument(
        "--max-length", type=int, help="Maximum expression length in characters"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=config.LOG_LEVEL,
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    args = parser.parse_args(argv)

    from .logging_config import setup_logging

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.max_length and args.max_length > 0:
        config.MAX_INPUT_LENGTH = int(args.max_length)

    if args.version:
        print(f"romanum {VERSION}")
        return 0

    if args.keys is not None:
        for key_line in replay_keys(args.keys):
            print(key_line)
        return 0

    if args.eval_expr is not None:
        result, _ = _evaluate_line(args.eval_expr, args.evaluator)
        print_result_pretty(result.to_dict(), output_format=args.format)
        return 0 if result.ok else 1

    repl_loop(
        output_format=args.format,
        strategy=args.evaluator,
        history_limit=config.HISTORY_LIMIT,
    )
    return 0


if __name__ == "__main__":
    """Allow running the CLI module directly with python -m romanum_pkg.cli"""
    import sys

    sys.exit(main_entry())
