"""Calculator operations, operator display lookups and the calculation history."""

from __future__ import annotations

import math
import threading
import time
from collections import deque
from typing import Any, Callable

from .config import NUMBER_RE
from .logging_config import get_logger
from .types import CalculationEntry

logger = get_logger("calculator")

OPERATIONS: dict[str, Callable[[float, float], float | None]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": lambda a, b: a / b if b != 0 else None,
    "^": math.pow,
}

OPERATOR_SYMBOLS = {
    "+": "+",
    "-": "−",
    "*": "×",
    "/": "÷",
    "^": "^",
}

# Latin operation names shown next to the keypad
OPERATION_NAMES = {
    "+": "addere",
    "-": "subtrahere",
    "*": "multiplicare",
    "/": "dividere",
    "^": "potentia",
}


def get_operator_symbol(operator: str) -> str:
    return OPERATOR_SYMBOLS.get(operator, operator)


def get_operation_text(operator: str) -> str:
    return OPERATION_NAMES.get(operator, operator)


def _to_float(operand: Any) -> float | None:
    if isinstance(operand, bool):
        return None
    if isinstance(operand, (int, float)):
        return float(operand)
    if isinstance(operand, str) and NUMBER_RE.match(operand.strip()):
        return float(operand)
    return None


def perform_calculation(operand1: Any, operator: str, operand2: Any) -> float | None:
    """Apply one binary operation to two operands.

    Operands may be numbers or numeric strings.

    Returns:
        The result, or None for non-numeric operands, an unknown operator,
        division by zero or a result that is not a finite real number
    """
    num1 = _to_float(operand1)
    num2 = _to_float(operand2)
    if num1 is None or num2 is None:
        return None

    operation = OPERATIONS.get(operator)
    if operation is None:
        return None

    try:
        result = operation(num1, num2)
    except (OverflowError, ValueError, ZeroDivisionError):
        logger.debug("Calculation %r %s %r failed", num1, operator, num2, exc_info=True)
        return None
    if result is None or not math.isfinite(result):
        return None
    return result


def create_calculation_entry(
    operand1: Any, operator: str | None, operand2: Any, result: float
) -> CalculationEntry:
    """Create a history entry stamped with the current time."""
    operands = (operand1,) if operand2 is None else (operand1, operand2)
    return CalculationEntry(
        operands=operands, operator=operator, result=result, timestamp=time.time()
    )


class CalculationLog:
    """Append-only in-memory calculation history.

    With a limit, the oldest entries are dropped once it is full.
    """

    def __init__(self, limit: int = 0):
        self._entries: deque[CalculationEntry] = deque(maxlen=limit or None)
        self._lock = threading.Lock()

    def record(self, entry: CalculationEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def entries(self) -> list[CalculationEntry]:
        with self._lock:
            return list(self._entries)

    def last(self) -> CalculationEntry | None:
        with self._lock:
            return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
