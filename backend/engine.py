import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple, Union

from backend.arithmetic import CalcError, Operator, apply
from backend.formatting import ERROR_MARKER, format_number, parse_display

logger = logging.getLogger(__name__)

# newest entries kept on the session tape
HISTORY_LIMIT = 200

DIGITS = "0123456789"


class Snapshot(NamedTuple):
    """What a front end renders after each action."""

    display: str
    secondary_line: str
    is_error: bool


class Action(NamedTuple):
    kind: str
    value: Optional[Union[int, str, float]] = None


@dataclass
class CalculatorState:
    """
    Everything the calculator remembers between key presses.

    display: text being typed, last formatted result, or ERROR_MARKER
    previous_operand: left operand of the pending operation
    pending_operator: operator waiting for its right operand
    last_operation: (operator, right operand) replayed by repeated "="
    secondary_line: trace shown above the display, e.g. "12 +"
    overwrite_next: next digit/decimal starts a new entry
    error_latched: engine is showing ERROR_MARKER
    recalled: display holds a recalled value still waiting to be used as an operand
    """

    display: str = "0"
    previous_operand: Optional[float] = None
    pending_operator: Optional[Operator] = None
    last_operation: Optional[Tuple[Operator, float]] = None
    secondary_line: str = ""
    overwrite_next: bool = False
    error_latched: bool = False
    recalled: bool = False


class CalculatorEngine:
    def __init__(self):
        self.state = CalculatorState()
        self.history: List[Tuple[str, str]] = []  # (expression, result)

    # -------------------------
    # Read-only view
    # -------------------------
    @property
    def snapshot(self) -> Snapshot:
        s = self.state
        return Snapshot(s.display, s.secondary_line, s.error_latched)

    def _current_value(self) -> float:
        return parse_display(self.state.display)

    # -------------------------
    # Entry
    # -------------------------
    def enter_digit(self, digit: Union[int, str]) -> Snapshot:
        d = str(digit)
        if len(d) != 1 or d not in DIGITS:
            raise ValueError(f"Not a digit: {digit!r}")

        s = self.state
        s.recalled = False
        if s.error_latched:
            self._recover(d)
        elif s.overwrite_next:
            s.display = d
            s.overwrite_next = False
        elif s.display == "0":
            s.display = d
        elif s.display == "-0":
            s.display = "-" + d
        else:
            s.display += d
        return self.snapshot

    def enter_decimal(self) -> Snapshot:
        s = self.state
        s.recalled = False
        if s.error_latched:
            self._recover("0.")
        elif s.overwrite_next:
            s.display = "0."
            s.overwrite_next = False
        elif "." in s.display:
            pass
        elif s.display in ("-", ""):
            s.display = "0."
        else:
            s.display += "."
        return self.snapshot

    def toggle_sign(self) -> Snapshot:
        s = self.state
        if s.error_latched:
            return self.snapshot
        text = s.display
        if text in ("0", "0."):
            s.display = "-" + text
        elif text in ("-0", "-0."):
            s.display = text[1:]
        elif text.startswith("-"):
            s.display = text[1:]
        else:
            s.display = "-" + text
        return self.snapshot

    def backspace(self) -> Snapshot:
        s = self.state
        if s.error_latched:
            return self.clear()
        s.recalled = False
        text = s.display
        if s.overwrite_next:
            s.display = "0"
        elif len(text) <= 1 or (len(text) == 2 and text.startswith("-")):
            s.display = "0"
        else:
            s.display = text[:-1]
        return self.snapshot

    def clear(self) -> Snapshot:
        logger.debug("clear")
        self.state = CalculatorState()
        return self.snapshot

    def recall(self, value: float) -> Snapshot:
        """
        Put a previously computed value on the display. With an operator
        pending it becomes the right operand, so a following operator chains
        instead of replacing the pending one.
        """
        text = format_number(value)
        if text == ERROR_MARKER:
            raise ValueError(f"Cannot recall a non-finite value: {value!r}")
        if self.state.error_latched:
            self._recover(text)
        s = self.state
        s.display = text
        s.overwrite_next = True
        s.recalled = True
        return self.snapshot

    # -------------------------
    # Operators
    # -------------------------
    def select_operator(self, op: Union[Operator, str]) -> Snapshot:
        op = Operator.from_key(op)
        s = self.state
        if s.error_latched:
            return self.snapshot

        if s.pending_operator is not None and s.overwrite_next and not s.recalled:
            # operator pressed twice in a row: the last one wins
            s.pending_operator = op
            s.secondary_line = f"{format_number(s.previous_operand or 0)} {op.symbol}"
            return self.snapshot

        current = self._current_value()
        if s.pending_operator is not None and s.previous_operand is not None:
            try:
                result = apply(s.previous_operand, s.pending_operator, current)
            except CalcError as e:
                self._enter_error(e, s.previous_operand, s.pending_operator, current)
                return self.snapshot
            formatted = format_number(result)
            logger.debug("chain %s %s %s = %s", s.previous_operand, s.pending_operator.value, current, formatted)
            s.previous_operand = parse_display(formatted)
            s.display = formatted
            s.secondary_line = f"{formatted} {op.symbol}"
        else:
            s.previous_operand = current
            s.secondary_line = f"{format_number(current)} {op.symbol}"

        s.pending_operator = op
        s.overwrite_next = True
        s.last_operation = None
        s.recalled = False
        return self.snapshot

    def apply_percent(self) -> Snapshot:
        s = self.state
        if s.error_latched:
            return self.snapshot
        current = self._current_value()
        if s.pending_operator is not None and s.previous_operand is not None:
            # "200 + 10 %" means 10% of 200
            value = s.previous_operand * (current / 100)
        else:
            value = current / 100
        s.display = format_number(value)
        s.overwrite_next = True
        s.recalled = False
        return self.snapshot

    def evaluate_equals(self) -> Snapshot:
        s = self.state
        if s.error_latched:
            return self.snapshot

        s.recalled = False
        current = self._current_value()
        if s.pending_operator is not None and s.previous_operand is not None:
            left, op = s.previous_operand, s.pending_operator
            try:
                result = apply(left, op, current)
            except CalcError as e:
                self._enter_error(e, left, op, current)
                return self.snapshot
            formatted = format_number(result)
            s.display = formatted
            s.secondary_line = ""
            s.previous_operand = parse_display(formatted)
            s.pending_operator = None
            s.overwrite_next = True
            s.last_operation = (op, current)
            self._record(left, op, current, formatted)
        elif s.pending_operator is None and s.last_operation is not None:
            op, right = s.last_operation
            try:
                result = apply(current, op, right)
            except CalcError as e:
                self._enter_error(e, current, op, right)
                return self.snapshot
            formatted = format_number(result)
            s.display = formatted
            s.overwrite_next = True
            self._record(current, op, right, formatted)
        else:
            s.overwrite_next = True
        return self.snapshot

    # -------------------------
    # Dispatch
    # -------------------------
    def dispatch(self, action: Action) -> Snapshot:
        """
        Route one abstract action (as produced by a key/button adapter) to its
        operation. An unknown action kind raises ValueError; it is not ignored.
        """
        kind = action.kind
        logger.debug("action %s %r", kind, action.value)
        if kind == "digit":
            return self.enter_digit(action.value)
        if kind == "decimal":
            return self.enter_decimal()
        if kind == "op":
            return self.select_operator(action.value)
        if kind == "equals":
            return self.evaluate_equals()
        if kind == "clear":
            return self.clear()
        if kind == "sign":
            return self.toggle_sign()
        if kind == "percent":
            return self.apply_percent()
        if kind == "backspace":
            return self.backspace()
        if kind == "recall":
            return self.recall(action.value)
        raise ValueError(f"Unknown action: {kind!r}")

    # -------------------------
    # Session tape
    # -------------------------
    def clear_history(self):
        self.history = []

    def _record(self, left: float, op: Operator, right: float, result: str):
        expr = f"{format_number(left)} {op.symbol} {format_number(right)}"
        self.history.append((expr, result))
        if len(self.history) > HISTORY_LIMIT:
            del self.history[:-HISTORY_LIMIT]

    # -------------------------
    # Error latch
    # -------------------------
    def _enter_error(self, exc: CalcError, left: float, op: Operator, right: float):
        logger.warning("%s: %s %s %s (%s)", type(exc).__name__, left, op.value, right, exc)
        self.state = CalculatorState(display=ERROR_MARKER, overwrite_next=True, error_latched=True)

    def _recover(self, display: str):
        """Leave the error latch with a fresh state showing `display`."""
        logger.debug("leaving error state")
        self.state = CalculatorState(display=display)
