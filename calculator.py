"""
Calculator Engine for Royal Calculator
Expression-first input handling: the display shows the live expression
("9 × 9") and evaluates it strictly left to right, with no operator precedence.
"""
import math
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Context, Decimal
from enum import Enum

import config

NAN = float("nan")


class Operator(str, Enum):
    """Binary operators, valued by the symbol shown on the display."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"

    @classmethod
    def parse(cls, symbol):
        """Resolve a display symbol or keyboard alias to an Operator"""
        try:
            return cls(_OPERATOR_ALIASES.get(symbol, symbol))
        except (TypeError, ValueError):
            # TypeError: unhashable input such as a JSON list
            raise ValueError(f"Unknown operator: {symbol!r}") from None

    def apply(self, lhs: float, rhs: float) -> float:
        """Apply the operator; division by zero gives NaN instead of raising"""
        if self is Operator.ADD:
            return lhs + rhs
        if self is Operator.SUBTRACT:
            return lhs - rhs
        if self is Operator.MULTIPLY:
            return lhs * rhs
        return NAN if rhs == 0 else lhs / rhs


_OPERATOR_ALIASES = {"−": "-", "*": "×", "x": "×", "/": "÷"}
_OPERATOR_TOKENS = frozenset(op.value for op in Operator)


class Mode(Enum):
    COMPOSING = "composing"
    RESULT_SHOWN = "result_shown"


class Action(str, Enum):
    DIGIT = "digit"
    OPERATOR = "operator"
    PERCENT = "percent"
    BACKSPACE = "backspace"
    CLEAR = "clear"
    EQUALS = "equals"


@dataclass(frozen=True)
class CalcState:
    """One calculator session: live buffer, archived history and mode."""

    live: str = "0"
    history: str = ""
    mode: Mode = Mode.COMPOSING

    @property
    def just_evaluated(self) -> bool:
        return self.mode is Mode.RESULT_SHOWN

    @property
    def live_expression(self) -> str:
        return self.live

    @property
    def history_expression(self) -> str:
        return self.history


# ── Tokens ─────────────────────────────────────────────────────────────────

def tokenize(expression: str) -> list:
    """Split an expression on whitespace, dropping empty tokens"""
    return expression.split()


def is_operator(token: str) -> bool:
    return token in _OPERATOR_TOKENS


def _normalize(expression):
    return " ".join(expression.split())


def _parts(state):
    # "".split() is [], but the editor always wants a last token to inspect
    return tokenize(state.live) or [""]


def _to_number(token):
    try:
        return float(token)
    except (TypeError, ValueError):
        return NAN


# ── Display clamp ──────────────────────────────────────────────────────────

def _shortest_digits(magnitude):
    """Shortest round-trip digits of a positive float and the decimal point position.

    The value equals 0.<digits> * 10**point.
    """
    _, digits, exponent = Decimal(repr(magnitude)).as_tuple()
    text = "".join(str(d) for d in digits)
    point = len(text) + exponent
    return text.rstrip("0"), point


def _exponent_suffix(exponent):
    return "e" + ("+" if exponent >= 0 else "-") + str(abs(exponent))


def _natural_form(n):
    """Shortest round-trip digits, fixed notation for 1e-6 <= abs(n) < 1e21"""
    sign = "-" if n < 0 else ""
    digits, point = _shortest_digits(abs(n))
    k = len(digits)
    if k <= point <= 21:
        body = digits + "0" * (point - k)
    elif 0 < point <= 21:
        body = digits[:point] + "." + digits[point:]
    elif -6 < point <= 0:
        body = "0." + "0" * -point + digits
    else:
        body = digits[0] + ("." + digits[1:] if k > 1 else "") + _exponent_suffix(point - 1)
    return sign + body


def _to_precision(n, precision):
    """Render with a fixed number of significant digits"""
    sign = "-" if n < 0 else ""
    # exact binary value, ties rounded away from zero
    context = Context(prec=precision, rounding=ROUND_HALF_UP)
    _, rounded, exp = context.plus(Decimal(abs(n))).as_tuple()
    digits = "".join(str(d) for d in rounded).ljust(precision, "0")
    exponent = exp + len(rounded) - 1
    if exponent < -6 or exponent >= precision:
        mantissa = digits[0] + ("." + digits[1:] if precision > 1 else "")
        return sign + mantissa + _exponent_suffix(exponent)
    if exponent >= 0:
        whole, fraction = digits[:exponent + 1], digits[exponent + 1:]
        return sign + whole + ("." + fraction if fraction else "")
    return sign + "0." + "0" * (-exponent - 1) + digits


def _strip_fraction_zeros(text):
    mantissa, marker, exponent = text.partition("e")
    if "." in mantissa:
        mantissa = mantissa.rstrip("0").rstrip(".")
    return mantissa + marker + exponent


def clamp_display(n) -> str:
    """Render a numeric result so it fits the fixed-width display"""
    if n is None or not math.isfinite(n):
        return "0"
    n = float(n)
    if n == 0:
        return "0"
    magnitude = abs(n)
    if magnitude >= config.LARGE_MAGNITUDE or magnitude < config.SMALL_MAGNITUDE:
        return _strip_fraction_zeros(_to_precision(n, config.EXTREME_PRECISION))
    text = _natural_form(n)
    if len(text) <= config.DISPLAY_MAX_CHARS:
        return text
    return _strip_fraction_zeros(_to_precision(n, config.OVERFLOW_PRECISION))


# ── Evaluation ─────────────────────────────────────────────────────────────

def compute_left_to_right(tokens) -> float:
    """Reduce `number (op number)*` left to right; NaN on any malformed input"""
    if not tokens:
        return NAN

    acc = _to_number(tokens[0])
    if not math.isfinite(acc):
        return NAN

    for i in range(1, len(tokens), 2):
        symbol = tokens[i]
        operand = tokens[i + 1] if i + 1 < len(tokens) else ""
        if not symbol or not operand:
            return NAN

        rhs = _to_number(operand)
        if not math.isfinite(rhs):
            return NAN
        if not is_operator(symbol):
            return NAN

        acc = Operator(symbol).apply(acc, rhs)
    return acc


def equals(state: CalcState) -> CalcState:
    """Evaluate the buffer and archive it as history; malformed input is ignored"""
    tokens = tokenize(state.live)

    if len(tokens) >= 2 and is_operator(tokens[-1]):
        return state
    # number op number op number ... always has an odd count
    if len(tokens) % 2 == 0:
        return state

    result = clamp_display(compute_left_to_right(tokens))
    return CalcState(
        live=result,
        history=_normalize(state.live) + " =",
        mode=Mode.RESULT_SHOWN,
    )


# ── Buffer editing ─────────────────────────────────────────────────────────

def append_digit(state: CalcState, d: str) -> CalcState:
    """Add a digit or the decimal point to the trailing number"""
    if d != "." and not (len(d) == 1 and d in "0123456789"):
        raise ValueError(f"Not a digit: {d!r}")

    # A shown result is discarded once the user starts typing a number
    if state.just_evaluated and (state.live == "0" or " " not in state.live):
        state = CalcState(history=state.history)

    parts = _parts(state)
    last = parts[-1]

    if d == ".":
        if is_operator(last):
            parts.append("0.")
        elif "." in last:
            return state
        else:
            parts[-1] = "0." if last == "" else last + "."
        return replace(state, live=" ".join(parts))

    if is_operator(last):
        parts.append(d)
    elif last == "0":
        parts[-1] = d
    elif last == "-0":
        parts[-1] = "-" + d
    else:
        parts[-1] = last + d
    return replace(state, live=" ".join(parts))


def append_operator(state: CalcState, op) -> CalcState:
    """Add a binary operator, or start a negative number for a unary minus"""
    op = Operator.parse(op)

    if op is Operator.SUBTRACT:
        if _normalize(state.live) == "0":
            return replace(state, live="-0", mode=Mode.COMPOSING)
        parts = _parts(state)
        if is_operator(parts[-1]):
            parts.append("-0")
            return replace(state, live=" ".join(parts), mode=Mode.COMPOSING)

    # A shown result becomes the first operand
    state = replace(state, mode=Mode.COMPOSING)

    parts = _parts(state)
    if is_operator(parts[-1]):
        parts[-1] = op.value
        return replace(state, live=" ".join(parts))

    return replace(state, live=" ".join(parts) + " " + op.value)


def percent(state: CalcState) -> CalcState:
    """Divide the trailing number by 100"""
    parts = _parts(state)
    last = parts[-1]
    if is_operator(last):
        return state

    n = _to_number(last)
    if not math.isfinite(n):
        return state

    parts[-1] = clamp_display(n / 100)
    return replace(state, live=" ".join(parts), mode=Mode.COMPOSING)


def backspace(state: CalcState) -> CalcState:
    """Remove one character; after a result, start over from 0"""
    if state.just_evaluated:
        return replace(state, live="0", mode=Mode.COMPOSING)

    if len(state.live) <= 1:
        return replace(state, live="0")

    live = state.live[:-1]
    if live == "" or live == "-":
        live = "0"
    else:
        # "5 × -" would leave a dangling sign where an operand belongs;
        # drop it too so number and operator tokens keep alternating
        tokens = tokenize(live)
        if len(tokens) >= 2 and tokens[-1] == "-" and is_operator(tokens[-2]):
            live = live.rstrip()[:-1].rstrip()
    return replace(state, live=live)


def clear_all(state: CalcState = None) -> CalcState:
    """Full session reset"""
    return CalcState()


# ── Dispatch ───────────────────────────────────────────────────────────────

def apply_action(state: CalcState, action, param=None) -> CalcState:
    """Apply one named action from the keypad/API to a state"""
    action = Action(action)

    if action in (Action.DIGIT, Action.OPERATOR) and param is None:
        raise ValueError(f"Action {action.value!r} requires a parameter")

    if action is Action.DIGIT:
        return append_digit(state, str(param))
    if action is Action.OPERATOR:
        return append_operator(state, param)
    if action is Action.PERCENT:
        return percent(state)
    if action is Action.BACKSPACE:
        return backspace(state)
    if action is Action.CLEAR:
        return clear_all(state)
    return equals(state)


class Calculator:
    """Mutable calculator session used by the GUI and the web API"""

    def __init__(self, on_evaluate=None):
        self._state = CalcState()
        self.on_evaluate = on_evaluate

    @property
    def state(self):
        return self._state

    @property
    def live_expression(self):
        return self._state.live

    @property
    def history_expression(self):
        return self._state.history

    @property
    def just_evaluated(self):
        return self._state.just_evaluated

    def dispatch(self, action, param=None):
        """Apply an action and return the new live expression"""
        previous = self._state
        self._state = apply_action(previous, action, param)

        # re-evaluating a shown result is not a new calculation
        if (Action(action) is Action.EQUALS and self._state is not previous
                and not previous.just_evaluated
                and self.on_evaluate is not None):
            self.on_evaluate(self._state.history, self._state.live)
        return self._state.live

    def digit(self, d):
        return self.dispatch(Action.DIGIT, d)

    def operator(self, op):
        return self.dispatch(Action.OPERATOR, op)

    def percent(self):
        return self.dispatch(Action.PERCENT)

    def backspace(self):
        return self.dispatch(Action.BACKSPACE)

    def clear(self):
        return self.dispatch(Action.CLEAR)

    def equals(self):
        return self.dispatch(Action.EQUALS)

    def press_key(self, key):
        """Route a keyboard key through config.KEY_BINDINGS; False if unmapped"""
        binding = config.KEY_BINDINGS.get(key)
        if binding is None:
            return False
        action, param = binding
        self.dispatch(action, param)
        return True

    def snapshot(self):
        """Render outputs as a plain dict"""
        return {
            "live": self._state.live,
            "history": self._state.history,
            "mode": self._state.mode.value,
        }
