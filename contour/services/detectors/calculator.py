"""Calculator detector - arithmetic evaluated through a whitelisted AST walk."""
import ast
import math
import operator
import re
from typing import Optional

from contour.models.module import CalculatorResult
from contour.utils.number_format import format_number

FUNCTIONS = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "asin": math.asin,
    "acos": math.acos,
    "atan": math.atan,
    "sqrt": math.sqrt,
    "cbrt": lambda v: math.copysign(abs(v) ** (1 / 3), v),
    "abs": abs,
    "ln": math.log,
    "log": math.log10,
    "log2": math.log2,
    "exp": math.exp,
    "floor": math.floor,
    "ceil": math.ceil,
    "round": round,
}

CONSTANTS = {"pi": math.pi, "e": math.e, "tau": math.tau}

BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

UNARY_OPS = {ast.UAdd: operator.pos, ast.USub: operator.neg}

# Words allowed in an expression besides function and constant names
_FILLER_WORDS = {"x", "of", "mod"}
_MAX_EXPONENT = 1000
# integer powers whose result would exceed this many bits are rejected
_MAX_RESULT_BITS = 4096

_ALLOWED_CHARS_RE = re.compile(r"^[0-9a-z\s.,+\-*/^%()×÷π]+$")
_OPERATION_RE = re.compile(r"[\d)a-zπ]\s*(?:\*\*|[+\-*/^%×÷]|(?:x|mod)(?=\s*[\d(]))")
_FUNCTION_CALL_RE = re.compile(r"\b(?:" + "|".join(FUNCTIONS) + r")\s*\(")
_NAME_ALTERNATION = "|".join(sorted(list(FUNCTIONS) + list(CONSTANTS), key=len, reverse=True))
_TRAILING_OPERATOR_RE = re.compile(r"[\s+\-*/%.]+$")


def _normalize(text: str) -> str:
    s = text.strip().lower()
    s = re.sub(r"(?<=\d),(?=\d{3}\b)", "", s)
    s = s.replace("×", "*").replace("÷", "/").replace("π", "pi").replace("^", "**")
    s = re.sub(r"(?<=[\d)])\s*x\s*(?=[\d(])", "*", s)
    s = re.sub(r"\bmod\b", "%", s)
    # "20% of 50" and a trailing "15%" are percentages; "10 % 3" stays modulo
    s = re.sub(r"(\d+(?:\.\d+)?)\s*%\s*of\b", r"(\1/100)*", s)
    s = re.sub(r"(\d+(?:\.\d+)?)%(?!\s*[\d(.a-z])", r"(\1/100)", s)
    # implicit multiplication: 2(3+1), (1+1)(2), 2pi, 3sqrt(4)
    s = re.sub(r"(?<![a-z])(\d|\))\s*\(", r"\1*(", s)
    s = re.sub(r"(?<![a-z])(\d|\))\s*(" + _NAME_ALTERNATION + r")\b", r"\1*\2", s)
    return s


def is_math_expression(text: str) -> bool:
    """Shape test: digits plus at least one operator or known function call."""
    s = text.strip().lower()
    if not s or not _ALLOWED_CHARS_RE.match(s):
        return False
    words = re.findall(r"[a-z]+", s)
    if any(w not in FUNCTIONS and w not in CONSTANTS and w not in _FILLER_WORDS for w in words):
        return False
    if not re.search(r"\d|π|\bpi\b|\be\b|\btau\b", s):
        return False
    return bool(_OPERATION_RE.search(s) or _FUNCTION_CALL_RE.search(s))


def _check_power(base, exponent) -> None:
    if abs(base) <= 1:
        return
    if abs(exponent) > _MAX_EXPONENT:
        raise OverflowError("Exponent too large")
    if isinstance(base, int) and isinstance(exponent, int) and base.bit_length() * exponent > _MAX_RESULT_BITS:
        raise OverflowError("Result too large")


def _eval_node(node: ast.AST) -> float:
    if isinstance(node, ast.Expression):
        return _eval_node(node.body)
    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ValueError(f"Unsupported literal: {node.value!r}")
        return node.value
    if isinstance(node, ast.Name):
        if node.id not in CONSTANTS:
            raise ValueError(f"Unknown name: {node.id}")
        return CONSTANTS[node.id]
    if isinstance(node, ast.BinOp) and type(node.op) in BINARY_OPS:
        left = _eval_node(node.left)
        right = _eval_node(node.right)
        if isinstance(node.op, ast.Pow):
            _check_power(left, right)
        return BINARY_OPS[type(node.op)](left, right)
    if isinstance(node, ast.UnaryOp) and type(node.op) in UNARY_OPS:
        return UNARY_OPS[type(node.op)](_eval_node(node.operand))
    if isinstance(node, ast.Call) and isinstance(node.func, ast.Name):
        func = FUNCTIONS.get(node.func.id)
        if func is None or len(node.args) != 1 or node.keywords:
            raise ValueError(f"Unsupported call: {node.func.id}")
        return func(_eval_node(node.args[0]))
    raise ValueError(f"Unsupported expression node: {type(node).__name__}")


def evaluate(expression: str) -> float:
    """
    Evaluate a normalized expression.

    Raises:
        SyntaxError: Expression is incomplete or malformed
        ValueError: Disallowed construct or math domain error
        ZeroDivisionError, OverflowError
    """
    value = _eval_node(ast.parse(expression, mode="eval"))
    if isinstance(value, complex):
        raise ValueError("Complex result")
    return float(value)


def _complete(expression: str) -> str:
    """Drop dangling operators and close open parentheses."""
    s = _TRAILING_OPERATOR_RE.sub("", expression)
    s = re.sub(r"\(\s*$", "", s)
    s = _TRAILING_OPERATOR_RE.sub("", s)
    return s + ")" * max(0, s.count("(") - s.count(")"))


def detect_calculator(text: str) -> Optional[CalculatorResult]:
    """Detect and evaluate a math expression, e.g. "5+3*2", "sqrt(16)", "20% of 80"."""
    expression = text.strip()
    if not is_math_expression(expression):
        return None

    normalized = _normalize(expression)
    try:
        value = evaluate(normalized)
        is_partial = False
    except SyntaxError:
        # "5+" / "(2+3" - show the value of the completed prefix
        try:
            value = evaluate(_complete(normalized))
        except (SyntaxError, ValueError, ZeroDivisionError, OverflowError, TypeError):
            return None
        is_partial = True
    except ZeroDivisionError:
        return CalculatorResult(expression=expression, display="Cannot divide by zero", is_partial=True)
    except (ValueError, OverflowError, TypeError):
        return CalculatorResult(expression=expression, display="Invalid expression", is_partial=True)

    if math.isnan(value) or math.isinf(value):
        return CalculatorResult(expression=expression, display="Result out of range", is_partial=True)

    return CalculatorResult(
        expression=expression,
        value=value,
        display=format_number(value, max_decimals=10),
        is_partial=is_partial,
    )
