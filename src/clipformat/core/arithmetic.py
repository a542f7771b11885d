"""Arithmetic expression evaluation.

Pipeline: candidate gate -> localized number normalization -> percentage
rewrite -> tokenizer -> shunting-yard evaluation -> number or currency
formatting -> optional template rendering.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable, List, Optional

from clipformat.core.formatters import FormatterOptions
from clipformat.core.models import NumberToken, OperatorToken, ParenToken, Token
from clipformat.core.numbers import format_currency, format_number, normalize_number_token
from clipformat.core.patterns import DEFAULT_REGISTRY, PatternRegistry
from clipformat.core.strings import normalize_minus, trim

LOGGER = logging.getLogger(__name__)

# symbol -> (precedence, right associative)
_OPERATORS = {
    "+": (2, False),
    "-": (2, False),
    "*": (3, False),
    "/": (3, False),
    "%": (3, False),
    "^": (4, True),
}

_ALLOWED = re.compile(r"^[\d.()+\-*/%^]+$")
_PLACEHOLDER = re.compile(r"\$\{([^}]*)\}")


class EvaluationError(ValueError):
    """Raised internally when an expression cannot produce a number."""


def _strip_currency_and_whitespace(text: str) -> str:
    return "".join(text.replace("$", "").split())


def normalize_expression_numbers(expression: str, patterns: PatternRegistry) -> str:
    """Rewrite every localized number token in the expression."""

    return patterns.compiled("number_token").sub(
        lambda match: normalize_number_token(match.group(0)), expression
    )


def rewrite_percentages(expression: str, patterns: PatternRegistry) -> str:
    """Rewrite `X%ofY`, `Y+X%` and `Y-X%` when the whole expression has that shape."""

    match = patterns.match("percentage_of", expression)
    if match:
        return f"{match.group(1)}/100*{match.group(2)}"
    match = patterns.match("percentage_add", expression)
    if match:
        return f"{match.group(1)}*(1+{match.group(2)}/100)"
    match = patterns.match("percentage_sub", expression)
    if match:
        return f"{match.group(1)}*(1-{match.group(2)}/100)"
    return expression


def _is_percentage_shape(compact: str, patterns: PatternRegistry) -> bool:
    return any(
        patterns.match(name, compact)
        for name in ("percentage_of", "percentage_add", "percentage_sub")
    )


def prepare_expression(text: str, patterns: PatternRegistry) -> str:
    """Return the cleaned, percentage-rewritten expression ready for tokenizing."""

    compact = _strip_currency_and_whitespace(normalize_minus(text))
    normalized = normalize_expression_numbers(compact, patterns)
    return rewrite_percentages(normalized, patterns)


def _to_number(buffer: str, negative: bool) -> NumberToken:
    try:
        value = float(buffer)
    except ValueError:
        raise EvaluationError(f"invalid number: {buffer!r}") from None
    return NumberToken(-value if negative else value)


def tokenize(expression: str) -> List[Token]:
    """Split a cleaned expression into number, operator and paren tokens.

    Unary minus is folded into the following number. Before a parenthesised
    group it becomes `-1 *` so the operator/operand alternation holds.
    """

    tokens: List[Token] = []
    buffer = ""
    negative = False

    def flush() -> None:
        nonlocal buffer, negative
        if buffer:
            tokens.append(_to_number(buffer, negative))
            buffer = ""
            negative = False

    def expects_operand() -> bool:
        if not tokens:
            return True
        last = tokens[-1]
        return isinstance(last, OperatorToken) or (isinstance(last, ParenToken) and last.is_open)

    for char in expression:
        if char.isdigit() or char == ".":
            if not buffer and tokens and isinstance(tokens[-1], ParenToken) and not tokens[-1].is_open:
                tokens.append(OperatorToken("*"))
            buffer += char
            continue
        if char == "(":
            flush()
            if tokens and (
                isinstance(tokens[-1], NumberToken)
                or (isinstance(tokens[-1], ParenToken) and not tokens[-1].is_open)
            ):
                tokens.append(OperatorToken("*"))
            if negative:
                tokens.append(NumberToken(-1.0))
                tokens.append(OperatorToken("*"))
                negative = False
            tokens.append(ParenToken(True))
            continue
        if char == ")":
            flush()
            tokens.append(ParenToken(False))
            continue
        if char in _OPERATORS:
            if buffer:
                flush()
            elif expects_operand():
                if char == "-":
                    negative = not negative
                    continue
                if char == "+":
                    continue
            tokens.append(OperatorToken(char))
            continue
        # Anything else was rejected by the candidate gate.
    flush()
    return tokens


def to_postfix(tokens: Iterable[Token]) -> List[Token]:
    """Shunting-yard conversion to reverse Polish order."""

    output: List[Token] = []
    stack: List[Token] = []
    for token in tokens:
        if isinstance(token, NumberToken):
            output.append(token)
        elif isinstance(token, OperatorToken):
            precedence, right_assoc = _OPERATORS[token.symbol]
            while stack and isinstance(stack[-1], OperatorToken):
                top_precedence, _ = _OPERATORS[stack[-1].symbol]
                if top_precedence > precedence or (top_precedence == precedence and not right_assoc):
                    output.append(stack.pop())
                else:
                    break
            stack.append(token)
        elif token.is_open:
            stack.append(token)
        else:
            while stack and not (isinstance(stack[-1], ParenToken) and stack[-1].is_open):
                output.append(stack.pop())
            if not stack:
                raise EvaluationError("unbalanced closing parenthesis")
            stack.pop()
    while stack:
        token = stack.pop()
        if isinstance(token, ParenToken):
            raise EvaluationError("unbalanced opening parenthesis")
        output.append(token)
    return output


def _apply(symbol: str, left: float, right: float) -> float:
    if symbol == "+":
        return left + right
    if symbol == "-":
        return left - right
    if symbol == "*":
        return left * right
    if symbol == "/":
        if right == 0:
            raise EvaluationError("division by zero")
        return left / right
    if symbol == "%":
        if right == 0:
            raise EvaluationError("modulo by zero")
        return left % right
    try:
        result = left ** right
    except (OverflowError, ZeroDivisionError) as exc:
        raise EvaluationError(str(exc)) from None
    if isinstance(result, complex):
        raise EvaluationError("complex result")
    return result


def evaluate_tokens(tokens: Iterable[Token]) -> float:
    stack: List[float] = []
    for token in to_postfix(tokens):
        if isinstance(token, NumberToken):
            stack.append(token.value)
            continue
        if len(stack) < 2:
            raise EvaluationError("operator without operands")
        right = stack.pop()
        left = stack.pop()
        stack.append(_apply(token.symbol, left, right))
    if len(stack) != 1:
        raise EvaluationError("malformed expression")
    result = stack[0]
    if not math.isfinite(result):
        raise EvaluationError("result is not finite")
    return result


def evaluate(expression: str, patterns: Optional[PatternRegistry] = None) -> Optional[float]:
    """Return the numeric value of an expression, or None when it has none."""

    registry = patterns or DEFAULT_REGISTRY
    try:
        return evaluate_tokens(tokenize(prepare_expression(expression, registry)))
    except EvaluationError as exc:
        LOGGER.debug("Evaluation failed for %r: %s", expression, exc)
        return None


def render_template(template: str, values: dict[str, str]) -> str:
    """Substitute `${name}` placeholders; unknown names render empty."""

    return _PLACEHOLDER.sub(lambda match: values.get(match.group(1).strip(), ""), template)


def is_candidate(text: str, options: FormatterOptions) -> bool:
    stripped = trim(normalize_minus(text or ""))
    if not stripped:
        return False
    patterns = options.patterns
    if patterns.match("date_full", stripped):
        return False
    compact = normalize_expression_numbers(_strip_currency_and_whitespace(stripped), patterns)
    if not patterns.match("arithmetic_candidate", stripped) and not _is_percentage_shape(compact, patterns):
        return False
    cleaned = rewrite_percentages(compact, patterns)
    return bool(_ALLOWED.match(cleaned)) and any(char.isdigit() for char in cleaned)


def process(text: str, options: FormatterOptions) -> Optional[str]:
    if not is_candidate(text, options):
        return None

    display_input = trim(normalize_minus(text))
    value = evaluate(display_input, options.patterns)
    if value is None:
        return None

    if "$" in text:
        formatted = format_currency(value)
        if formatted is None:
            return None
    else:
        formatted = format_number(value)

    template = options.config.templates.arithmetic
    if template:
        return render_template(
            template,
            {"input": display_input, "result": formatted, "numeric": format_number(value)},
        )
    return formatted


class ArithmeticFormatter:
    """Formatter wrapper registered under the name `arithmetic`."""

    def is_candidate(self, text: str, options: FormatterOptions) -> bool:
        return is_candidate(text, options)

    def process(self, text: str, options: FormatterOptions) -> Optional[str]:
        return process(text, options)
