"""
Signal equation parser.

User-typed signals such as ``"2sin(3t) + 0.5cos(t)"`` are tokenized and
parsed into a small immutable syntax tree, which is evaluated on a NumPy
time axis. Nothing is ever handed to ``eval``.

Grammar::

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/') unary | unary)*      # juxtaposition multiplies
    unary   := ('+' | '-') unary | primary
    primary := NUMBER | 't' | 'pi' | FUNC '(' expr ')' | '(' expr ')'
    FUNC    := 'sin' | 'cos'

Letters run together are split into known names, so ``"2pit"`` reads as
``2 * pi * t``.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple, Union

import numpy as np

from .errors import ExpressionError
from .logger import logger

FUNCTIONS: Dict[str, Callable[[np.ndarray], np.ndarray]] = {
    "sin": np.sin,
    "cos": np.cos,
}
CONSTANTS: Dict[str, float] = {"pi": float(np.pi)}
VARIABLE = "t"

_NAMES = sorted([*FUNCTIONS, *CONSTANTS, VARIABLE], key=len, reverse=True)
_TOKEN_RE = re.compile(r"\s*(?:(\d+\.?\d*|\.\d+)|([A-Za-z]+)|(.))")
MAX_DEPTH = 100


# ============================================================================
# SYNTAX TREE
# ============================================================================


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Variable:
    name: str = VARIABLE


@dataclass(frozen=True)
class Constant:
    name: str


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Call:
    func: str
    arg: "Node"


Node = Union[Number, Variable, Constant, UnaryOp, BinaryOp, Call]


# ============================================================================
# TOKENIZER
# ============================================================================


@dataclass(frozen=True)
class Token:
    kind: str  # 'num', 'name', 'op', 'end'
    text: str
    pos: int


def _split_name(word: str, pos: int) -> List[Token]:
    tokens = []
    rest = word.lower()
    offset = 0
    while rest:
        for name in _NAMES:
            if rest.startswith(name):
                tokens.append(Token("name", name, pos + offset))
                rest = rest[len(name):]
                offset += len(name)
                break
        else:
            raise ExpressionError(f"Unknown identifier {word!r} at position {pos}.")
    return tokens


def tokenize(text: str) -> List[Token]:
    """Splits ``text`` into tokens, ending with an 'end' token."""
    tokens: List[Token] = []
    pos = 0
    stripped_len = len(text.rstrip())
    while pos < stripped_len:
        match = _TOKEN_RE.match(text, pos)
        number, word, op = match.groups()
        start = match.start(match.lastindex)
        if number is not None:
            tokens.append(Token("num", number, start))
        elif word is not None:
            tokens.extend(_split_name(word, start))
        elif op in "+-*/()":
            tokens.append(Token("op", op, start))
        else:
            raise ExpressionError(f"Unexpected character {op!r} at position {start}.")
        pos = match.end()
    tokens.append(Token("end", "", len(text)))
    return tokens


# ============================================================================
# PARSER
# ============================================================================


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def advance(self) -> Token:
        token = self.current
        self.index += 1
        return token

    def nested(self, parse_inner: Callable[[], Node]) -> Node:
        self.depth += 1
        if self.depth > MAX_DEPTH:
            raise ExpressionError(
                f"Expression nests deeper than {MAX_DEPTH} levels at position "
                f"{self.current.pos}."
            )
        node = parse_inner()
        self.depth -= 1
        return node

    def expect(self, text: str) -> None:
        if self.current.text != text:
            raise ExpressionError(
                f"Expected {text!r} at position {self.current.pos} in {self.text!r}."
            )
        self.advance()

    def parse(self) -> Node:
        if self.current.kind == "end":
            raise ExpressionError("Empty expression.")
        node = self.expr()
        if self.current.kind != "end":
            raise ExpressionError(
                f"Unexpected {self.current.text!r} at position {self.current.pos} "
                f"in {self.text!r}."
            )
        return node

    def expr(self) -> Node:
        node = self.term()
        while self.current.text in ("+", "-") and self.current.kind == "op":
            op = self.advance().text
            node = BinaryOp(op, node, self.term())
        return node

    def _starts_primary(self) -> bool:
        token = self.current
        return token.kind in ("num", "name") or token.text == "("

    def term(self) -> Node:
        node = self.unary()
        while True:
            if self.current.kind == "op" and self.current.text in ("*", "/"):
                op = self.advance().text
                node = BinaryOp(op, node, self.unary())
            elif self._starts_primary():
                node = BinaryOp("*", node, self.unary())
            else:
                return node

    def unary(self) -> Node:
        if self.current.kind == "op" and self.current.text in ("+", "-"):
            op = self.advance().text
            operand = self.nested(self.unary)
            return operand if op == "+" else UnaryOp("-", operand)
        return self.primary()

    def primary(self) -> Node:
        token = self.current
        if token.kind == "num":
            self.advance()
            return Number(float(token.text))
        if token.kind == "name":
            self.advance()
            if token.text in FUNCTIONS:
                self.expect("(")
                arg = self.nested(self.expr)
                self.expect(")")
                return Call(token.text, arg)
            if token.text in CONSTANTS:
                return Constant(token.text)
            return Variable()
        if token.text == "(":
            self.advance()
            node = self.nested(self.expr)
            self.expect(")")
            return node
        if token.kind == "end":
            raise ExpressionError(f"Unexpected end of expression in {self.text!r}.")
        raise ExpressionError(
            f"Unexpected {token.text!r} at position {token.pos} in {self.text!r}."
        )


def parse(text: str) -> Node:
    """
    Parses a signal equation into a syntax tree.

    Raises:
        ExpressionError: On unknown names, unbalanced parentheses, stray tokens
            or nesting deeper than `MAX_DEPTH`.
    """
    node = _Parser(text).parse()
    logger.debug(f"Parsed expression {text!r}.")
    return node


# ============================================================================
# EVALUATION
# ============================================================================


def _apply(op: str, left, right):
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    return np.divide(left, right)


def _eval(node: Node, t: np.ndarray) -> Union[float, np.ndarray]:
    if isinstance(node, Number):
        return node.value
    if isinstance(node, Variable):
        return t
    if isinstance(node, Constant):
        return CONSTANTS[node.name]
    if isinstance(node, UnaryOp):
        return -_eval(node.operand, t)
    if isinstance(node, Call):
        return FUNCTIONS[node.func](_eval(node.arg, t))
    if isinstance(node, BinaryOp):
        # Operator chains are left-deep; walk the spine so long sums stay flat.
        spine = []
        while isinstance(node, BinaryOp):
            spine.append(node)
            node = node.left
        value = _eval(node, t)
        for op_node in reversed(spine):
            value = _apply(op_node.op, value, _eval(op_node.right, t))
        return value
    raise TypeError(f"Not an expression node: {node!r}")


def evaluate(node: Node, t: Union[float, np.ndarray]) -> np.ndarray:
    """
    Evaluates a syntax tree at every point of ``t``.

    Division by zero yields ``inf``/``nan`` samples rather than an error.

    Returns:
        A float array shaped like ``t``.
    """
    t = np.asarray(t, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        result = _eval(node, t)
    return np.broadcast_to(np.asarray(result, dtype=float), t.shape).copy()


class CompiledExpression:
    """A parsed equation that can be called with a time axis."""

    def __init__(self, source: str):
        self.source = source
        self.tree = parse(source)

    def __call__(self, t: Union[float, np.ndarray]) -> np.ndarray:
        return evaluate(self.tree, t)

    def __repr__(self) -> str:
        return f"CompiledExpression({self.source!r})"


def compile_expression(text: str) -> CompiledExpression:
    """Parses ``text`` once for repeated evaluation."""
    return CompiledExpression(text)


def names() -> Tuple[str, ...]:
    """Identifiers the grammar understands."""
    return tuple(sorted(_NAMES))
