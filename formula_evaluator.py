"""Parseo y evaluación de expresiones aritméticas de la calculadora.

Gramática admitida (suma de términos con paréntesis y signo unario):

    expr   := term (("+" | "-") term)*
    term   := factor (("*" | "/") factor)*
    factor := ("+" | "-") factor | number | "(" expr ")"

No se usa eval: la expresión se tokeniza y se evalúa con un parser
recursivo descendente.
"""

import math
import re

from config import GROUP_SEPARATOR


class InvalidExpression(ValueError):
    """La expresión contiene caracteres no permitidos o está mal formada."""


class FormulaEvaluator:
    """Transforma expresiones de la pantalla y evalúa su valor numérico."""

    # La "e" solo se admite como marca de exponente de un literal
    _ALLOWED_CHARS = re.compile(r"^[0-9.+\-*/()\se]*$")
    _TOKEN_RE = re.compile(
        r"\s*(?:(?P<number>(?:\d+\.?\d*|\.\d+)(?:e[+\-]?\d+)?)|(?P<op>[+\-*/()]))"
    )
    # Paréntesis y signos unarios anidados como máximo
    MAX_NESTING = 100

    def evaluate(self, expression: str) -> float:
        if not expression or not expression.strip():
            raise InvalidExpression("Expresión vacía")

        processed = self._preprocess(expression)
        self._validate_raw_expression(processed)
        self._tokens = self._tokenize(processed)
        self._pos = 0
        self._depth = 0

        try:
            value = self._parse_expr()
        except ZeroDivisionError as exc:
            raise InvalidExpression("División por cero") from exc
        except OverflowError as exc:
            raise InvalidExpression("Resultado demasiado grande") from exc

        if self._pos != len(self._tokens):
            raise InvalidExpression(f"Token inesperado: {self._tokens[self._pos]}")
        if not math.isfinite(value):
            raise InvalidExpression("Resultado no finito")
        return value

    # ── Preparación ──────────────────────────────────────────────

    @staticmethod
    def _preprocess(expr: str) -> str:
        expr = expr.replace(GROUP_SEPARATOR, "")
        expr = expr.replace("×", "*")
        expr = expr.replace("÷", "/")
        return expr.strip()

    def _validate_raw_expression(self, expression: str):
        if not self._ALLOWED_CHARS.fullmatch(expression):
            raise InvalidExpression("Expresión contiene caracteres inválidos")

    def _tokenize(self, expr: str) -> list[str]:
        tokens = []
        pos = 0
        while pos < len(expr):
            if expr[pos:].isspace():
                break
            match = self._TOKEN_RE.match(expr, pos)
            if match is None:
                raise InvalidExpression(f"Error de sintaxis cerca de '{expr[pos:]}'")
            tokens.append(match.group("number") or match.group("op"))
            pos = match.end()
        return tokens

    # ── Parser recursivo descendente ─────────────────────────────

    def _peek(self) -> str | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _take(self) -> str:
        token = self._peek()
        if token is None:
            raise InvalidExpression("Fin de expresión inesperado")
        self._pos += 1
        return token

    def _parse_expr(self) -> float:
        value = self._parse_term()
        while self._peek() in ("+", "-"):
            if self._take() == "+":
                value = value + self._parse_term()
            else:
                value = value - self._parse_term()
        return value

    def _parse_term(self) -> float:
        value = self._parse_factor()
        while self._peek() in ("*", "/"):
            if self._take() == "*":
                value = value * self._parse_factor()
            else:
                value = value / self._parse_factor()
        return value

    def _parse_factor(self) -> float:
        token = self._take()
        if token in ("-", "+", "("):
            self._depth += 1
            if self._depth > self.MAX_NESTING:
                raise InvalidExpression("Demasiados niveles de anidamiento")
            try:
                return self._parse_nested(token)
            finally:
                self._depth -= 1
        if token in ("*", "/", ")"):
            raise InvalidExpression(f"Operador inesperado: {token}")
        return float(token)

    def _parse_nested(self, token: str) -> float:
        if token == "-":
            return -self._parse_factor()
        if token == "+":
            return self._parse_factor()
        value = self._parse_expr()
        if self._take() != ")":
            raise InvalidExpression("Falta ')'")
        return value
