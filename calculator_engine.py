"""
Motor de cálculo de la calculadora.

Este módulo provee la clase CalculatorEngine, que evalúa el buffer de la
pantalla y normaliza el resultado a notación decimal o exponencial.
El número se formatea con mpmath para obtener siempre la misma
representación independientemente de la plataforma.

Contrato de interfaz:
    - evaluate(expression: str) -> str
    - parse_number(expression: str) -> float  (NaN si no es numérico)
    - last_result: último valor calculado (tecla ANS)
"""

import logging
import math

from mpmath import mp

from formula_evaluator import FormulaEvaluator, InvalidExpression

logger = logging.getLogger(__name__)


MAX_PLAIN_DIGITS = 15
MAX_PLAIN_MAGNITUDE = 1e15
MIN_PLAIN_MAGNITUDE = 1e-9
EXPONENTIAL_FRACTION_DIGITS = 9


def format_plain(value: float) -> str:
    """Representación decimal posicional más corta que conserva el valor."""
    if not math.isfinite(value):
        return str(value)
    if value == int(value):
        return str(int(value))

    # dígitos significativos de la representación más corta de Python
    mantissa = repr(abs(value)).split("e")[0].replace(".", "").strip("0")
    with mp.workprec(53):
        return mp.nstr(
            mp.mpf(value),
            n=max(1, len(mantissa)),
            min_fixed=-math.inf,
            max_fixed=math.inf,
        )


def format_exponential(value: float, fraction_digits: int = EXPONENTIAL_FRACTION_DIGITS) -> str:
    """Notación exponencial con un número fijo de decimales (2.500000000e+16)."""
    with mp.workprec(53):
        return mp.nstr(
            mp.mpf(value),
            n=fraction_digits + 1,
            min_fixed=0,
            max_fixed=0,
            strip_zeros=False,
            show_zero_exponent=True,
        )


def format_result(value: float) -> str:
    """Elige entre notación decimal y exponencial.

    Los umbrales se mantienen tal cual: más de 15 dígitos (sin signo ni
    punto), magnitud mayor que 1e15 o menor que 1e-9 (excepto cero).
    1e15 tiene 16 dígitos y por tanto se muestra en exponencial.
    """
    plain = format_plain(value)
    digits = len(plain.replace("-", "").replace(".", ""))
    magnitude = abs(value)
    if (
        digits > MAX_PLAIN_DIGITS
        or magnitude > MAX_PLAIN_MAGNITUDE
        or 0 < magnitude < MIN_PLAIN_MAGNITUDE
    ):
        return format_exponential(value)
    return plain


class CalculatorEngine:
    """Evalúa el buffer de la pantalla y recuerda el último resultado."""

    def __init__(self):
        self._evaluator = FormulaEvaluator()
        self.last_result = 0.0

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str) -> str:
        """Evalúa la expresión y devuelve el resultado normalizado.

        Raises:
            InvalidExpression: caracteres no permitidos, sintaxis inválida
                o resultado no finito.
        """
        value = self._evaluator.evaluate(expression)
        self.last_result = value
        result = format_result(value)
        logger.debug("%s = %s", expression, result)
        return result

    def parse_number(self, expression: str) -> float:
        """Valor numérico del buffer sin efectos secundarios; NaN si falla."""
        try:
            return self._evaluator.evaluate(expression)
        except InvalidExpression:
            return math.nan
