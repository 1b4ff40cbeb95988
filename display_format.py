"""
Formato de pantalla para la calculadora.

Agrupa los dígitos de cada operando con separadores de miles y traduce
la posición del cursor entre el texto sin formato (buffer) y el texto
formateado que se dibuja.

Todas las funciones son puras: el mapeo del cursor se recalcula en cada
repintado y nunca se guarda entre ediciones.
"""

import re

from config import GROUP_SEPARATOR

_GROUPING_RE = re.compile(r"\B(?=(\d{3})+(?!\d))")
_OPERATOR_SPLIT_RE = re.compile(r"(\s[+\-×÷]\s)")
_LEADING_NUMBER_RE = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)")


# ── Números ──────────────────────────────────────────────────────

def format_number_string(text: str) -> str:
    """Inserta separadores cada tres dígitos en la parte entera."""
    integer, dot, fraction = text.partition(".")
    return _GROUPING_RE.sub(GROUP_SEPARATOR, integer) + dot + fraction


def strip_separators(text: str) -> str:
    return text.replace(GROUP_SEPARATOR, "")


# ── Expresiones ──────────────────────────────────────────────────

def split_expression(expr: str) -> list[str]:
    """Divide por ' op ' conservando los operadores como tokens."""
    return _OPERATOR_SPLIT_RE.split(expr)


def _is_plain_number(part: str) -> bool:
    # Los operandos en notación exponencial se muestran tal cual
    return _LEADING_NUMBER_RE.match(part) is not None and "e" not in part


def format_expression_for_display(expr: str) -> str:
    return "".join(
        format_number_string(part) if _is_plain_number(part) else part
        for part in split_expression(expr)
    )


# ── Cursor ───────────────────────────────────────────────────────

def _offset_after(text: str, count: int) -> int:
    """Índice justo después del carácter no separador número `count`."""
    if count <= 0:
        return 0
    seen = 0
    for i, char in enumerate(text):
        if char != GROUP_SEPARATOR:
            seen += 1
        if seen == count:
            return i + 1
    return len(text)


def display_cursor_offset(raw: str, cursor: int, formatted: str | None = None) -> int:
    """Convierte una posición del buffer en una posición del texto mostrado."""
    if formatted is None:
        formatted = format_expression_for_display(raw)
    consumed = len(strip_separators(raw[:cursor]))
    return _offset_after(formatted, consumed)


def raw_cursor_offset(raw: str, display_offset: int, formatted: str | None = None) -> int:
    """Operación inversa: posición en pantalla -> posición en el buffer."""
    if formatted is None:
        formatted = format_expression_for_display(raw)
    consumed = len(strip_separators(formatted[:max(0, display_offset)]))
    return _offset_after(raw, consumed)
