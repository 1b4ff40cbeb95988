"""Buffer de expresión editable con cursor y modo inserción/sobrescritura."""

import enum
import re

from config import MAX_OPERAND_DIGITS

_OPERAND_BOUNDARY_RE = re.compile(r"[\s+\-×÷]")
_DIGIT_RE = re.compile(r"[0-9]")


class EditMode(enum.Enum):
    INSERT = "INS"
    OVERWRITE = "OVR"


class ExpressionBuffer:
    """Texto sin formato de la expresión y posición del cursor.

    Invariantes:
        - el texto nunca está vacío: vacío equivale a "0" con cursor 1.
        - 0 <= cursor <= len(texto).
        - el operando en curso no supera MAX_OPERAND_DIGITS dígitos.
    """

    EMPTY = "0"

    def __init__(self, text: str = EMPTY, mode: EditMode = EditMode.INSERT):
        self.mode = mode
        self.replace(text)

    def __repr__(self):
        return f"ExpressionBuffer({self._text!r}, cursor={self._cursor}, mode={self.mode.name})"

    # ── Propiedades ──────────────────────────────────────────────

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    def active_operand(self) -> str:
        """Segmento numérico desde el último operador."""
        return _OPERAND_BOUNDARY_RE.split(self._text)[-1]

    # ── Estado completo ──────────────────────────────────────────

    def reset(self):
        self._text = self.EMPTY
        self._cursor = len(self._text)

    def replace(self, text: str):
        """Sustituye el contenido y deja el cursor al final."""
        if not text:
            self.reset()
            return
        self._text = text
        self._cursor = len(text)

    # ── Edición ──────────────────────────────────────────────────

    def insert(self, text: str) -> bool:
        """Inserta o sobrescribe `text` en el cursor.

        Devuelve False si la inserción dejaría el operando en curso con más
        de MAX_OPERAND_DIGITS dígitos.
        Los operadores llegan como un único token (" + ") y el cursor
        avanza toda su longitud de una vez.
        """
        elide_zero = self._text == self.EMPTY and text != "."

        new_digits = len(_DIGIT_RE.findall(text))
        current = 0 if elide_zero else self._operand_digits()
        if new_digits and current + new_digits > MAX_OPERAND_DIGITS:
            return False

        if elide_zero:
            self._text = ""
            self._cursor = 0

        left = self._text[:self._cursor]
        if self.mode is EditMode.INSERT:
            right = self._text[self._cursor:]
        else:
            right = self._text[self._cursor + 1:]
        self._text = left + text + right
        self._cursor += len(text)

        if not self._text:
            self.reset()
        return True

    def _operand_digits(self) -> int:
        return len(_DIGIT_RE.findall(self.active_operand()))

    def delete_backward(self):
        if self._cursor > 0:
            self._text = self._text[:self._cursor - 1] + self._text[self._cursor:]
            self._cursor -= 1
        if not self._text:
            self.reset()

    # ── Navegación ───────────────────────────────────────────────

    def move_cursor(self, direction: str):
        if direction == "left":
            self.place_cursor(self._cursor - 1)
        elif direction == "right":
            self.place_cursor(self._cursor + 1)
        else:
            raise ValueError("La dirección debe ser 'left' o 'right'")

    def place_cursor(self, offset: int):
        self._cursor = min(max(0, offset), len(self._text))

    def toggle_mode(self) -> EditMode:
        if self.mode is EditMode.INSERT:
            self.mode = EditMode.OVERWRITE
        else:
            self.mode = EditMode.INSERT
        return self.mode
