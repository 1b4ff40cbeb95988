"""
Controlador de la pantalla de la calculadora.

Coordina el buffer de expresión, el motor de cálculo, el visor de
resultados y la sub-pantalla de mensajes. No depende de tkinter: el
programador de tareas solo necesita la interfaz `after(ms, fn)` /
`after_cancel(id)`, que cumple cualquier widget de tkinter.

Estados:
    Editing          el buffer se edita y se dibuja con cursor.
    ResultDisplayed  un resultado del servicio ocupa la sub-pantalla
                     hasta que se inserta un carácter o se borra todo.
"""

import logging
import math
import threading
from dataclasses import dataclass

from calculation_service import CalculationClient, CalculationServiceFailure
from calculator_engine import CalculatorEngine, format_plain
from config import (
    CURSOR_PLACEHOLDER,
    DEFAULT_FONT_TIER,
    FONT_TIERS,
    MESSAGES,
    OPERATORS,
    RESULT_MODE_PLACEHOLDER,
    RESULT_VIEWPORT_HEIGHT,
    STATUS_REVERT_MS,
)
from display_format import display_cursor_offset, format_expression_for_display, raw_cursor_offset
from expression_buffer import EditMode, ExpressionBuffer
from formula_evaluator import InvalidExpression
from result_viewer import ResultViewer, format_result_lines

logger = logging.getLogger(__name__)


def font_tier(length: int) -> str:
    for name, threshold in FONT_TIERS:
        if length > threshold:
            return name
    return DEFAULT_FONT_TIER


# ═════════════════════════════════════════════════════════════════
#  Tarea diferida cancelable
# ═════════════════════════════════════════════════════════════════

class DeferredTask:
    """Una única acción pendiente; programar otra cancela la anterior."""

    def __init__(self, scheduler):
        self._scheduler = scheduler
        self._after_id = None

    @property
    def pending(self) -> bool:
        return self._after_id is not None

    def schedule(self, delay_ms: int, callback):
        self.cancel()

        def _fire():
            self._after_id = None
            callback()

        self._after_id = self._scheduler.after(delay_ms, _fire)

    def cancel(self):
        if self._after_id is not None:
            self._scheduler.after_cancel(self._after_id)
            self._after_id = None


# ═════════════════════════════════════════════════════════════════
#  Estado de la sesión
# ═════════════════════════════════════════════════════════════════

@dataclass
class DisplaySession:
    status_revert: DeferredTask
    result_mode: bool = False
    status_text: str = ""
    result_text: str = ""
    memory: float = 0.0


@dataclass(frozen=True)
class RenderedDisplay:
    """Texto de la pantalla principal dividido alrededor del cursor."""

    text: str
    cursor: int
    font_tier: str
    left: str = ""
    cursor_char: str = CURSOR_PLACEHOLDER
    right: str = ""


# ═════════════════════════════════════════════════════════════════
#  Controlador
# ═════════════════════════════════════════════════════════════════

class DisplayController:
    """Traduce las órdenes del teclado en cambios de estado y repintados."""

    MEMORY_COMMANDS = ("MC", "MR", "M+", "M-")

    def __init__(self, scheduler, engine: CalculatorEngine | None = None,
                 client: CalculationClient | None = None,
                 viewport_height: float = RESULT_VIEWPORT_HEIGHT):
        self.scheduler = scheduler
        self.engine = engine if engine is not None else CalculatorEngine()
        self.client = client if client is not None else CalculationClient()
        self.viewport_height = viewport_height
        self.buffer = ExpressionBuffer()
        self.session = DisplaySession(status_revert=DeferredTask(scheduler))
        self.viewer: ResultViewer | None = None
        self._listeners = []

    # ── Notificaciones ───────────────────────────────────────────

    def add_listener(self, callback):
        self._listeners.append(callback)

    def _notify(self):
        for callback in self._listeners:
            callback(self)

    @property
    def last_result(self) -> float:
        return self.engine.last_result

    @property
    def memory(self) -> float:
        return self.session.memory

    @property
    def result_mode(self) -> bool:
        return self.session.result_mode

    # ── Sub-pantalla ─────────────────────────────────────────────

    def update_sub_display(self, text: str, temporary: bool = False):
        """Muestra `text`; si es temporal vuelve al contenido anterior tras STATUS_REVERT_MS.

        Solo hay una vuelta atrás pendiente a la vez: un mensaje nuevo
        cancela la anterior para que no sobrescriba el texto más reciente.
        """
        self.session.status_revert.cancel()
        self.session.status_text = text
        if temporary:
            self.session.status_revert.schedule(
                STATUS_REVERT_MS, lambda: self._revert_status(text)
            )
        self._notify()

    def _revert_status(self, text: str):
        if self.session.status_text != text:
            return
        if self.session.result_mode:
            self.session.status_text = self.session.result_text
        else:
            self.session.status_text = self.buffer.text
        self._notify()

    # ── Pantalla principal ───────────────────────────────────────

    def render(self) -> RenderedDisplay:
        formatted = format_expression_for_display(self.buffer.text)
        tier = font_tier(len(formatted))

        if self.session.result_mode:
            return RenderedDisplay(
                text=RESULT_MODE_PLACEHOLDER, cursor=0, font_tier=tier,
                cursor_char=RESULT_MODE_PLACEHOLDER,
            )

        position = display_cursor_offset(self.buffer.text, self.buffer.cursor, formatted)
        return RenderedDisplay(
            text=formatted,
            cursor=position,
            font_tier=tier,
            left=formatted[:position],
            cursor_char=formatted[position:position + 1] or CURSOR_PLACEHOLDER,
            right=formatted[position + 1:],
        )

    # ── Entrada ──────────────────────────────────────────────────

    def insert_character(self, text: str) -> bool:
        if self.session.result_mode:
            self.clear("all")
        if not self.buffer.insert(text):
            return False
        self.update_sub_display(self.buffer.text)
        return True

    def press_key(self, key: str) -> bool:
        if key == "ANS":
            return self.insert_character(format_plain(self.engine.last_result))
        return self.insert_character(key)

    def press_operator(self, op: str) -> bool:
        if op not in OPERATORS:
            raise ValueError(f"Operador no soportado: {op}")
        return self.insert_character(f" {op} ")

    def calculate(self) -> bool:
        if self.session.result_mode:
            return False

        expression = self.buffer.text
        try:
            result = self.engine.evaluate(expression)
        except InvalidExpression as exc:
            logger.debug("Expresión inválida %r: %s", expression, exc)
            self.update_sub_display(MESSAGES["expression_error"], temporary=True)
            return False

        self.buffer.replace(result)
        self.update_sub_display(f"{expression} =")
        return True

    def clear(self, kind: str = "all"):
        if kind not in ("char", "all"):
            raise ValueError("El tipo de borrado debe ser 'char' o 'all'")

        if kind == "all" or self.session.result_mode:
            self.buffer.reset()
            self.session.result_mode = False
            self.session.result_text = ""
            self.viewer = None
        else:
            self.buffer.delete_backward()
        self.update_sub_display(self.buffer.text)

    def move_cursor(self, direction: str):
        if direction not in ("left", "right"):
            raise ValueError("La dirección debe ser 'left' o 'right'")

        if self.session.result_mode:
            if self.viewer is not None:
                if direction == "right":
                    self.viewer.scroll_down()
                else:
                    self.viewer.scroll_up()
        else:
            self.buffer.move_cursor(direction)
        self._notify()

    def place_cursor_at_display(self, display_offset: int):
        if self.session.result_mode:
            return
        offset = raw_cursor_offset(self.buffer.text, display_offset)
        self.buffer.place_cursor(offset)
        self._notify()

    def toggle_insert_mode(self) -> EditMode:
        mode = self.buffer.toggle_mode()
        key = "insert_mode" if mode is EditMode.INSERT else "overwrite_mode"
        self.update_sub_display(MESSAGES[key], temporary=True)
        return mode

    # ── Memoria ──────────────────────────────────────────────────

    def press_memory(self, command: str):
        if command not in self.MEMORY_COMMANDS:
            raise ValueError(f"Orden de memoria desconocida: {command}")

        if command == "MC":
            self.session.memory = 0.0
            self.update_sub_display(MESSAGES["memory_cleared"], temporary=True)
            return

        if command == "MR":
            if self.session.result_mode:
                self.clear("all")
            self.buffer.replace(format_plain(self.session.memory))
            self.update_sub_display(self.buffer.text)
            return

        current = self.engine.parse_number(self.buffer.text)
        if math.isnan(current):
            return

        shown = format_plain(current)
        if command == "M+":
            self.session.memory += current
            self.update_sub_display(MESSAGES["memory_added"].format(value=shown), temporary=True)
        else:
            self.session.memory -= current
            self.update_sub_display(MESSAGES["memory_subtracted"].format(value=shown), temporary=True)

    # ── Resultados del servicio de cálculo ───────────────────────

    def show_function_result(self, function_id: str, data: dict):
        self.clear("all")
        self.viewer = ResultViewer(
            format_result_lines(function_id, data),
            viewport_height=self.viewport_height,
        )
        self.session.result_mode = True
        self.session.result_text = self.viewer.text
        self.session.status_revert.cancel()
        self.session.status_text = self.session.result_text
        self._notify()

    def execute_calculation(self, function_id: str, params: dict) -> threading.Thread:
        """Lanza la petición en un hilo aparte sin bloquear la interfaz.

        La respuesta vuelve al hilo de la interfaz mediante `after(0, ...)`.
        Si llega con éxito sustituye cualquier edición posterior.
        """
        self.update_sub_display(MESSAGES["computing"], temporary=True)

        def _run():
            try:
                data = self.client.calculate(function_id, params)
            except CalculationServiceFailure as exc:
                logger.error("Error de cálculo en %s: %s", function_id, exc)
                message = MESSAGES["calculation_error"].format(error=exc)
                self.scheduler.after(0, lambda: self.update_sub_display(message, temporary=True))
                return
            self.scheduler.after(0, lambda: self.show_function_result(function_id, data))

        thread = threading.Thread(target=_run, daemon=True)
        thread.start()
        return thread
