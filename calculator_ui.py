"""
Interfaz gráfica de la calculadora.

Usa tkinter. Toda la lógica de edición vive en DisplayController; esta
capa solo dibuja su estado y traduce botones y teclas en órdenes.
Las peticiones al servicio de cálculo se ejecutan en un hilo aparte
para no bloquear la interfaz.
"""

import logging
import tkinter as tk
from tkinter import font as tkfont
from tkinter import simpledialog

from config import FONT_SIZES, RESULT_LINE_HEIGHT
from display_controller import DisplayController

logger = logging.getLogger(__name__)


def parse_function_params(text: str) -> dict[str, str]:
    """Convierte "a=1, b=2" en {"a": "1", "b": "2"}."""
    params = {}
    for item in text.split(","):
        if not item.strip():
            continue
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Parámetro inválido: {item.strip()}")
        params[name.strip()] = value.strip()
    return params


# ═════════════════════════════════════════════════════════════════
#  Widget: sub-pantalla con scroll vertical por líneas
# ═════════════════════════════════════════════════════════════════

class ResultPane:
    """Texto de solo lectura con indicadores ▲▼ para el visor de resultados."""

    VISIBLE_LINES = 3

    def __init__(self, parent, **kw):
        bg = kw.get("bg")
        self._frame = tk.Frame(parent, bg=bg)
        self._text = tk.Text(
            self._frame, height=self.VISIBLE_LINES, wrap="word",
            relief="flat", bd=0, cursor="arrow", **kw,
        )
        self._text.pack(side="left", fill="both", expand=True)

        indicators = tk.Frame(self._frame, bg=bg)
        indicators.pack(side="right", fill="y")
        self._up = tk.Label(indicators, text="▲", bg=bg, fg=kw.get("fg"))
        self._down = tk.Label(indicators, text="▼", bg=bg, fg=kw.get("fg"))
        self._up.pack(side="top")
        self._down.pack(side="bottom")
        self._text.configure(state="disabled")

    @property
    def widget(self):
        return self._frame

    def set_text(self, text: str):
        self._text.configure(state="normal")
        self._text.delete("1.0", "end")
        self._text.insert("1.0", text)
        self._text.configure(state="disabled")

    def set_indicators(self, up: bool, down: bool):
        self._up.configure(text="▲" if up else " ")
        self._down.configure(text="▼" if down else " ")


# ═════════════════════════════════════════════════════════════════
#  Aplicación principal
# ═════════════════════════════════════════════════════════════════

class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "cursor":     "#A6E3A1",
        "expr_fg":    "#BAC2DE",
        "result_fg":  "#A6E3A1",
    }

    # ── Definiciones del teclado ─────────────────────────────────
    #  Cada fila es una lista de (texto, acción, tipo_color)
    #  tipo_color: "num", "op", "func", "special", "equals"

    KEYPAD = [
        [("MC", "memory:MC", "func"), ("MR", "memory:MR", "func"),
         ("M+", "memory:M+", "func"), ("M−", "memory:M-", "func"),
         ("FN", "function", "func")],

        [("◀", "move:left", "special"), ("▶", "move:right", "special"),
         ("INS", "insert_mode", "special"), ("ANS", "key:ANS", "special")],

        [("AC", "clear:all", "special"), ("C", "clear:char", "special"),
         ("(", "key:(", "func"), (")", "key:)", "func"),
         ("÷", "op:÷", "op")],

        [("7", "key:7", "num"), ("8", "key:8", "num"),
         ("9", "key:9", "num"), ("×", "op:×", "op")],

        [("4", "key:4", "num"), ("5", "key:5", "num"),
         ("6", "key:6", "num"), ("−", "op:-", "op")],

        [("1", "key:1", "num"), ("2", "key:2", "num"),
         ("3", "key:3", "num"), ("+", "op:+", "op")],

        [("0", "key:0", "num"), (".", "key:.", "num"),
         ("=", "equals", "equals")],
    ]

    # Teclas físicas -> acción
    KEY_ACTIONS = {
        "plus": "op:+", "KP_Add": "op:+",
        "minus": "op:-", "KP_Subtract": "op:-",
        "asterisk": "op:×", "KP_Multiply": "op:×",
        "slash": "op:÷", "KP_Divide": "op:÷",
        "period": "key:.", "KP_Decimal": "key:.",
        "parenleft": "key:(", "parenright": "key:)",
        "Return": "equals", "KP_Enter": "equals", "equal": "equals",
        "BackSpace": "clear:char", "Escape": "clear:all",
        "Left": "move:left", "Right": "move:right",
        "Insert": "insert_mode",
    }

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, controller: DisplayController | None = None):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self.controller = controller if controller is not None else DisplayController(root)

        self._init_fonts()
        self._create_display()
        self._create_keypad()
        self._bind_keyboard()

        self.controller.add_listener(lambda _c: self.refresh())
        self.refresh()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr   = tkfont.Font(family="Consolas", size=FONT_SIZES["large"])
        self._f_sub    = tkfont.Font(family="Consolas", size=12)
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_func   = tkfont.Font(family="Segoe UI", size=12)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        # Sub-pantalla: mensajes temporales o resultado de funciones
        self.result_pane = ResultPane(
            frame, font=self._f_sub, bg=self.C["display_bg"],
            fg=self.C["expr_fg"], spacing1=0,
            spacing3=max(0, round(RESULT_LINE_HEIGHT) - 18),
        )
        self.result_pane.widget.pack(fill="x", pady=(4, 0))

        # Pantalla principal con cursor
        self.expr_text = tk.Text(
            frame, height=1, font=self._f_expr, bg=self.C["display_bg"],
            fg=self.C["result_fg"], relief="flat", bd=0, wrap="none",
            cursor="xterm", insertwidth=0,
        )
        self.expr_text.tag_configure("right", justify="right")
        self.expr_text.tag_configure(
            "cursor", background=self.C["cursor"], foreground=self.C["display_bg"],
        )
        self.expr_text.pack(fill="x", pady=(2, 4))
        self.expr_text.bind("<Button-1>", self._on_display_click)
        self.expr_text.bind("<Key>", self._on_display_key)

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        # Determinar el ancho máximo de las filas
        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, action, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text,
                    font=self._f_func if kind in ("func", "special") else self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda a=action: self._on_key(a),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=8)
                col_pos += spans[idx]

        for r in range(len(self.KEYPAD)):
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # Asignar columnas extra al último botón (generalmente '=')
        spans[-1] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    def _on_keypress(self, event):
        if event.char and event.char.isdigit():
            self._on_key(f"key:{event.char}")
            return "break"
        action = self.KEY_ACTIONS.get(event.keysym)
        if action is not None:
            self._on_key(action)
            return "break"
        return None

    def _on_display_key(self, event):
        # El Text no es editable directamente: todo pasa por el controlador
        self._on_keypress(event)
        return "break"

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, action: str):
        kind, _, value = action.partition(":")
        c = self.controller
        if kind == "key":
            c.press_key(value)
        elif kind == "op":
            c.press_operator(value)
        elif kind == "equals":
            c.calculate()
        elif kind == "clear":
            c.clear(value)
        elif kind == "move":
            c.move_cursor(value)
        elif kind == "insert_mode":
            c.toggle_insert_mode()
        elif kind == "memory":
            c.press_memory(value)
        elif kind == "function":
            self._ask_function()

    def _on_display_click(self, event):
        index = self.expr_text.index(f"@{event.x},{event.y}")
        _line, column = index.split(".")
        self.controller.place_cursor_at_display(int(column))
        return "break"

    def _ask_function(self):
        function_id = simpledialog.askstring("Función", "Identificador (p. ej. P0):", parent=self.root)
        if not function_id:
            return
        raw_params = simpledialog.askstring("Función", "Parámetros (nombre=valor, ...):", parent=self.root)
        try:
            params = parse_function_params(raw_params or "")
        except ValueError as exc:
            logger.warning("Parámetros inválidos: %s", exc)
            self.controller.update_sub_display(str(exc), temporary=True)
            return
        self.controller.execute_calculation(function_id.strip(), params)

    # ── Repintado ────────────────────────────────────────────────

    def refresh(self):
        rendered = self.controller.render()
        self._f_expr.configure(size=FONT_SIZES[rendered.font_tier])

        self.expr_text.delete("1.0", "end")
        self.expr_text.insert("1.0", rendered.left, "right")
        self.expr_text.insert("end-1c", rendered.cursor_char, ("right", "cursor"))
        self.expr_text.insert("end-1c", rendered.right, "right")

        session = self.controller.session
        viewer = self.controller.viewer
        if session.result_mode and viewer is not None and session.status_text == session.result_text:
            self.result_pane.set_text("\n".join(viewer.visible_lines()))
            self.result_pane.set_indicators(viewer.show_up_indicator, viewer.show_down_indicator)
        else:
            self.result_pane.set_text(session.status_text)
            self.result_pane.set_indicators(False, False)
