"""Visor de resultados de funciones: bloque de líneas de solo lectura con scroll vertical."""

import math
from collections.abc import Mapping

from config import GROUPED_RESULT_FUNCTIONS, RESULT_LINE_HEIGHT, RESULT_VIEWPORT_HEIGHT


def _group_lines(prefix: str, entries: list[tuple[str, str]]) -> list[str]:
    lines = []
    for index, (key, value) in enumerate(entries):
        clean_key = key.replace(f"{prefix} ", "", 1)
        title = f"-{prefix}-" if index == 0 else ""
        lines.append(f"{title}{clean_key}: {value}")
    return lines


def format_result_lines(function_id: str, data: Mapping[str, object]) -> list[str]:
    """Convierte el resultado del servicio en líneas "clave: valor".

    Las funciones con resultados por grupos (p. ej. P1: PUSH y PULL)
    se muestran en bloques; la primera línea de cada bloque lleva el
    título del grupo y las claves pierden el prefijo.
    """
    groups = GROUPED_RESULT_FUNCTIONS.get(function_id)
    if not groups:
        return [f"{key}: {value}" for key, value in data.items()]

    lines = []
    for prefix in groups:
        entries = [(key, value) for key, value in data.items() if key.startswith(prefix)]
        lines.extend(_group_lines(prefix, entries))
    return lines


class ResultViewer:
    """Estado de scroll del bloque de resultados.

    scroll_offset se mueve de una línea en una línea y siempre queda en
    [0, max_scroll]. Los indicadores se muestran solo si hay contenido
    oculto en esa dirección.
    """

    def __init__(self, lines, viewport_height: float = RESULT_VIEWPORT_HEIGHT,
                 line_height: float = RESULT_LINE_HEIGHT):
        if isinstance(lines, Mapping):
            lines = [f"{key}: {value}" for key, value in lines.items()]
        self.lines = list(lines)
        self.viewport_height = viewport_height
        self.line_height = line_height
        self.scroll_offset = 0.0

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def content_height(self) -> float:
        return len(self.lines) * self.line_height

    @property
    def max_scroll(self) -> float:
        return max(0.0, self.content_height - self.viewport_height)

    @property
    def scrollable(self) -> bool:
        return self.content_height > self.viewport_height

    # ── Scroll ───────────────────────────────────────────────────

    def scroll_up(self):
        self.scroll_offset = max(0.0, self.scroll_offset - self.line_height)

    def scroll_down(self):
        self.scroll_offset = min(self.scroll_offset + self.line_height, self.max_scroll)

    @property
    def show_up_indicator(self) -> bool:
        return self.scroll_offset > 0

    @property
    def show_down_indicator(self) -> bool:
        return self.scroll_offset < self.max_scroll

    def visible_lines(self) -> list[str]:
        first = int(self.scroll_offset // self.line_height)
        count = math.ceil(self.viewport_height / self.line_height)
        return self.lines[first:first + count]
