"""
Configuración global de la calculadora.

Constantes compartidas por el núcleo de edición y por la interfaz.
La URL del servicio de cálculo puede sobrescribirse con la variable
de entorno CALC_BACKEND_URL; el nivel y el fichero de log con
CALC_LOG_LEVEL y CALC_LOG_FILE.
"""

import os


# ── Servicio de cálculo remoto ───────────────────────────────────

BACKEND_URL = os.environ.get("CALC_BACKEND_URL", "https://pkun-backend.onrender.com")
REQUEST_TIMEOUT = 15.0      # segundos

# ── Logging ──────────────────────────────────────────────────────

LOG_LEVEL = os.environ.get("CALC_LOG_LEVEL", "INFO").upper()
LOG_FILE = os.environ.get("CALC_LOG_FILE") or None
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Bibliotecas de terceros que solo informan a partir de WARNING
QUIET_LOGGERS = ("urllib3", "requests")

# ── Edición ──────────────────────────────────────────────────────

MAX_OPERAND_DIGITS = 15
GROUP_SEPARATOR = ","
OPERATORS = ("+", "-", "×", "÷")

# ── Pantalla ─────────────────────────────────────────────────────

STATUS_REVERT_MS = 1500
CURSOR_PLACEHOLDER = "\u00A0"   # espacio no separable al final del texto
RESULT_MODE_PLACEHOLDER = "0"

# (nombre, longitud mínima exclusiva) de mayor a menor umbral
FONT_TIERS = (
    ("small", 15),
    ("medium", 11),
)
DEFAULT_FONT_TIER = "large"
FONT_SIZES = {"large": 30, "medium": 24, "small": 18}

# ── Visor de resultados ──────────────────────────────────────────

RESULT_LINE_HEIGHT = 25.2       # px por línea
RESULT_VIEWPORT_HEIGHT = 76.0   # tres líneas visibles
GROUPED_RESULT_FUNCTIONS = {
    "P1": ("PUSH", "PULL"),
}

# ── Mensajes ─────────────────────────────────────────────────────

MESSAGES = {
    "expression_error": "expression error",
    "insert_mode": "INS",
    "overwrite_mode": "OVR",
    "memory_cleared": "memory cleared",
    "memory_added": "{value} added",
    "memory_subtracted": "{value} subtracted",
    "computing": "computing...",
    "calculation_error": "calculation error: {error}",
    "server_error": "server error: {status}",
}
