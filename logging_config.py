"""
Configuración de logging de la calculadora.

Los valores por defecto salen de config (CALC_LOG_LEVEL, CALC_LOG_FILE).
"""
import logging
import sys

from config import LOG_FILE, LOG_FORMAT, LOG_LEVEL, QUIET_LOGGERS

HANDLER_NAME = "calculadora"


def setup_logging(level: int | str = LOG_LEVEL, log_file: str | None = LOG_FILE) -> logging.Logger:
    """
    Configura el logger raíz y devuelve el logger de la aplicación.

    Args:
        level: nivel numérico o nombre ("DEBUG", "INFO"...).
        log_file: ruta opcional; el fichero se abre en modo append para
            conservar las sesiones anteriores.
    """
    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler.get_name() == HANDLER_NAME:
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))
    for handler in handlers:
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # Las trazas de conexión de requests no aportan nada en la consola
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    app_logger = logging.getLogger("calculadora")
    app_logger.info("Logging inicializado (nivel %s, fichero %s)",
                    logging.getLevelName(root.level), log_file or "-")
    return app_logger
