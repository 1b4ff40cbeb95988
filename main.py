"""Punto de entrada de la calculadora."""

import tkinter as tk

from calculation_service import CalculationClient
from calculator_ui import CalculatorApp
from config import BACKEND_URL, LOG_FILE, LOG_LEVEL
from display_controller import DisplayController
from logging_config import setup_logging


def main():
    setup_logging(LOG_LEVEL, LOG_FILE)
    root = tk.Tk()
    root.geometry("380x620")
    root.minsize(340, 580)
    controller = DisplayController(root, client=CalculationClient(BACKEND_URL))
    CalculatorApp(root, controller=controller)
    root.mainloop()


if __name__ == "__main__":
    main()
