"""Cliente HTTP del servicio de cálculo remoto (funciones P0, P1, SP2...)."""

import logging

import requests

from config import BACKEND_URL, MESSAGES, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class CalculationServiceFailure(RuntimeError):
    """El servicio devolvió un error o no se pudo contactar."""


class CalculationClient:
    """Envía {functionId, params} a /calculate y devuelve las líneas etiquetadas."""

    def __init__(self, base_url: str = BACKEND_URL, timeout: float = REQUEST_TIMEOUT,
                 session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()

    def calculate(self, function_id: str, params: dict) -> dict[str, str]:
        url = f"{self.base_url}/calculate"
        logger.info("Solicitando %s a %s", function_id, url)
        try:
            response = self._session.post(
                url,
                json={"functionId": function_id, "params": params},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise CalculationServiceFailure(str(exc)) from exc

        if not response.ok:
            raise CalculationServiceFailure(self._error_message(response))

        try:
            data = response.json()
        except ValueError as exc:
            raise CalculationServiceFailure("Respuesta no válida del servidor") from exc
        if not isinstance(data, dict):
            raise CalculationServiceFailure("Respuesta no válida del servidor")
        return {str(key): str(value) for key, value in data.items()}

    @staticmethod
    def _error_message(response) -> str:
        fallback = MESSAGES["server_error"].format(status=response.status_code)
        try:
            payload = response.json()
        except ValueError:
            return fallback
        if isinstance(payload, dict) and payload.get("error"):
            return str(payload["error"])
        return fallback
