# utils/timeouts.py
"""
Configuração centralizada de timeouts para integrações externas.

USO:
    from utils.timeouts import Timeouts, get_timeout

    timeout = Timeouts.PDF_DOWNLOAD

    # Ou via função (permite override por env var)
    timeout = get_timeout("pdf_download", as_httpx=True)

VARIÁVEIS DE AMBIENTE:
    TIMEOUT_HTTP_CONNECT=10
    TIMEOUT_PDF_DOWNLOAD=60
"""

import os
from dataclasses import dataclass
from typing import Optional, Union
import httpx


@dataclass(frozen=True)
class Timeouts:
    """
    Timeouts padrão para diferentes tipos de operações.

    Valores em segundos.
    """

    HTTP_DEFAULT: float = 30.0          # Request HTTP genérico
    HTTP_CONNECT: float = 10.0          # Tempo para estabelecer conexão

    PDF_DOWNLOAD: float = 60.0          # Download do PDF do laudo médico


def get_timeout(
    operation: str,
    default: Optional[float] = None,
    as_httpx: bool = False
) -> Union[float, httpx.Timeout]:
    """
    Obtém timeout para uma operação, com suporte a override via env var.

    Args:
        operation: Nome da operação (ex: "pdf_download")
        default: Valor padrão se não encontrado
        as_httpx: Se True, retorna httpx.Timeout ao invés de float

    Returns:
        Timeout em segundos ou httpx.Timeout

    Example:
        # Com override via TIMEOUT_PDF_DOWNLOAD=120
        timeout = get_timeout("pdf_download")  # 120.0
    """
    defaults_map = {
        "http_default": Timeouts.HTTP_DEFAULT,
        "http_connect": Timeouts.HTTP_CONNECT,
        "pdf_download": Timeouts.PDF_DOWNLOAD,
    }

    operation_lower = operation.lower().replace("-", "_")
    timeout_default = defaults_map.get(operation_lower, default or Timeouts.HTTP_DEFAULT)

    env_value = os.getenv(f"TIMEOUT_{operation_lower.upper()}")
    if env_value:
        try:
            timeout_default = float(env_value)
        except ValueError:
            pass  # Mantém o default se env var for inválida

    if as_httpx:
        return httpx.Timeout(timeout_default, connect=get_timeout("http_connect"))

    return timeout_default
