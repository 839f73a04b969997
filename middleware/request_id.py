# middleware/request_id.py
"""
Middleware para adicionar Request ID único a cada requisição.

- Gera UUID único para cada requisição (ou reaproveita o header X-Request-ID)
- Adiciona header X-Request-ID na response
- Disponibiliza via contextvars para os logs de qualquer módulo

Uso em outros módulos:
    from middleware.request_id import get_request_id

    request_id = get_request_id()  # ID da requisição atual ou None
"""

import uuid
import logging
from contextvars import ContextVar
from typing import Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"

_request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

logger = logging.getLogger(__name__)


def get_request_id() -> Optional[str]:
    """
    Retorna o Request ID da requisição atual.

    Retorna None se chamado fora do contexto de uma requisição.
    """
    return _request_id_ctx.get()


def set_request_id(request_id: Optional[str]) -> None:
    """Uso interno pelo middleware."""
    _request_id_ctx.set(request_id)


def generate_request_id() -> str:
    """Gera um novo Request ID (UUID v4)."""
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware FastAPI para gerenciamento de Request ID.

    Uso:
        app.add_middleware(RequestIDMiddleware)
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        existing_request_id = request.headers.get(REQUEST_ID_HEADER)
        # Limita tamanho do ID externo
        request_id = existing_request_id[:64] if existing_request_id else generate_request_id()

        request.state.request_id = request_id
        set_request_id(request_id)

        try:
            response: Response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception as e:
            # Deixa a exceção propagar para handlers de erro
            logger.error(f"[{request_id}] Erro durante requisição: {e}")
            raise
        finally:
            set_request_id(None)
