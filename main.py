# main.py
"""
Serviço de Avaliação PCD - Aplicação FastAPI Principal

Unifica:
- Análise de completude de documentos médicos
- Avaliação de elegibilidade PCD (Lei 13.146/2015)
- Emissão do Laudo Caracterizador

Sem autenticação nem persistência: cada requisição é independente.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import ENV
from middleware.request_id import RequestIDMiddleware
from utils.logging_config import setup_logging, get_logger

from sistemas.avaliacao_pcd.router import router as avaliacao_pcd_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifecycle events da aplicação.
    Executa na inicialização e no shutdown.
    """
    # Startup
    setup_logging()
    logger.info("Iniciando serviço de Avaliação PCD", env=ENV)
    yield
    # Shutdown
    logger.info("Encerrando serviço de Avaliação PCD")


# Cria a aplicação FastAPI
app = FastAPI(
    title="Avaliação PCD",
    description="Análise documental, elegibilidade e Laudo Caracterizador de Pessoa com Deficiência",
    version="1.0.0",
    lifespan=lifespan
)

# Configuração de CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request ID para correlação de logs
app.add_middleware(RequestIDMiddleware)


# ==================================================
# ROTAS
# ==================================================

@app.get("/health")
async def health_check():
    """Health check para monitoramento"""
    return {"status": "ok"}


app.include_router(avaliacao_pcd_router, prefix="/api/avaliacao-pcd")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=not ENV == "production")
