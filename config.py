# config.py
# -*- coding: utf-8 -*-
"""
Configurações centralizadas do serviço de Avaliação PCD
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Carrega variáveis de ambiente (apenas se existir .env)
load_dotenv()

# ==================================================
# AMBIENTE
# ==================================================
ENV = os.getenv("ENV", "development")
IS_PRODUCTION = ENV == "production"

BASE_DIR = Path(__file__).resolve().parent

# ==================================================
# LAUDO CARACTERIZADOR
# ==================================================
# Local impresso no bloco de assinatura do laudo
LAUDO_LOCAL_EMISSAO = os.getenv("LAUDO_LOCAL_EMISSAO", "Sao Paulo/SP")

# Validade legal do laudo, em anos
LAUDO_VALIDADE_ANOS = int(os.getenv("LAUDO_VALIDADE_ANOS", "2"))

# ==================================================
# DOCUMENTOS PDF
# ==================================================
PDF_MAX_BYTES = int(os.getenv("PDF_MAX_BYTES", str(20 * 1024 * 1024)))  # 20MB

# ==================================================
# TIMEZONE
# ==================================================
TIMEZONE_LOCAL_NAME = os.getenv("TIMEZONE_LOCAL_NAME", "America/Sao_Paulo")
