# utils/security_sanitizer.py
"""
Funções de segurança para dados recebidos de fontes externas.
"""

import re
from typing import Optional


# Assinaturas binárias (Magic Numbers)
FILE_SIGNATURES = {
    "application/pdf": [b"%PDF-"],
}


def validate_file_signature(file_content: bytes, expected_mime: str) -> bool:
    """
    SECURITY: Valida a assinatura binária (Magic Numbers) de um arquivo.
    Impede que HTML de erro ou outro conteúdo seja tratado como PDF.
    """
    if expected_mime not in FILE_SIGNATURES:
        return True

    for sig in FILE_SIGNATURES[expected_mime]:
        if file_content.startswith(sig):
            return True

    return False


def only_digits(value: Optional[str]) -> str:
    """Remove tudo que não é dígito."""
    return re.sub(r"\D", "", value or "")


def mask_cpf(cpf: Optional[str]) -> str:
    """
    Mascara um CPF para uso em logs: mantém apenas os dois dígitos verificadores.

    Example:
        >>> mask_cpf("123.456.789-09")
        '***.***.***-09'
    """
    digits = only_digits(cpf)
    if len(digits) < 2:
        return "***"
    return f"***.***.***-{digits[-2:]}"
