# services/__init__.py
"""
Serviços compartilhados do serviço de Avaliação PCD
"""

from services.text_normalizer import (
    text_normalizer,
    TextNormalizer,
    NormalizationOptions,
    NormalizationResult,
)

__all__ = [
    # Text Normalizer
    "text_normalizer",
    "TextNormalizer",
    "NormalizationOptions",
    "NormalizationResult",
]
