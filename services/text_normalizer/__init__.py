# services/text_normalizer/__init__.py
"""
Serviço Central de Normalização de Texto

Prepara texto extraído de documentos médicos para busca por palavras-chave.

Uso básico:
    from services.text_normalizer import text_normalizer

    texto_busca = text_normalizer.normalize_for_search(texto_pdf)

Uso com opções:
    from services.text_normalizer import text_normalizer, NormalizationOptions

    options = NormalizationOptions(lowercase=False)
    result = text_normalizer.normalize(texto_pdf, options)

Módulos:
    - normalizer: Classe TextNormalizer e singleton text_normalizer
    - models: Opções, estatísticas e resultado
    - patterns: Regex patterns pré-compilados
"""

from .normalizer import TextNormalizer, text_normalizer, normalize_unicode_chars
from .models import (
    NormalizationOptions,
    NormalizationStats,
    NormalizationResult,
)


__all__ = [
    "TextNormalizer",
    "text_normalizer",
    "normalize_unicode_chars",
    "NormalizationOptions",
    "NormalizationStats",
    "NormalizationResult",
]
