# services/text_normalizer/normalizer.py
"""
Normalização de texto para busca por palavras-chave.

O texto bruto extraído do PDF nunca é alterado; este módulo produz a
versão usada pelas tabelas de regras (minúsculas, acentos compostos,
espaços colapsados).
"""

import time
import unicodedata
from typing import Optional

from utils.logging_config import get_logger

from .models import (
    NormalizationOptions,
    NormalizationStats,
    NormalizationResult,
)
from .patterns import (
    CONTROL_CHARS,
    INVISIBLE_UNICODE,
    ANY_WHITESPACE,
    BROKEN_HYPHENATION,
    UNICODE_NORMALIZE_MAP,
)


logger = get_logger(__name__)


def normalize_unicode_chars(text: str) -> str:
    """
    Normaliza caracteres Unicode.

    - Compõe acentos (NFC): "e" + U+0302 vira "ê"
    - Smart quotes para aspas simples/duplas normais
    - Dashes tipográficos para hífen
    - Espaços especiais para espaço normal
    """
    if not text:
        return ""
    return unicodedata.normalize("NFC", text).translate(UNICODE_NORMALIZE_MAP)


class TextNormalizer:
    """
    Normalizador de texto extraído de documentos médicos.

    Não guarda estado entre chamadas; o singleton ``text_normalizer``
    pode ser usado concorrentemente.

    Exemplo de uso:
        from services.text_normalizer import text_normalizer

        texto_busca = text_normalizer.normalize_for_search(texto_pdf)
    """

    def __init__(self):
        self._default_options = NormalizationOptions()

    def normalize(
        self,
        text: str,
        options: Optional[NormalizationOptions] = None
    ) -> NormalizationResult:
        """
        Normaliza texto aplicando pipeline de transformações.

        Args:
            text: Texto bruto para normalizar
            options: Opções de normalização (usa padrões se None)

        Returns:
            NormalizationResult com texto normalizado e estatísticas
        """
        start_time = time.perf_counter()
        options = options or self._default_options

        stats = NormalizationStats(original_length=len(text) if text else 0)

        if not text or not text.strip():
            stats.processing_time_ms = (time.perf_counter() - start_time) * 1000
            return NormalizationResult(text="", stats=stats)

        result = text

        # 1. Remove caracteres de controle
        if options.remove_control_chars:
            result = CONTROL_CHARS.sub('', result)

        # 2. Remove unicode invisível
        if options.remove_invisible_unicode:
            result = INVISIBLE_UNICODE.sub('', result)

        # 3. Normaliza caracteres unicode
        if options.normalize_unicode:
            result = normalize_unicode_chars(result)

        # 4. Corrige hifenização quebrada (antes de colapsar as linhas)
        if options.fix_hyphenation:
            result, fixed = self._fix_hyphenation(result)
            stats.hyphenations_fixed = fixed

        # 5. Colapsa whitespace
        if options.collapse_whitespace:
            result = ANY_WHITESPACE.sub(' ', result)

        # 6. Minúsculas
        if options.lowercase:
            result = result.lower()

        result = result.strip()

        stats.normalized_length = len(result)
        stats.chars_removed = stats.original_length - stats.normalized_length
        stats.processing_time_ms = (time.perf_counter() - start_time) * 1000

        # Log métricas (sem conteúdo)
        logger.debug(
            "Texto normalizado",
            original_length=stats.original_length,
            normalized_length=stats.normalized_length,
            hyphenations_fixed=stats.hyphenations_fixed,
        )

        return NormalizationResult(text=result, stats=stats)

    def normalize_for_search(self, text: str) -> str:
        """Atalho: texto pronto para comparação com as tabelas de palavras-chave."""
        return self.normalize(text).text

    def _fix_hyphenation(self, text: str) -> tuple[str, int]:
        """
        Corrige palavras hifenizadas quebradas entre linhas.

        Ex: "defi-\\nciência" -> "deficiência"

        Returns:
            Tupla (texto corrigido, número de correções)
        """
        count = 0

        def replace_hyphen(match):
            nonlocal count
            count += 1
            return match.group(1) + match.group(2)

        result = BROKEN_HYPHENATION.sub(replace_hyphen, text)
        return result, count


# Singleton para uso direto
text_normalizer = TextNormalizer()
