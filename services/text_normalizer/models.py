# services/text_normalizer/models.py
"""
Modelos de dados para o serviço de normalização de texto.
"""

from dataclasses import dataclass, field
from pydantic import BaseModel, Field, ConfigDict


class NormalizationOptions(BaseModel):
    """Opções configuráveis para normalização de texto."""

    model_config = ConfigDict(frozen=True)

    remove_control_chars: bool = Field(
        default=True,
        description="Remove caracteres de controle"
    )

    remove_invisible_unicode: bool = Field(
        default=True,
        description="Remove caracteres Unicode invisíveis"
    )

    normalize_unicode: bool = Field(
        default=True,
        description="Normaliza acentos para NFC e troca smart quotes, dashes e espaços especiais"
    )

    fix_hyphenation: bool = Field(
        default=True,
        description="Corrige palavras hifenizadas quebradas entre linhas"
    )

    collapse_whitespace: bool = Field(
        default=True,
        description="Colapsa qualquer sequência de espaços e quebras de linha em um espaço"
    )

    lowercase: bool = Field(
        default=True,
        description="Converte o texto para minúsculas"
    )


@dataclass
class NormalizationStats:
    """Estatísticas da normalização."""

    original_length: int = 0
    normalized_length: int = 0
    chars_removed: int = 0
    hyphenations_fixed: int = 0
    processing_time_ms: float = 0.0


@dataclass
class NormalizationResult:
    """Resultado completo da normalização (uso interno)."""

    text: str
    stats: NormalizationStats = field(default_factory=NormalizationStats)
