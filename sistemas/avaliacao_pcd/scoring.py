# sistemas/avaliacao_pcd/scoring.py
"""
Pontuação de completude documental.

Rubrica aditiva fixa (PESOS_COMPLETUDE, soma 100) e faixas de qualidade
(FAIXAS_QUALIDADE). Não há aprendizado: os limiares precisam ser
reproduzidos exatamente para manter os resultados comparáveis.
"""

from typing import NamedTuple

from utils.logging_config import get_logger

from sistemas.avaliacao_pcd.constants import (
    PESOS_COMPLETUDE,
    PONTUACAO_MAXIMA,
    FAIXAS_QUALIDADE,
)
from sistemas.avaliacao_pcd.schemas import DocumentEvidenceFlags, QualidadeDocumental


class CompletenessResult(NamedTuple):
    score: int
    tier: QualidadeDocumental


def qualidade_para_pontuacao(score: int) -> QualidadeDocumental:
    """Faixa de qualidade correspondente à pontuação."""
    for minimo, qualidade in FAIXAS_QUALIDADE:
        if score >= minimo:
            return qualidade
    return QualidadeDocumental.INSUFICIENTE


class CompletenessScorer:

    def __init__(self, pesos=None, logger=None):
        self._pesos = dict(pesos or PESOS_COMPLETUDE)
        self._logger = logger or get_logger(__name__)

    def score(self, evidence: DocumentEvidenceFlags) -> CompletenessResult:
        """Soma os pesos das evidências presentes, limitado a 100."""
        total = sum(
            peso for campo, peso in self._pesos.items()
            if getattr(evidence, campo)
        )
        total = max(0, min(total, PONTUACAO_MAXIMA))
        tier = qualidade_para_pontuacao(total)

        self._logger.debug("Completude calculada", score=total, qualidade=tier.value)
        return CompletenessResult(score=total, tier=tier)
