# sistemas/avaliacao_pcd/classifier.py
"""
Classificador de deficiência por palavras-chave.

Aplica a tabela REGRAS_DEFICIENCIA sobre o texto normalizado do documento
e detecta as evidências médicas (CID, CRM, assinatura, exames) usadas
na pontuação de completude.

Política de desempate: as regras são avaliadas em ordem fixa e a última
que casar define o tipo principal. Qualificações e lacunas de exame vêm
somente dessa regra, mesmo quando o tipo final é MULTIPLA.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from services.text_normalizer import text_normalizer
from utils.logging_config import get_logger

from sistemas.avaliacao_pcd.constants import (
    REGRAS_DEFICIENCIA,
    MINIMO_TIPOS_MULTIPLA,
    MARCADORES_CID,
    MARCADORES_CRM,
    TRATAMENTOS_MEDICOS,
    MARCADORES_LAUDO_MEDICO,
    MARCADORES_RELATORIO_ESPECIALISTA,
    MARCADORES_EXAMES_COMPLEMENTARES,
    MARCADORES_CIF,
)
from sistemas.avaliacao_pcd.schemas import TipoDeficiencia, DocumentEvidenceFlags


def contem_algum(texto: str, termos: Iterable[str]) -> bool:
    """True se qualquer termo aparece no texto (já normalizado)."""
    return any(termo in texto for termo in termos)


def contem_cid(texto: str) -> bool:
    return contem_algum(texto, MARCADORES_CID)


def contem_crm(texto: str) -> bool:
    return contem_algum(texto, MARCADORES_CRM)


@dataclass(frozen=True)
class ClassificationResult:
    """Resultado da classificação de um texto."""
    deficiency_type: TipoDeficiencia
    matched_qualifications: List[str] = field(default_factory=list)
    type_specific_gaps: List[str] = field(default_factory=list)
    # Todos os tipos base cujas regras casaram, na ordem da tabela
    matched_types: List[TipoDeficiencia] = field(default_factory=list)

    @property
    def identificado(self) -> bool:
        return self.deficiency_type != TipoDeficiencia.NAO_IDENTIFICADA


class KeywordClassifier:
    """
    Classificador sem estado: a mesma instância atende chamadas concorrentes.

    Os métodos aceitam texto bruto ou já normalizado; a normalização para
    busca é idempotente.
    """

    def __init__(self, regras=REGRAS_DEFICIENCIA, normalizer=None, logger=None):
        self._regras = tuple(regras)
        self._normalizer = normalizer or text_normalizer
        self._logger = logger or get_logger(__name__)

    def _texto_busca(self, text: Optional[str]) -> str:
        return self._normalizer.normalize_for_search(text or "")

    def classify(self, text: str) -> ClassificationResult:
        """
        Detecta o tipo de deficiência descrito no texto.

        Returns:
            ClassificationResult com tipo, qualificações do emissor esperadas
            e exames obrigatórios ausentes para o tipo vencedor.
        """
        texto = self._texto_busca(text)

        vencedora = None
        matched_types = []
        for regra in self._regras:
            if contem_algum(texto, regra.gatilhos):
                matched_types.append(regra.tipo)
                vencedora = regra

        if vencedora is None:
            self._logger.debug("Nenhum tipo de deficiência identificado")
            return ClassificationResult(deficiency_type=TipoDeficiencia.NAO_IDENTIFICADA)

        lacunas = []
        if vencedora.exames_obrigatorios and not contem_algum(texto, vencedora.exames_obrigatorios):
            lacunas.append(vencedora.lacuna_exame)

        tipo = vencedora.tipo
        if len(matched_types) >= MINIMO_TIPOS_MULTIPLA:
            tipo = TipoDeficiencia.MULTIPLA

        self._logger.debug(
            "Tipo de deficiência classificado",
            tipo=tipo.value,
            tipos_encontrados=[t.value for t in matched_types],
            lacunas=len(lacunas),
        )

        return ClassificationResult(
            deficiency_type=tipo,
            matched_qualifications=list(vencedora.qualificacoes),
            type_specific_gaps=lacunas,
            matched_types=matched_types,
        )

    def detect_evidence(self, text: str) -> DocumentEvidenceFlags:
        """
        Detecta as evidências documentais presentes no texto.

        ``type_detected`` fica False: é preenchido por quem combina a
        classificação com as evidências.
        """
        texto = self._texto_busca(text)

        tem_crm = contem_crm(texto)
        return DocumentEvidenceFlags(
            has_medical_report=contem_algum(texto, MARCADORES_LAUDO_MEDICO),
            has_specialist_report=contem_algum(texto, MARCADORES_RELATORIO_ESPECIALISTA),
            has_cid_diagnosis=contem_cid(texto),
            has_valid_signature=tem_crm and contem_algum(texto, TRATAMENTOS_MEDICOS),
            has_valid_professional_id=tem_crm,
            has_complementary_exams=contem_algum(texto, MARCADORES_EXAMES_COMPLEMENTARES),
            has_cif_criteria=contem_algum(texto, MARCADORES_CIF),
        )
