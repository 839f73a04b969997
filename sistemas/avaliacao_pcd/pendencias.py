# sistemas/avaliacao_pcd/pendencias.py
"""
Resolução de pendências documentais.

Cada regra é avaliada de forma independente e a ordem de saída é fixa:
laudo médico, CID, CRM e, por fim, as lacunas de exame do tipo detectado.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from utils.logging_config import get_logger

from sistemas.avaliacao_pcd.constants import (
    Pendencia,
    Urgencia,
    Recomendacao,
    PONTUACAO_MINIMA_RECOMENDADA,
)
from sistemas.avaliacao_pcd.schemas import (
    DocumentEvidenceFlags,
    TipoDeficiencia,
    TipoDeficienciaEsperada,
)


@dataclass(frozen=True)
class PendenciasResult:
    missing_documents: List[str] = field(default_factory=list)
    urgency_flags: List[str] = field(default_factory=list)


class MissingDocumentResolver:

    def __init__(self, logger=None):
        self._logger = logger or get_logger(__name__)

    def resolve(
        self,
        evidence: DocumentEvidenceFlags,
        detected_type: TipoDeficiencia,
        type_specific_gaps: Sequence[str] = (),
        expected_type: Optional[TipoDeficienciaEsperada] = None,
    ) -> PendenciasResult:
        """
        Lista documentos faltantes e sinais de urgência.

        A ausência de CID sempre gera exatamente um sinal de urgência.
        A divergência entre tipo esperado e detectado só é sinalizada quando
        o solicitante informou um tipo e o documento tem tipo identificado.
        """
        missing = []
        urgencias = []

        if not evidence.has_medical_report:
            missing.append(Pendencia.LAUDO_MEDICO)

        if not evidence.has_cid_diagnosis:
            missing.append(Pendencia.CID)
            urgencias.append(Urgencia.CID_AUSENTE)

        if not evidence.has_valid_professional_id:
            missing.append(Pendencia.CRM)

        missing.extend(type_specific_gaps)

        if detected_type == TipoDeficiencia.NAO_IDENTIFICADA:
            urgencias.append(Urgencia.TIPO_NAO_IDENTIFICADO)
        elif (
            expected_type is not None
            and expected_type != TipoDeficienciaEsperada.DESCONHECIDA
            and expected_type.value != detected_type.value
        ):
            urgencias.append(Urgencia.TIPO_DIVERGENTE.format(
                detectado=detected_type.value,
                esperado=expected_type.value,
            ))

        if missing or urgencias:
            self._logger.debug("Pendências encontradas", faltantes=len(missing), urgencias=len(urgencias))

        return PendenciasResult(missing_documents=missing, urgency_flags=urgencias)

    def recommend(
        self,
        evidence: DocumentEvidenceFlags,
        detected_type: TipoDeficiencia,
        missing_documents: Sequence[str],
        score: int,
    ) -> List[str]:
        """Recomendações ao analista, na ordem em que devem ser apresentadas."""
        recomendacoes = []

        if missing_documents:
            recomendacoes.append(Recomendacao.SOLICITAR_FALTANTES)

        if not evidence.has_valid_professional_id:
            recomendacoes.append(Recomendacao.VERIFICAR_CRM)

        if score < PONTUACAO_MINIMA_RECOMENDADA:
            recomendacoes.append(Recomendacao.DOCUMENTACAO_INSUFICIENTE)

        if detected_type == TipoDeficiencia.NAO_IDENTIFICADA:
            recomendacoes.append(Recomendacao.IDENTIFICAR_TIPO)

        return recomendacoes
