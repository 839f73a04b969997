# sistemas/avaliacao_pcd/elegibilidade.py
"""
Avaliação de elegibilidade PCD a partir de documentos estruturados.

Tabela de decisão (primeiro ramo que casar):
1. Há documentos, mas falta laudo médico ou relatório de especialista -> TALVEZ, 0.3
2. Tipo detectado e limitação funcional documentada -> SIM, 0.8, MODERADA
3. Documentos presentes e tipo detectado, sem limitação -> TALVEZ, 0.6, avaliação física
4. Caso contrário -> NAO, 0.7

A fundamentação legal é o mesmo conjunto de citações em toda avaliação,
inclusive na avaliação degradada devolvida quando a análise falha.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from services.text_normalizer import text_normalizer
from utils.logging_config import get_logger
from utils.security_sanitizer import mask_cpf

from sistemas.avaliacao_pcd.classifier import contem_algum, contem_cid
from sistemas.avaliacao_pcd.constants import (
    REGRAS_LIMITACAO,
    MARCADORES_LIMITACAO_FUNCIONAL,
    EvidenciaClinica,
    DocumentoFaltante,
    CONFIANCA_DOCUMENTACAO_INCOMPLETA,
    CONFIANCA_CONFIRMADO,
    CONFIANCA_SEM_LIMITACAO,
    CONFIANCA_NAO_ENQUADRA,
    CONFIANCA_ERRO,
    FATORES_COMPENSATORIOS,
    FUNDAMENTACAO_LEI_13146,
    FUNDAMENTACAO_CIF,
    FUNDAMENTACAO_DECRETO,
    RACIOCINIO_SIM,
    RACIOCINIO_NAO,
    RACIOCINIO_TALVEZ,
    RACIOCINIO_FALTAM_DOCUMENTOS,
    RACIOCINIO_AVALIACAO_FISICA,
    RACIOCINIO_ERRO,
)
from sistemas.avaliacao_pcd.schemas import (
    AvaliacaoElegibilidadeRequest,
    EligibilityAssessment,
    GrauDeficiencia,
    LegalFramework,
    ResultadoAvaliacao,
    StructuredDocumentEntry,
    TipoDeficiencia,
    TipoDocumento,
)

logger = get_logger(__name__)


def fundamentacao_legal() -> LegalFramework:
    return LegalFramework(
        lei13146=FUNDAMENTACAO_LEI_13146,
        cif=FUNDAMENTACAO_CIF,
        decreto=FUNDAMENTACAO_DECRETO,
    )


def avaliacao_degradada() -> EligibilityAssessment:
    """Avaliação devolvida quando a análise falha: TALVEZ com confiança mínima."""
    return EligibilityAssessment(
        outcome=ResultadoAvaliacao.TALVEZ,
        confidence=CONFIANCA_ERRO,
        deficiency_type=None,
        functional_limitations=[],
        compensatory_factors=[],
        legal_justification=fundamentacao_legal(),
        clinical_evidence=[],
        missing_documentation=[DocumentoFaltante.REVISAO_MANUAL],
        technical_reasoning=RACIOCINIO_ERRO,
        requires_physical_evaluation=True,
    )


@dataclass
class _Achados:
    """Acumulador da varredura dos documentos."""
    tipo: Optional[TipoDeficiencia] = None
    limitacoes: List[str] = field(default_factory=list)
    evidencias: List[str] = field(default_factory=list)
    documenta_limitacao: bool = False


class EligibilityDecisionEngine:
    """Motor de decisão de enquadramento PCD (sem estado entre chamadas)."""

    def __init__(self, regras=REGRAS_LIMITACAO, normalizer=None, logger=None):
        self._regras = tuple(regras)
        self._normalizer = normalizer or text_normalizer
        self._logger = logger or get_logger(__name__)

    def decide(self, documents: Sequence[StructuredDocumentEntry]) -> EligibilityAssessment:
        """
        Decide o enquadramento a partir dos documentos fornecidos.

        Nunca levanta exceção: falhas internas viram avaliacao_degradada().
        """
        try:
            return self._decidir(list(documents or []))
        except Exception as e:
            self._logger.exception("Erro na avaliação de elegibilidade", erro=str(e))
            return avaliacao_degradada()

    def _varrer(self, documents: List[StructuredDocumentEntry]) -> _Achados:
        achados = _Achados()
        for documento in documents:
            texto = self._normalizer.normalize_for_search(documento.content)
            # Achados e evidências são registrados por documento, sem deduplicar

            # Última regra que casar, considerando todos os documentos, define o tipo
            for regra in self._regras:
                if contem_algum(texto, regra.gatilhos):
                    achados.tipo = regra.tipo
                    achados.limitacoes.append(regra.achado)

            if contem_cid(texto):
                achados.evidencias.append(EvidenciaClinica.CID)

            if contem_algum(texto, MARCADORES_LIMITACAO_FUNCIONAL):
                achados.documenta_limitacao = True
                achados.evidencias.append(EvidenciaClinica.LIMITACAO_FUNCIONAL)

        if not achados.documenta_limitacao:
            achados.limitacoes = []
        return achados

    def _decidir(self, documents: List[StructuredDocumentEntry]) -> EligibilityAssessment:
        tipos_documento = {documento.type for documento in documents}

        faltantes = []
        if TipoDocumento.LAUDO_MEDICO not in tipos_documento:
            faltantes.append(DocumentoFaltante.LAUDO_MEDICO)
        if TipoDocumento.RELATORIO_ESPECIALISTA not in tipos_documento:
            faltantes.append(DocumentoFaltante.RELATORIO_ESPECIALISTA)

        achados = self._varrer(documents)

        grau = None
        avaliacao_fisica = False
        if documents and faltantes:
            resultado = ResultadoAvaliacao.TALVEZ
            confianca = CONFIANCA_DOCUMENTACAO_INCOMPLETA
        elif achados.tipo is not None and achados.limitacoes:
            resultado = ResultadoAvaliacao.SIM
            confianca = CONFIANCA_CONFIRMADO
            grau = GrauDeficiencia.MODERADA
        elif documents and achados.tipo is not None:
            resultado = ResultadoAvaliacao.TALVEZ
            confianca = CONFIANCA_SEM_LIMITACAO
            avaliacao_fisica = True
        else:
            resultado = ResultadoAvaliacao.NAO
            confianca = CONFIANCA_NAO_ENQUADRA

        self._logger.info(
            "Elegibilidade decidida",
            resultado=resultado.value,
            confianca=confianca,
            tipo=achados.tipo.value if achados.tipo else None,
            documentos=len(documents),
            faltantes=len(faltantes),
        )

        return EligibilityAssessment(
            outcome=resultado,
            confidence=confianca,
            deficiency_type=achados.tipo,
            severity_level=grau,
            functional_limitations=achados.limitacoes,
            compensatory_factors=list(FATORES_COMPENSATORIOS),
            legal_justification=fundamentacao_legal(),
            clinical_evidence=achados.evidencias,
            missing_documentation=faltantes,
            technical_reasoning=self._raciocinio(resultado, achados.tipo, faltantes, avaliacao_fisica),
            requires_physical_evaluation=avaliacao_fisica,
        )

    @staticmethod
    def _raciocinio(
        resultado: ResultadoAvaliacao,
        tipo: Optional[TipoDeficiencia],
        faltantes: List[str],
        avaliacao_fisica: bool,
    ) -> str:
        if resultado == ResultadoAvaliacao.SIM:
            return RACIOCINIO_SIM.format(tipo=tipo.value.lower())
        if resultado == ResultadoAvaliacao.NAO:
            return RACIOCINIO_NAO

        return RACIOCINIO_TALVEZ.format(
            faltantes=RACIOCINIO_FALTAM_DOCUMENTOS if faltantes else "",
            avaliacao_fisica=RACIOCINIO_AVALIACAO_FISICA if avaliacao_fisica else "",
        )


# Instância padrão usada pelo router
eligibility_engine = EligibilityDecisionEngine()


def avaliar_elegibilidade(
    request: AvaliacaoElegibilidadeRequest,
    engine: Optional[EligibilityDecisionEngine] = None,
) -> EligibilityAssessment:
    """Registra o contexto do caso e delega a decisão ao motor."""
    engine = engine or eligibility_engine

    logger.info(
        "Avaliando elegibilidade PCD",
        candidato=request.candidate_name,
        cpf=mask_cpf(request.candidate_cpf),
        empresa=request.requesting_company,
        urgencia=request.urgency_level.value,
        documentos=len(request.documentation_provided),
        avaliacoes_anteriores=len(request.previous_evaluations or []),
    )
    return engine.decide(request.documentation_provided)
