# sistemas/avaliacao_pcd/analise_documento.py
"""
Análise de completude de documentos médicos para enquadramento PCD.

Compõe normalização -> classificação -> pontuação -> pendências e devolve
um DocumentAnalysisResult. Falhas nunca escapam: viram um resultado com
pontuação zero, qualidade INSUFICIENTE e sinal de urgência.
"""

import asyncio
from datetime import date
from typing import Callable, Optional

from services.text_normalizer import text_normalizer
from utils.logging_config import get_logger
from utils.security_sanitizer import mask_cpf
from utils.timezone import today_local

from sistemas.avaliacao_pcd.classifier import KeywordClassifier
from sistemas.avaliacao_pcd.constants import (
    PADRAO_DATA_BR,
    ERRO_ANALISE,
    ERRO_TEXTO_VAZIO,
    Recomendacao,
    Urgencia,
)
from sistemas.avaliacao_pcd.pendencias import MissingDocumentResolver
from sistemas.avaliacao_pcd.schemas import (
    DocumentAnalysisResult,
    ExtractedContent,
    ExtractedDocument,
    LegalCompliance,
    MedicalDocuments,
    QualidadeDocumental,
    TipoDeficiencia,
    TipoDeficienciaEsperada,
)
from sistemas.avaliacao_pcd.scoring import CompletenessScorer
from sistemas.avaliacao_pcd.services_extraction import baixar_pdf, extrair_texto_pdf

logger = get_logger(__name__)


def resultado_falha(mensagem: str) -> DocumentAnalysisResult:
    """Resultado de análise que falhou (pontuação zero, revisão manual)."""
    return DocumentAnalysisResult(
        completeness_score=0,
        has_required_documents=False,
        missing_documents=[ERRO_ANALISE.format(mensagem=mensagem)],
        document_quality=QualidadeDocumental.INSUFICIENTE,
        extracted_content=ExtractedContent(),
        medical_documents=MedicalDocuments(),
        legal_compliance=LegalCompliance(),
        detected_deficiency_type=TipoDeficiencia.NAO_IDENTIFICADA,
        recommendations=[Recomendacao.REPROCESSAR],
        urgency_flags=[Urgencia.FALHA_ANALISE],
    )


def idade_documento_em_dias(texto: str, hoje: date) -> Optional[int]:
    """
    Dias desde a data DD/MM/AAAA mais recente do texto que não esteja no futuro.

    Datas inválidas (ex: 31/02/2024) são ignoradas. None se não houver data.
    """
    datas = []
    for dia, mes, ano in PADRAO_DATA_BR.findall(texto or ""):
        try:
            encontrada = date(int(ano), int(mes), int(dia))
        except ValueError:
            continue
        if encontrada <= hoje:
            datas.append(encontrada)

    if not datas:
        return None
    return (hoje - max(datas)).days


class DocumentAnalyzer:
    """
    Orquestra a análise de um documento já extraído.

    Todos os colaboradores são injetáveis para teste; os padrões não guardam
    estado entre chamadas.
    """

    def __init__(
        self,
        classifier: Optional[KeywordClassifier] = None,
        scorer: Optional[CompletenessScorer] = None,
        resolver: Optional[MissingDocumentResolver] = None,
        normalizer=None,
        hoje: Callable[[], date] = today_local,
        logger=None,
    ):
        self._logger = logger or get_logger(__name__)
        self._normalizer = normalizer or text_normalizer
        self._classifier = classifier or KeywordClassifier(normalizer=self._normalizer, logger=self._logger)
        self._scorer = scorer or CompletenessScorer(logger=self._logger)
        self._resolver = resolver or MissingDocumentResolver(logger=self._logger)
        self._hoje = hoje

    def analyze(
        self,
        extracted: ExtractedDocument,
        candidate_name: str,
        candidate_cpf: str,
        expected_type: Optional[TipoDeficienciaEsperada] = None,
    ) -> DocumentAnalysisResult:
        """
        Analisa a completude do documento para avaliação PCD.

        Args:
            extracted: Texto extraído do PDF
            candidate_name: Nome do candidato (apenas para log)
            candidate_cpf: CPF do candidato (mascarado no log)
            expected_type: Tipo informado pelo solicitante, se houver

        Returns:
            DocumentAnalysisResult (resultado de falha em caso de erro)
        """
        self._logger.info(
            "Analisando documento PCD",
            candidato=candidate_name,
            cpf=mask_cpf(candidate_cpf),
            paginas=extracted.page_count,
        )

        if not extracted.raw_text.strip():
            self._logger.warning("Documento sem texto", cpf=mask_cpf(candidate_cpf))
            return resultado_falha(ERRO_TEXTO_VAZIO)

        try:
            return self._analisar(extracted, expected_type)
        except Exception as e:
            self._logger.exception("Erro na análise de documento PCD", erro=str(e))
            return resultado_falha(str(e))

    def _analisar(
        self,
        extracted: ExtractedDocument,
        expected_type: Optional[TipoDeficienciaEsperada],
    ) -> DocumentAnalysisResult:
        texto = self._normalizer.normalize_for_search(extracted.raw_text)

        classificacao = self._classifier.classify(texto)
        evidencias = self._classifier.detect_evidence(texto).model_copy(
            update={"type_detected": classificacao.identificado}
        )

        pontuacao = self._scorer.score(evidencias)
        pendencias = self._resolver.resolve(
            evidencias,
            classificacao.deficiency_type,
            classificacao.type_specific_gaps,
            expected_type,
        )
        recomendacoes = self._resolver.recommend(
            evidencias,
            classificacao.deficiency_type,
            pendencias.missing_documents,
            pontuacao.score,
        )

        documentos_obrigatorios = evidencias.has_medical_report and evidencias.has_cid_diagnosis

        resultado = DocumentAnalysisResult(
            completeness_score=pontuacao.score,
            has_required_documents=documentos_obrigatorios,
            missing_documents=pendencias.missing_documents,
            document_quality=pontuacao.tier,
            extracted_content=ExtractedContent(
                raw_text=extracted.raw_text,
                pages_count=extracted.page_count,
                character_count=extracted.character_count,
            ),
            medical_documents=MedicalDocuments(
                has_current_medical_report=evidencias.has_medical_report,
                has_specialist_report=evidencias.has_specialist_report,
                has_complementary_exams=evidencias.has_complementary_exams,
                has_cid_diagnosis=evidencias.has_cid_diagnosis,
                document_age_in_days=idade_documento_em_dias(extracted.raw_text, self._hoje()),
                issuer_qualifications=classificacao.matched_qualifications,
            ),
            legal_compliance=LegalCompliance(
                meets_lei_13146_requirements=documentos_obrigatorios and evidencias.has_cid_diagnosis,
                meets_cif_criteria=evidencias.has_cif_criteria,
                has_proper_medical_signature=evidencias.has_valid_signature,
                has_valid_crm=evidencias.has_valid_professional_id,
            ),
            detected_deficiency_type=classificacao.deficiency_type,
            recommendations=recomendacoes,
            urgency_flags=pendencias.urgency_flags,
        )

        self._logger.info(
            "Análise concluída",
            score=resultado.completeness_score,
            qualidade=resultado.document_quality.value,
            tipo=resultado.detected_deficiency_type.value,
        )
        return resultado


# Instância padrão usada pelo router
document_analyzer = DocumentAnalyzer()


async def analisar_documento_pdf(
    pdf_url: str,
    candidate_name: str,
    candidate_cpf: str,
    expected_type: Optional[TipoDeficienciaEsperada] = None,
    analyzer: Optional[DocumentAnalyzer] = None,
) -> DocumentAnalysisResult:
    """
    Baixa o PDF, extrai o texto e analisa.

    Falhas de download ou extração viram resultado de falha; nunca levanta.
    """
    analyzer = analyzer or document_analyzer
    try:
        pdf_bytes = await baixar_pdf(pdf_url)
        extracted = await asyncio.to_thread(extrair_texto_pdf, pdf_bytes)
    except Exception as e:
        logger.error(
            "Falha ao obter texto do PDF",
            cpf=mask_cpf(candidate_cpf),
            erro=str(e),
            tipo_erro=type(e).__name__,
        )
        return resultado_falha(str(e))

    return analyzer.analyze(extracted, candidate_name, candidate_cpf, expected_type)
