# tests/avaliacao_pcd/test_analise_documento.py
"""
Testes do pipeline de análise documental PCD.

Execução:
    pytest tests/avaliacao_pcd/test_analise_documento.py -v
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

import fitz
import pytest

from sistemas.avaliacao_pcd.analise_documento import (
    DocumentAnalyzer,
    analisar_documento_pdf,
    idade_documento_em_dias,
    resultado_falha,
)
from sistemas.avaliacao_pcd.constants import Pendencia, Recomendacao, Urgencia
from sistemas.avaliacao_pcd.exceptions import PDFDownloadError
from sistemas.avaliacao_pcd.schemas import (
    ExtractedDocument,
    QualidadeDocumental,
    TipoDeficiencia,
    TipoDeficienciaEsperada,
)


LAUDO_COMPLETO = (
    "LAUDO MÉDICO\n"
    "Relatório da especialista em otorrinolaringologia\n"
    "Diagnóstico: deficiência auditiva bilateral. CID-10 H90.3\n"
    "Audiometria tonal: perda severa. Exame anexo.\n"
    "Limitação funcional para comunicação oral.\n"
    "Data: 10/05/2024\n"
    "Dra. Ana Souza - CRM/SP 12345"
)


def _documento(texto, paginas=1):
    return ExtractedDocument(raw_text=texto, page_count=paginas, character_count=len(texto))


def _pdf_com_texto(texto):
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), texto)
    conteudo = doc.tobytes()
    doc.close()
    return conteudo


@pytest.fixture
def analyzer(hoje_fixo):
    return DocumentAnalyzer(hoje=hoje_fixo)


class TestAnaliseCompleta:
    """Documento com todas as evidências."""

    def test_pontuacao_maxima(self, analyzer):
        resultado = analyzer.analyze(_documento(LAUDO_COMPLETO), "Maria", "123.456.789-09")

        assert resultado.completeness_score == 100
        assert resultado.document_quality == QualidadeDocumental.EXCELENTE
        assert resultado.has_required_documents
        assert resultado.missing_documents == []
        assert resultado.recommendations == []
        assert resultado.urgency_flags == []
        assert resultado.detected_deficiency_type == TipoDeficiencia.AUDITIVA

    def test_documentos_medicos_e_conformidade(self, analyzer):
        resultado = analyzer.analyze(_documento(LAUDO_COMPLETO), "Maria", "123.456.789-09")

        medicos = resultado.medical_documents
        assert medicos.has_current_medical_report
        assert medicos.has_specialist_report
        assert medicos.has_complementary_exams
        assert medicos.has_cid_diagnosis
        assert medicos.issuer_qualifications == ["Otorrinolaringologia", "Fonoaudiologia"]
        assert medicos.document_age_in_days == 51

        legal = resultado.legal_compliance
        assert legal.meets_lei_13146_requirements
        assert legal.meets_cif_criteria
        assert legal.has_proper_medical_signature
        assert legal.has_valid_crm

    def test_texto_bruto_preservado(self, analyzer):
        """O texto extraído volta exatamente como recebido."""
        resultado = analyzer.analyze(_documento(LAUDO_COMPLETO, paginas=2), "Maria", "123")

        assert resultado.extracted_content.raw_text == LAUDO_COMPLETO
        assert resultado.extracted_content.pages_count == 2
        assert resultado.extracted_content.character_count == len(LAUDO_COMPLETO)


class TestCenarios:
    """Cenários ponta a ponta."""

    def test_auditiva_com_audiometria_sem_cid(self, analyzer):
        """Auditiva + audiometria sem CID: sem lacuna de exame, CID pendente e urgente."""
        texto = "Paciente com deficiência auditiva. Audiometria realizada."

        resultado = analyzer.analyze(_documento(texto), "João", "987.654.321-00")

        assert resultado.detected_deficiency_type == TipoDeficiencia.AUDITIVA
        assert not any("Audiometria ou BERA" in item for item in resultado.missing_documents)
        assert Pendencia.CID in resultado.missing_documents
        assert Urgencia.CID_AUSENTE in resultado.urgency_flags
        assert not resultado.has_required_documents

    def test_tipo_nao_identificado(self, analyzer):
        resultado = analyzer.analyze(_documento("Atestado de comparecimento."), "João", "1")

        assert resultado.detected_deficiency_type == TipoDeficiencia.NAO_IDENTIFICADA
        assert Urgencia.TIPO_NAO_IDENTIFICADO in resultado.urgency_flags
        assert resultado.recommendations[-1] == Recomendacao.IDENTIFICAR_TIPO

    def test_divergencia_com_tipo_esperado(self, analyzer):
        resultado = analyzer.analyze(
            _documento("Cegueira. Acuidade visual 20/400."),
            "João",
            "1",
            TipoDeficienciaEsperada.AUDITIVA,
        )

        assert resultado.detected_deficiency_type == TipoDeficiencia.VISUAL
        assert "Tipo de deficiencia detectada (VISUAL) difere do esperado (AUDITIVA)" in resultado.urgency_flags

    def test_lacuna_visual_entra_nas_pendencias(self, analyzer):
        resultado = analyzer.analyze(_documento("Laudo médico: cegueira. CID H54"), "João", "1")

        assert resultado.missing_documents[-1] == (
            "Exame de acuidade visual e campo visual (obrigatorio para deficiencia visual)"
        )


class TestFalhas:
    """Falhas viram resultado degradado."""

    def test_texto_vazio(self, analyzer):
        resultado = analyzer.analyze(_documento("   \n  "), "João", "1")

        assert resultado.completeness_score == 0
        assert resultado.document_quality == QualidadeDocumental.INSUFICIENTE
        assert resultado.missing_documents == ["Erro na analise: Nenhum texto pode ser extraido do PDF"]
        assert resultado.urgency_flags == [Urgencia.FALHA_ANALISE]

    def test_erro_interno(self, hoje_fixo):
        """Exceção em um colaborador não escapa."""
        classifier = MagicMock()
        classifier.classify.side_effect = RuntimeError("tabela corrompida")
        analyzer = DocumentAnalyzer(classifier=classifier, hoje=hoje_fixo)

        resultado = analyzer.analyze(_documento(LAUDO_COMPLETO), "João", "1")

        assert resultado.missing_documents == ["Erro na analise: tabela corrompida"]
        assert resultado.detected_deficiency_type == TipoDeficiencia.NAO_IDENTIFICADA
        assert resultado.recommendations == [Recomendacao.REPROCESSAR]
        assert not resultado.legal_compliance.has_valid_crm

    def test_resultado_falha(self):
        resultado = resultado_falha("x")

        assert resultado.extracted_content.raw_text == ""
        assert resultado.medical_documents.issuer_qualifications == []
        assert not resultado.has_required_documents


class TestIdadeDocumento:
    """Idade do documento (informativa)."""

    def test_data_mais_recente(self):
        texto = "Emitido em 01/01/2024, revisado em 01/06/2024"
        assert idade_documento_em_dias(texto, date(2024, 6, 11)) == 10

    def test_ignora_datas_futuras_e_invalidas(self):
        texto = "Consulta 31/02/2024, retorno 01/12/2024, laudo 20/06/2024"
        assert idade_documento_em_dias(texto, date(2024, 6, 30)) == 10

    def test_sem_data(self):
        assert idade_documento_em_dias("sem datas", date(2024, 6, 30)) is None

    def test_nao_altera_pontuacao(self, hoje_fixo):
        """A idade do documento não muda pontuação nem pendências."""
        analyzer = DocumentAnalyzer(hoje=hoje_fixo)
        sem_data = LAUDO_COMPLETO.replace("Data: 10/05/2024\n", "")
        antigo = LAUDO_COMPLETO.replace("10/05/2024", "10/05/2010")

        a = analyzer.analyze(_documento(sem_data), "M", "1")
        b = analyzer.analyze(_documento(antigo), "M", "1")

        assert a.completeness_score == b.completeness_score
        assert a.missing_documents == b.missing_documents
        assert a.medical_documents.document_age_in_days is None
        assert b.medical_documents.document_age_in_days > 5000


class TestAnalisarDocumentoPdf:
    """Orquestração download -> extração -> análise."""

    @pytest.mark.asyncio
    async def test_pdf_valido(self, hoje_fixo):
        pdf = _pdf_com_texto("Laudo medico - deficiencia auditiva - audiometria")
        analyzer = DocumentAnalyzer(hoje=hoje_fixo)

        with patch(
            "sistemas.avaliacao_pcd.analise_documento.baixar_pdf",
            new=AsyncMock(return_value=pdf),
        ):
            resultado = await analisar_documento_pdf(
                "https://exemplo.gov.br/laudo.pdf", "Maria", "123", analyzer=analyzer
            )

        assert resultado.detected_deficiency_type == TipoDeficiencia.AUDITIVA
        assert resultado.extracted_content.pages_count == 1
        assert resultado.medical_documents.has_current_medical_report

    @pytest.mark.asyncio
    async def test_falha_no_download(self):
        with patch(
            "sistemas.avaliacao_pcd.analise_documento.baixar_pdf",
            new=AsyncMock(side_effect=PDFDownloadError("Falha ao baixar PDF: 404 Not Found")),
        ):
            resultado = await analisar_documento_pdf("https://exemplo.gov.br/x.pdf", "Maria", "123")

        assert resultado.completeness_score == 0
        assert resultado.document_quality == QualidadeDocumental.INSUFICIENTE
        assert resultado.missing_documents == ["Erro na analise: Falha ao baixar PDF: 404 Not Found"]
        assert resultado.urgency_flags == [Urgencia.FALHA_ANALISE]

    @pytest.mark.asyncio
    async def test_pdf_corrompido(self):
        with patch(
            "sistemas.avaliacao_pcd.analise_documento.baixar_pdf",
            new=AsyncMock(return_value=b"%PDF-1.4 lixo"),
        ):
            resultado = await analisar_documento_pdf("https://exemplo.gov.br/x.pdf", "Maria", "123")

        assert resultado.completeness_score == 0
        assert resultado.missing_documents[0].startswith("Erro na analise:")
