# sistemas/avaliacao_pcd/router.py
"""
Router do Sistema de Avaliação PCD

Endpoints:
- Análise documental: completude de laudo em PDF (URL) ou texto já extraído
- Elegibilidade: enquadramento PCD a partir de documentos estruturados
- Laudo: emissão do Laudo Caracterizador (JSON ou DOCX)

Falhas de análise voltam como dados (pontuação zero, flags de urgência),
nunca como erro 5xx.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from utils.logging_config import get_logger

from .analise_documento import DocumentAnalyzer, analisar_documento_pdf, document_analyzer
from .elegibilidade import EligibilityDecisionEngine, avaliar_elegibilidade, eligibility_engine
from .exceptions import LaudoInvalidoError
from .laudo import ReportGenerator, report_generator
from .laudo_docx import laudo_para_docx
from .schemas import (
    AnaliseDocumentoRequest,
    AnaliseTextoRequest,
    AvaliacaoElegibilidadeRequest,
    ConfirmedCaseDossier,
    DocumentAnalysisResult,
    EligibilityAssessment,
    ExtractedDocument,
    LaudoReport,
)

logger = get_logger(__name__)
router = APIRouter(tags=["Avaliação PCD"])

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


# ============================================
# Dependências
# ============================================

def get_document_analyzer() -> DocumentAnalyzer:
    return document_analyzer


def get_eligibility_engine() -> EligibilityDecisionEngine:
    return eligibility_engine


def get_report_generator() -> ReportGenerator:
    return report_generator


# ============================================
# Análise documental
# ============================================

@router.post("/analisar-documento", response_model=DocumentAnalysisResult)
async def analisar_documento(
    req: AnaliseDocumentoRequest,
    analyzer: DocumentAnalyzer = Depends(get_document_analyzer),
):
    """Baixa o PDF informado e analisa a completude da documentação."""
    return await analisar_documento_pdf(
        req.pdf_url,
        req.candidate_name,
        req.candidate_cpf,
        req.expected_deficiency_type,
        analyzer=analyzer,
    )


@router.post("/analisar-texto", response_model=DocumentAnalysisResult)
def analisar_texto(
    req: AnaliseTextoRequest,
    analyzer: DocumentAnalyzer = Depends(get_document_analyzer),
):
    """Analisa texto já extraído por outro serviço."""
    extracted = ExtractedDocument(
        raw_text=req.raw_text,
        page_count=req.pages_count,
        character_count=len(req.raw_text),
    )
    return analyzer.analyze(
        extracted,
        req.candidate_name,
        req.candidate_cpf,
        req.expected_deficiency_type,
    )


# ============================================
# Elegibilidade
# ============================================

@router.post("/avaliar-elegibilidade", response_model=EligibilityAssessment)
def avaliar(
    req: AvaliacaoElegibilidadeRequest,
    engine: EligibilityDecisionEngine = Depends(get_eligibility_engine),
):
    """Avalia o enquadramento PCD segundo a Lei 13.146/2015."""
    return avaliar_elegibilidade(req, engine=engine)


# ============================================
# Laudo Caracterizador
# ============================================

@router.post("/gerar-laudo", response_model=LaudoReport)
def gerar_laudo(
    dossier: ConfirmedCaseDossier,
    generator: ReportGenerator = Depends(get_report_generator),
):
    """Emite o Laudo Caracterizador para um caso confirmado."""
    return generator.generate(dossier)


@router.post("/gerar-laudo/docx")
def gerar_laudo_docx(
    dossier: ConfirmedCaseDossier,
    generator: ReportGenerator = Depends(get_report_generator),
):
    """Emite o Laudo Caracterizador e devolve o arquivo DOCX."""
    laudo = generator.generate(dossier)
    try:
        conteudo = laudo_para_docx(laudo)
    except LaudoInvalidoError as e:
        logger.warning("Laudo inválido, DOCX não gerado", laudo_id=laudo.laudo_id)
        raise HTTPException(status_code=422, detail=e.message)

    filename = f"{laudo.laudo_id}.docx"
    return Response(
        content=conteudo,
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )
