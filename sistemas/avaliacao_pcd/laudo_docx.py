# sistemas/avaliacao_pcd/laudo_docx.py
"""
Exportação do Laudo Caracterizador para DOCX.

O conteúdo é exatamente o full_document do laudo, linha a linha; apenas a
formatação muda (título centralizado, cabeçalhos de seção em negrito,
demais linhas justificadas).
"""

import io

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt, Cm

from utils.logging_config import get_logger

from sistemas.avaliacao_pcd.constants import TITULO_LAUDO, SecaoLaudo
from sistemas.avaliacao_pcd.exceptions import LaudoInvalidoError
from sistemas.avaliacao_pcd.schemas import LaudoReport

logger = get_logger(__name__)

CABECALHOS_SECAO = {
    SecaoLaudo.IDENTIFICACAO,
    SecaoLaudo.AVALIADO,
    SecaoLaudo.MEDICAS,
    SecaoLaudo.FUNCIONAL,
    SecaoLaudo.CONCLUSAO,
    SecaoLaudo.FUNDAMENTACAO,
    SecaoLaudo.RESPONSAVEL,
}

FONTE = "Arial"
TAMANHO_FONTE = 11


def _configurar_documento(doc):
    for section in doc.sections:
        section.top_margin = Cm(2.5)
        section.bottom_margin = Cm(2.5)
        section.left_margin = Cm(3)
        section.right_margin = Cm(2)

    style = doc.styles["Normal"]
    style.font.name = FONTE
    style.font.size = Pt(TAMANHO_FONTE)


def laudo_para_docx(laudo: LaudoReport) -> bytes:
    """
    Gera o DOCX do laudo.

    Raises:
        LaudoInvalidoError: laudo gerado com erro (pcd_status falso)
    """
    if not laudo.classification.pcd_status:
        raise LaudoInvalidoError(laudo.laudo_id)

    doc = Document()
    _configurar_documento(doc)

    for linha in laudo.full_document.split("\n"):
        p = doc.add_paragraph()
        p.paragraph_format.space_before = Pt(0)
        p.paragraph_format.space_after = Pt(0)

        if not linha:
            continue

        run = p.add_run(linha)
        if linha == TITULO_LAUDO:
            p.alignment = WD_ALIGN_PARAGRAPH.CENTER
            run.bold = True
            run.font.size = Pt(14)
        elif linha in CABECALHOS_SECAO:
            run.bold = True
        else:
            p.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY

    buffer = io.BytesIO()
    doc.save(buffer)

    logger.info("DOCX do laudo gerado", laudo_id=laudo.laudo_id, tamanho=buffer.tell())
    return buffer.getvalue()
