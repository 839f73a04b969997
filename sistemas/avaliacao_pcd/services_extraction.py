# sistemas/avaliacao_pcd/services_extraction.py
"""
Serviço de obtenção e extração de texto de laudos em PDF.

Pipeline de extração:
1. Baixar o PDF da URL informada (httpx, segue redirecionamentos)
2. Validar tamanho e assinatura do arquivo (%PDF-)
3. Extrair o texto de cada página com PyMuPDF

Não há OCR: PDFs digitalizados sem camada de texto são rejeitados com
TextoNaoExtraidoError.
"""

from typing import Optional, Union

import fitz
import httpx

from config import PDF_MAX_BYTES
from utils.logging_config import get_logger
from utils.pymupdf_lock import pymupdf_lock
from utils.security_sanitizer import validate_file_signature
from utils.timeouts import get_timeout

from sistemas.avaliacao_pcd.exceptions import (
    PDFDownloadError,
    PDFInvalidoError,
    TextoNaoExtraidoError,
)
from sistemas.avaliacao_pcd.schemas import ExtractedDocument

logger = get_logger(__name__)


async def baixar_pdf(
    url: str,
    timeout: Optional[Union[float, httpx.Timeout]] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> bytes:
    """
    Baixa o PDF do laudo.

    Args:
        url: URL do documento
        timeout: Timeout da requisição (padrão: Timeouts.PDF_DOWNLOAD)
        client: Cliente httpx já aberto (o chamador cuida do ciclo de vida)

    Returns:
        Bytes do PDF

    Raises:
        PDFDownloadError: status não-2xx, timeout, erro de rede ou arquivo grande demais
        PDFInvalidoError: conteúdo sem assinatura de PDF
    """
    timeout = timeout or get_timeout("pdf_download", as_httpx=True)

    logger.info("Baixando PDF", url=url)
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as novo_client:
                response = await novo_client.get(url)
        else:
            response = await client.get(url, timeout=timeout, follow_redirects=True)
    except httpx.TimeoutException as e:
        raise PDFDownloadError("Timeout ao baixar PDF", {"url": url}) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise PDFDownloadError(f"Falha ao baixar PDF: {e}", {"url": url}) from e

    if not response.is_success:
        raise PDFDownloadError(
            f"Falha ao baixar PDF: {response.status_code} {response.reason_phrase}",
            {"url": url, "status_code": response.status_code}
        )

    conteudo = response.content
    if len(conteudo) > PDF_MAX_BYTES:
        raise PDFDownloadError(
            f"PDF excede o tamanho máximo de {PDF_MAX_BYTES} bytes",
            {"url": url, "tamanho": len(conteudo)}
        )

    if not validate_file_signature(conteudo, "application/pdf"):
        raise PDFInvalidoError(details={"url": url})

    logger.info("PDF baixado", tamanho=len(conteudo))
    return conteudo


def extrair_texto_pdf(pdf_bytes: bytes) -> ExtractedDocument:
    """
    Extrai o texto de todas as páginas do PDF (páginas unidas por quebra de linha).

    O texto é devolvido exatamente como extraído; a normalização para busca
    acontece na análise.

    Raises:
        PDFInvalidoError: PDF corrompido ou ilegível
        TextoNaoExtraidoError: PDF sem texto extraível
    """
    # MuPDF não é thread-safe
    with pymupdf_lock:
        try:
            doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        except (RuntimeError, ValueError) as e:
            raise PDFInvalidoError(f"Não foi possível abrir o PDF: {e}") from e

        try:
            num_paginas = len(doc)
            textos = [page.get_text("text") for page in doc]
        finally:
            doc.close()

    texto = "\n".join(textos)
    if not texto.strip():
        raise TextoNaoExtraidoError(details={"paginas": num_paginas})

    logger.debug("Texto extraído do PDF", paginas=num_paginas, caracteres=len(texto))
    return ExtractedDocument(raw_text=texto, page_count=num_paginas, character_count=len(texto))
