# sistemas/avaliacao_pcd/exceptions.py
"""
Exceções customizadas do sistema de Avaliação PCD.

Somente o colaborador de extração de PDF e a exportação DOCX levantam
estas exceções. As operações públicas de análise, elegibilidade e laudo
convertem qualquer falha em um resultado degradado.
"""


class AvaliacaoPCDError(Exception):
    """Exceção base para erros da Avaliação PCD."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or "AVALIACAO_PCD_ERROR"
        self.details = details or {}


# =============================================================================
# ERROS DE EXTRAÇÃO
# =============================================================================

class ExtracaoPDFError(AvaliacaoPCDError):
    """Erro ao obter ou ler o PDF do candidato."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, "EXTRACAO_PDF_ERROR", details)


class PDFDownloadError(ExtracaoPDFError):
    """Falha no download do PDF (status HTTP, timeout, tamanho)."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, details)
        self.code = "PDF_DOWNLOAD_ERROR"


class PDFInvalidoError(ExtracaoPDFError):
    """Conteúdo recebido não é um PDF legível."""

    def __init__(self, message: str = "Arquivo recebido não é um PDF válido", details: dict = None):
        super().__init__(message, details)
        self.code = "PDF_INVALIDO"


class TextoNaoExtraidoError(ExtracaoPDFError):
    """PDF sem texto extraível (provavelmente digitalizado)."""

    def __init__(self, message: str = "Nenhum texto pode ser extraido do PDF", details: dict = None):
        super().__init__(message, details)
        self.code = "TEXTO_NAO_EXTRAIDO"


# =============================================================================
# ERROS DO LAUDO
# =============================================================================

class LaudoInvalidoError(AvaliacaoPCDError):
    """Laudo marcado como inválido não pode ser exportado."""

    def __init__(self, laudo_id: str):
        super().__init__(
            f"Laudo {laudo_id} é inválido e não pode ser exportado",
            "LAUDO_INVALIDO",
            {"laudo_id": laudo_id}
        )
