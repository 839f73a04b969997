# utils/pymupdf_lock.py
"""
Lock global para operações PyMuPDF (fitz).

O MuPDF não é thread-safe: a extração roda em asyncio.to_thread e
requisições simultâneas não podem abrir documentos ao mesmo tempo.

Exemplo de uso:
    from utils.pymupdf_lock import pymupdf_lock

    with pymupdf_lock:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        texto = "\n".join(page.get_text() for page in doc)
        doc.close()
"""

import threading

pymupdf_lock = threading.Lock()
