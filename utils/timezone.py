# utils/timezone.py
"""
POLÍTICA DE TIMEZONE DO SERVIÇO

REGRAS:
1. TIMESTAMPS INTERNOS: Sempre UTC (timezone-aware)
2. DOCUMENTOS EMITIDOS (laudos): horário local (America/Sao_Paulo por padrão)
3. DATAS EM TEXTO: formato brasileiro DD/MM/AAAA

USO:
    from utils.timezone import now_utc, now_local, to_local, format_date_br

    emitido_em = now_local()
    texto = format_date_br(emitido_em.date())

IMPORTANTE:
- Nunca use datetime.utcnow() ou datetime.now() diretamente
- Sempre use as funções deste módulo
"""

from datetime import date, datetime, timezone
from typing import Optional
import pytz

from config import TIMEZONE_LOCAL_NAME

# =============================================================================
# CONFIGURAÇÃO DE TIMEZONE
# =============================================================================

TIMEZONE_LOCAL = pytz.timezone(TIMEZONE_LOCAL_NAME)

UTC = timezone.utc


# =============================================================================
# FUNÇÕES PRINCIPAIS
# =============================================================================

def now_utc() -> datetime:
    """
    Retorna o datetime atual em UTC com timezone-aware.

    Example:
        >>> from utils.timezone import now_utc
        >>> print(now_utc())
        2026-01-20 18:30:00+00:00
    """
    return datetime.now(UTC)


def now_local() -> datetime:
    """
    Retorna o datetime atual no timezone local configurado.

    USE ESTA FUNÇÃO para datas impressas em documentos.
    """
    return datetime.now(TIMEZONE_LOCAL)


def today_local() -> date:
    """Data de hoje no timezone local."""
    return now_local().date()


def to_local(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Converte um datetime para o timezone local.

    - Se naive: assume que está em UTC
    - Se aware: converte para o timezone local
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)

    return dt.astimezone(TIMEZONE_LOCAL)


def format_date_br(d: Optional[date]) -> str:
    """Formata uma data como DD/MM/AAAA (ou "-" se None)."""
    if d is None:
        return "-"
    return d.strftime("%d/%m/%Y")


def format_datetime_br(dt: Optional[datetime]) -> str:
    """
    Formata um datetime no timezone local como "DD/MM/AAAA, HH:MM:SS".

    Example:
        >>> format_datetime_br(now_utc())
        '20/01/2026, 15:30:00'
    """
    if dt is None:
        return "-"
    return to_local(dt).strftime("%d/%m/%Y, %H:%M:%S")


def add_years(d: date, years: int) -> date:
    """
    Soma anos-calendário a uma data.

    29/02 vira 28/02 quando o ano de destino não é bissexto.
    """
    try:
        return d.replace(year=d.year + years)
    except ValueError:
        return d.replace(year=d.year + years, day=28)
