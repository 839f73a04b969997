# services/text_normalizer/patterns.py
"""
Regex patterns pré-compilados para normalização de texto.

Padrões são compilados no import para melhor performance.
"""

import re


# =============================================================================
# Caracteres de Controle e Invisíveis
# =============================================================================

# Caracteres de controle ASCII, exceto TAB, LF e CR (tratados como espaço)
CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]')

# Caracteres Unicode invisíveis
INVISIBLE_UNICODE = re.compile(
    r'[\u200B-\u200F'  # Zero-width space, joiners, marks
    r'\u2060-\u206F'   # Word joiner, invisible operators
    r'\uFEFF'          # BOM / Zero-width no-break space
    r'\u00AD'          # Soft hyphen
    r'\u180E]'         # Mongolian vowel separator
)


# =============================================================================
# Espaços em Branco
# =============================================================================

# Qualquer sequência de espaços, tabs e quebras de linha
ANY_WHITESPACE = re.compile(r'\s+')


# =============================================================================
# Hifenização
# =============================================================================

# Palavra hifenizada quebrada entre linhas
# Ex: "defi-\nciência" -> "deficiência"
BROKEN_HYPHENATION = re.compile(
    r'(\w+)-[ \t]*\r?\n\s*([a-záàâãéèêíìîóòôõúùûüç])',
    re.IGNORECASE
)


# =============================================================================
# Unicode para Normalizar
# =============================================================================

# Smart quotes e aspas tipográficas
SMART_QUOTES = {
    '\u201C': '"',
    '\u201D': '"',
    '\u2018': "'",
    '\u2019': "'",
    '\u00AB': '"',  # «
    '\u00BB': '"',  # »
}

# Dashes tipográficos
SMART_DASHES = {
    '\u2013': '-',  # en-dash
    '\u2014': '-',  # em-dash
    '\u2212': '-',  # minus sign
}

# Espaços especiais
SPECIAL_SPACES = {
    '\u00A0': ' ',  # No-break space
    '\u2007': ' ',  # Figure space
    '\u2009': ' ',  # Thin space
    '\u202F': ' ',  # Narrow no-break space
    '\u3000': ' ',  # Ideographic space
}

UNICODE_NORMALIZE_MAP = str.maketrans({**SMART_QUOTES, **SMART_DASHES, **SPECIAL_SPACES})
