# tests/conftest.py
"""
Configuração global do pytest para o serviço de Avaliação PCD.

Este arquivo é executado automaticamente pelo pytest antes dos testes.
"""

import sys
import os

# Adiciona o diretório raiz do projeto ao PYTHONPATH
# para que os imports funcionem corretamente nos testes
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Configura variáveis de ambiente para testes
os.environ.setdefault("ENV", "test")

from datetime import date, datetime

import pytest


@pytest.fixture
def dossie_completo():
    """Dossiê de caso confirmado com todos os campos opcionais preenchidos."""
    from sistemas.avaliacao_pcd.schemas import ConfirmedCaseDossier

    return ConfirmedCaseDossier.model_validate({
        "candidate_info": {
            "full_name": "Maria da Silva",
            "cpf": "123.456.789-09",
            "rg": "12.345.678-9",
            "birth_date": "15/03/1985",
            "address": "Rua das Flores, 100",
            "phone": "(11) 99999-0000",
            "email": "maria@example.com",
        },
        "medical_info": {
            "deficiency_type": "AUDITIVA",
            "cid_code": "H90.3",
            "cif_code": "b230",
            "diagnosis": "Perda auditiva neurossensorial bilateral",
            "onset_date": "01/01/2010",
            "prognosis": "PERMANENTE",
            "severity_level": "GRAVE",
        },
        "functional_assessment": {
            "functional_limitations": ["Comunicação oral em ambientes ruidosos"],
            "preserved_functions": ["Mobilidade", "Visão"],
            "adaptive_capacity": "Boa adaptação com aparelho auditivo",
            "assistive_technology": ["Aparelho de amplificação sonora"],
        },
        "professional_info": {
            "doctor_name": "João Pereira",
            "crm": "CRM-SP 123456",
            "specialization": "Otorrinolaringologia",
            "issue_date": "2024-02-29",
            "expiration_date": "2026-02-28",
        },
        "legal_basis": {
            "lei13146": True,
            "decreto3298": True,
            "cif": True,
            "other_laws": ["Lei no 8.213/1991 (Lei de Cotas)"],
        },
    })


@pytest.fixture
def dossie_minimo(dossie_completo):
    """Dossiê sem nenhum campo opcional."""
    from sistemas.avaliacao_pcd.schemas import ConfirmedCaseDossier

    dados = dossie_completo.model_dump(mode="json")
    for campo in ("rg", "address", "phone", "email"):
        dados["candidate_info"].pop(campo)
    dados["medical_info"].pop("cif_code")
    dados["medical_info"].pop("onset_date")
    dados["medical_info"]["deficiency_type"] = "INTELECTUAL"
    dados["functional_assessment"]["assistive_technology"] = []
    dados["professional_info"].pop("expiration_date")
    dados["legal_basis"] = {"lei13146": True, "decreto3298": True, "cif": True}
    return ConfirmedCaseDossier.model_validate(dados)


@pytest.fixture
def relogio_fixo():
    """Relógio fixo (horário local) para laudos determinísticos."""
    from utils.timezone import TIMEZONE_LOCAL

    instante = TIMEZONE_LOCAL.localize(datetime(2024, 3, 1, 10, 30, 15))
    return lambda: instante


@pytest.fixture
def hoje_fixo():
    return lambda: date(2024, 6, 30)
