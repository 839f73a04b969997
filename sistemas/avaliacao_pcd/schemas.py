# sistemas/avaliacao_pcd/schemas.py
"""
Schemas Pydantic do sistema de Avaliação PCD

Entradas (documento extraído, documentos estruturados, dossiê do laudo)
e saídas (análise documental, avaliação de elegibilidade, laudo) são
imutáveis depois de construídas.
"""

from datetime import date
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, model_validator


# ==========================================
# Enums
# ==========================================

class TipoDeficiencia(str, Enum):
    """Tipo de deficiência detectado (exatamente um por avaliação)."""
    FISICA = "FISICA"
    INTELECTUAL = "INTELECTUAL"
    AUDITIVA = "AUDITIVA"
    VISUAL = "VISUAL"
    MULTIPLA = "MULTIPLA"
    PSICOSSOCIAL = "PSICOSSOCIAL"
    NAO_IDENTIFICADA = "NAO_IDENTIFICADA"


class TipoDeficienciaEsperada(str, Enum):
    """Tipo informado pelo solicitante; DESCONHECIDA desliga a checagem de divergência."""
    FISICA = "FISICA"
    INTELECTUAL = "INTELECTUAL"
    AUDITIVA = "AUDITIVA"
    VISUAL = "VISUAL"
    MULTIPLA = "MULTIPLA"
    PSICOSSOCIAL = "PSICOSSOCIAL"
    DESCONHECIDA = "DESCONHECIDA"


class TipoDeficienciaLaudo(str, Enum):
    """Tipos aceitos em um laudo caracterizador (sempre identificado)."""
    FISICA = "FISICA"
    INTELECTUAL = "INTELECTUAL"
    AUDITIVA = "AUDITIVA"
    VISUAL = "VISUAL"
    MULTIPLA = "MULTIPLA"
    PSICOSSOCIAL = "PSICOSSOCIAL"


class GrauDeficiencia(str, Enum):
    """Grau da deficiência, em ordem crescente."""
    LEVE = "LEVE"
    MODERADA = "MODERADA"
    GRAVE = "GRAVE"
    GRAVISSIMA = "GRAVISSIMA"


class QualidadeDocumental(str, Enum):
    EXCELENTE = "EXCELENTE"
    BOA = "BOA"
    REGULAR = "REGULAR"
    INSUFICIENTE = "INSUFICIENTE"


class ResultadoAvaliacao(str, Enum):
    """SIM = enquadra, NAO = não enquadra, TALVEZ = precisa de mais informações."""
    SIM = "SIM"
    NAO = "NAO"
    TALVEZ = "TALVEZ"


class TipoDocumento(str, Enum):
    LAUDO_MEDICO = "LAUDO_MEDICO"
    RELATORIO_ESPECIALISTA = "RELATORIO_ESPECIALISTA"
    EXAMES_COMPLEMENTARES = "EXAMES_COMPLEMENTARES"
    ATESTADO_MEDICO = "ATESTADO_MEDICO"
    CIF_ASSESSMENT = "CIF_ASSESSMENT"
    NEUROPSICOLOGICO = "NEUROPSICOLOGICO"
    OUTROS = "OUTROS"


class Prognostico(str, Enum):
    TEMPORARIA = "TEMPORARIA"
    PERMANENTE = "PERMANENTE"


class NivelUrgencia(str, Enum):
    NORMAL = "NORMAL"
    URGENTE = "URGENTE"


# ==========================================
# Entradas
# ==========================================

class ExtractedDocument(BaseModel):
    """Texto extraído de um PDF pelo colaborador de extração."""
    model_config = ConfigDict(frozen=True)

    raw_text: str
    page_count: int = Field(0, ge=0)
    character_count: int = Field(..., ge=0)

    @model_validator(mode="before")
    @classmethod
    def preencher_contagem(cls, data):
        if isinstance(data, dict) and data.get("character_count") is None:
            raw_text = data.get("raw_text")
            if isinstance(raw_text, str):
                data = {**data, "character_count": len(raw_text)}
        return data

    @model_validator(mode="after")
    def validar_contagem(self):
        if self.character_count != len(self.raw_text):
            raise ValueError("character_count deve ser igual ao tamanho de raw_text")
        return self


class StructuredDocumentEntry(BaseModel):
    """Documento médico já estruturado (tipo + conteúdo ou resumo)."""
    model_config = ConfigDict(frozen=True)

    type: TipoDocumento = Field(..., description="Tipo do documento")
    content: str = Field(..., description="Conteúdo ou resumo do documento")
    issue_date: Optional[date] = Field(None, description="Data de emissão do documento")
    professional_crm: Optional[str] = Field(None, description="CRM do profissional")
    specialization: Optional[str] = Field(None, description="Especialização médica")


class DocumentEvidenceFlags(BaseModel):
    """Evidências documentais usadas na pontuação de completude."""
    model_config = ConfigDict(frozen=True)

    has_medical_report: bool = False
    has_specialist_report: bool = False
    has_cid_diagnosis: bool = False
    has_valid_signature: bool = False
    has_valid_professional_id: bool = False
    has_complementary_exams: bool = False
    has_cif_criteria: bool = False
    type_detected: bool = False


# ==========================================
# Análise documental
# ==========================================

class ExtractedContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw_text: str = ""
    pages_count: int = 0
    character_count: int = 0


class MedicalDocuments(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_current_medical_report: bool = False
    has_specialist_report: bool = False
    has_complementary_exams: bool = False
    has_cid_diagnosis: bool = False
    document_age_in_days: Optional[int] = None
    issuer_qualifications: List[str] = Field(default_factory=list)


class LegalCompliance(BaseModel):
    model_config = ConfigDict(frozen=True)

    meets_lei_13146_requirements: bool = False
    meets_cif_criteria: bool = False
    has_proper_medical_signature: bool = False
    has_valid_crm: bool = False


class DocumentAnalysisResult(BaseModel):
    """Resultado da análise de completude de um documento médico."""
    model_config = ConfigDict(frozen=True)

    completeness_score: int = Field(..., ge=0, le=100)
    has_required_documents: bool
    missing_documents: List[str]
    document_quality: QualidadeDocumental
    extracted_content: ExtractedContent
    medical_documents: MedicalDocuments
    legal_compliance: LegalCompliance
    detected_deficiency_type: TipoDeficiencia
    recommendations: List[str]
    urgency_flags: List[str]


class AnaliseDocumentoRequest(BaseModel):
    """Requisição de análise a partir da URL do PDF"""
    pdf_url: str = Field(..., min_length=1, description="URL do documento PDF para análise")
    candidate_name: str = Field(..., min_length=1, description="Nome do candidato")
    candidate_cpf: str = Field(..., min_length=1, description="CPF do candidato")
    expected_deficiency_type: Optional[TipoDeficienciaEsperada] = None


class AnaliseTextoRequest(BaseModel):
    """Requisição de análise a partir de texto já extraído"""
    raw_text: str = Field(..., description="Texto extraído do documento")
    pages_count: int = Field(0, ge=0)
    candidate_name: str = Field(..., min_length=1)
    candidate_cpf: str = Field(..., min_length=1)
    expected_deficiency_type: Optional[TipoDeficienciaEsperada] = None


# ==========================================
# Avaliação de elegibilidade
# ==========================================

class LegalFramework(BaseModel):
    """Base legal da avaliação."""
    model_config = ConfigDict(frozen=True)

    lei13146: str
    cif: str
    decreto: str


class EligibilityAssessment(BaseModel):
    """Resultado da avaliação de enquadramento PCD."""
    model_config = ConfigDict(frozen=True)

    outcome: ResultadoAvaliacao
    confidence: float = Field(..., ge=0, le=1)
    deficiency_type: Optional[TipoDeficiencia] = None
    severity_level: Optional[GrauDeficiencia] = None
    functional_limitations: List[str] = Field(default_factory=list)
    compensatory_factors: List[str] = Field(default_factory=list)
    legal_justification: LegalFramework
    clinical_evidence: List[str] = Field(default_factory=list)
    missing_documentation: List[str] = Field(default_factory=list)
    technical_reasoning: str
    requires_physical_evaluation: bool = False


class AvaliacaoElegibilidadeRequest(BaseModel):
    """Requisição de avaliação de elegibilidade PCD"""
    candidate_name: str = Field(..., min_length=1, description="Nome completo do candidato")
    candidate_cpf: str = Field(..., min_length=1, description="CPF do candidato")
    documentation_provided: List[StructuredDocumentEntry] = Field(default_factory=list)
    requesting_company: str = Field(..., description="Empresa solicitante")
    urgency_level: NivelUrgencia = NivelUrgencia.NORMAL
    previous_evaluations: Optional[List[str]] = None


# ==========================================
# Laudo caracterizador
# ==========================================

class CandidateInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    full_name: str = Field(..., min_length=1)
    cpf: str = Field(..., min_length=1)
    rg: Optional[str] = None
    birth_date: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class MedicalInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    deficiency_type: TipoDeficienciaLaudo
    cid_code: str = Field(..., description="Código CID da condição")
    cif_code: Optional[str] = Field(None, description="Código CIF se aplicável")
    diagnosis: str = Field(..., description="Diagnóstico principal")
    onset_date: Optional[str] = Field(None, description="Data de início da deficiência")
    prognosis: Prognostico
    severity_level: GrauDeficiencia


class FunctionalAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    functional_limitations: List[str] = Field(default_factory=list)
    preserved_functions: List[str] = Field(default_factory=list)
    adaptive_capacity: str
    assistive_technology: List[str] = Field(default_factory=list)


class ProfessionalInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    doctor_name: str = Field(..., min_length=1)
    crm: str = Field(..., min_length=1)
    specialization: str
    issue_date: date
    expiration_date: Optional[date] = None


class LegalBasis(BaseModel):
    model_config = ConfigDict(frozen=True)

    lei13146: bool = True
    decreto3298: bool = True
    cif: bool = True
    other_laws: Optional[List[str]] = None


class ConfirmedCaseDossier(BaseModel):
    """Dados confirmados do caso, usados para emitir o laudo."""
    model_config = ConfigDict(frozen=True)

    candidate_info: CandidateInfo
    medical_info: MedicalInfo
    functional_assessment: FunctionalAssessment
    professional_info: ProfessionalInfo
    legal_basis: LegalBasis = Field(default_factory=LegalBasis)


class LaudoClassification(BaseModel):
    model_config = ConfigDict(frozen=True)

    pcd_status: bool
    quota_eligible: bool
    work_restrictions: List[str] = Field(default_factory=list)


class LaudoReport(BaseModel):
    """Laudo Caracterizador emitido (um novo laudo sempre tem novo ID)."""
    model_config = ConfigDict(frozen=True)

    laudo_id: str
    full_document: str
    summary: str
    validity_period: str
    valid_from: Optional[date] = None
    valid_until: Optional[date] = None
    digital_signature: str
    issued_at: str
    classification: LaudoClassification
