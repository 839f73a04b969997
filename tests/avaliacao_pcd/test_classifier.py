# tests/avaliacao_pcd/test_classifier.py
"""
Testes do classificador de deficiência por palavras-chave.

Execução:
    pytest tests/avaliacao_pcd/test_classifier.py -v
"""

import unicodedata
from unittest.mock import MagicMock

import pytest

from sistemas.avaliacao_pcd.classifier import KeywordClassifier, contem_cid, contem_crm
from sistemas.avaliacao_pcd.constants import REGRAS_DEFICIENCIA
from sistemas.avaliacao_pcd.schemas import TipoDeficiencia
from sistemas.avaliacao_pcd.scoring import CompletenessScorer


LACUNA_AUDITIVA = "Audiometria ou BERA (obrigatorio para deficiencia auditiva)"
LACUNA_VISUAL = "Exame de acuidade visual e campo visual (obrigatorio para deficiencia visual)"


@pytest.fixture
def classifier():
    return KeywordClassifier()


class TestClassificacaoTipo:
    """Detecção do tipo de deficiência."""

    @pytest.mark.parametrize("texto,tipo", [
        ("Paciente com paraplegia", TipoDeficiencia.FISICA),
        ("Amputação do membro inferior esquerdo", TipoDeficiencia.FISICA),
        ("Diagnóstico de retardo mental leve", TipoDeficiencia.INTELECTUAL),
        ("Surdez bilateral profunda", TipoDeficiencia.AUDITIVA),
        ("Cegueira em ambos os olhos", TipoDeficiencia.VISUAL),
        ("Quadro de esquizofrenia paranoide", TipoDeficiencia.PSICOSSOCIAL),
    ])
    def test_tipo_unico(self, classifier, texto, tipo):
        """Cada tipo base é reconhecido pelos seus gatilhos."""
        assert classifier.classify(texto).deficiency_type == tipo

    def test_nao_identificada(self, classifier):
        """Sem gatilhos o tipo é NAO_IDENTIFICADA, sem qualificações nem lacunas."""
        resultado = classifier.classify("Atestado de comparecimento à consulta.")

        assert resultado.deficiency_type == TipoDeficiencia.NAO_IDENTIFICADA
        assert resultado.matched_qualifications == []
        assert resultado.type_specific_gaps == []
        assert resultado.matched_types == []
        assert not resultado.identificado

    def test_texto_vazio(self, classifier):
        """Texto vazio não levanta exceção."""
        assert classifier.classify("").deficiency_type == TipoDeficiencia.NAO_IDENTIFICADA

    def test_caixa_alta_e_quebra_de_linha(self, classifier):
        """Maiúsculas e quebras de linha do PDF não impedem a detecção."""
        resultado = classifier.classify("DEFICIÊNCIA\nVISUAL com baixa visão")
        assert resultado.deficiency_type == TipoDeficiencia.VISUAL

    def test_acentos_decompostos(self, classifier):
        """Acentos decompostos (NFD) vindos do PDF são normalizados."""
        texto = unicodedata.normalize("NFD", "Deficiência Física")
        assert classifier.classify(texto).deficiency_type == TipoDeficiencia.FISICA


class TestQualificacoesELacunas:
    """Qualificações do emissor e exames obrigatórios."""

    def test_auditiva_com_audiometria(self, classifier):
        """Auditiva com audiometria: sem lacuna de exame."""
        resultado = classifier.classify("Deficiência auditiva confirmada por audiometria tonal")

        assert resultado.deficiency_type == TipoDeficiencia.AUDITIVA
        assert resultado.matched_qualifications == ["Otorrinolaringologia", "Fonoaudiologia"]
        assert resultado.type_specific_gaps == []

    def test_auditiva_com_bera(self, classifier):
        """BERA também satisfaz a exigência de exame auditivo."""
        resultado = classifier.classify("Surdez congênita. BERA sem resposta.")
        assert resultado.type_specific_gaps == []

    def test_auditiva_sem_exame(self, classifier):
        """Auditiva sem audiometria/BERA gera lacuna."""
        resultado = classifier.classify("Paciente com surdez")
        assert resultado.type_specific_gaps == [LACUNA_AUDITIVA]

    def test_visual_sem_exame(self, classifier):
        """Visual sem acuidade/campo visual gera lacuna."""
        resultado = classifier.classify("Cegueira adquirida")

        assert resultado.matched_qualifications == ["Oftalmologia"]
        assert resultado.type_specific_gaps == [LACUNA_VISUAL]

    def test_visual_com_campo_visual(self, classifier):
        resultado = classifier.classify("Deficiência visual. Campo visual reduzido a 10 graus.")
        assert resultado.type_specific_gaps == []

    def test_fisica_sem_exame_obrigatorio(self, classifier):
        resultado = classifier.classify("Deficiência física")

        assert resultado.matched_qualifications == ["Ortopedia", "Fisiatria"]
        assert resultado.type_specific_gaps == []


class TestMultipla:
    """Vários tipos no mesmo texto."""

    def test_dois_tipos_viram_multipla(self, classifier):
        """Dois tipos base encontrados -> MULTIPLA."""
        resultado = classifier.classify("Deficiência física e surdez")

        assert resultado.deficiency_type == TipoDeficiencia.MULTIPLA
        assert resultado.matched_types == [TipoDeficiencia.FISICA, TipoDeficiencia.AUDITIVA]

    def test_ultima_regra_define_qualificacoes(self, classifier):
        """Qualificações e lacunas vêm somente da última regra que casou."""
        resultado = classifier.classify("Surdez e cegueira")

        assert resultado.deficiency_type == TipoDeficiencia.MULTIPLA
        # VISUAL vem depois de AUDITIVA na tabela
        assert resultado.matched_qualifications == ["Oftalmologia"]
        assert resultado.type_specific_gaps == [LACUNA_VISUAL]

    def test_ordem_do_texto_nao_importa(self, classifier):
        """A ordem da tabela, não a do texto, define a regra vencedora."""
        a = classifier.classify("Cegueira e surdez")
        b = classifier.classify("Surdez e cegueira")

        assert a == b

    def test_idempotente(self, classifier):
        """Classificar duas vezes o mesmo texto dá o mesmo resultado."""
        texto = "Transtorno mental com paraplegia"
        assert classifier.classify(texto) == classifier.classify(texto)

    def test_ordem_das_regras(self):
        """A tabela é avaliada em ordem fixa."""
        assert [r.tipo for r in REGRAS_DEFICIENCIA] == [
            TipoDeficiencia.FISICA,
            TipoDeficiencia.INTELECTUAL,
            TipoDeficiencia.AUDITIVA,
            TipoDeficiencia.VISUAL,
            TipoDeficiencia.PSICOSSOCIAL,
        ]


class TestEvidencias:
    """Detecção de evidências documentais."""

    def test_laudo_completo(self, classifier):
        texto = (
            "LAUDO MÉDICO\n"
            "Avaliação da especialista em otorrinolaringologia.\n"
            "CID-10: H90.3. Exame de audiometria anexo.\n"
            "Funcionalidade comprometida.\n"
            "Dra. Ana Souza - CRM 12345"
        )
        evidencias = classifier.detect_evidence(texto)

        assert evidencias.has_medical_report
        assert evidencias.has_specialist_report
        assert evidencias.has_cid_diagnosis
        assert evidencias.has_valid_professional_id
        assert evidencias.has_valid_signature
        assert evidencias.has_complementary_exams
        assert evidencias.has_cif_criteria
        assert not evidencias.type_detected

    def test_texto_sem_evidencias(self, classifier):
        evidencias = classifier.detect_evidence("Declaração simples.")
        assert not any(evidencias.model_dump().values())

    def test_crm_sem_tratamento_nao_assina(self, classifier):
        """CRM sem Dr./Dra. não conta como assinatura em formato adequado."""
        evidencias = classifier.detect_evidence("Carimbo CRM 98765")

        assert evidencias.has_valid_professional_id
        assert not evidencias.has_valid_signature

    def test_tratamento_sem_crm_nao_assina(self, classifier):
        evidencias = classifier.detect_evidence("Dr. Carlos Lima")
        assert not evidencias.has_valid_signature

    @pytest.mark.parametrize("texto", ["cid h90", "c.i.d. h90", "cid-10", "cid10", "CID: F20"])
    def test_marcadores_cid(self, texto):
        assert contem_cid(texto.lower())

    @pytest.mark.parametrize("texto", ["mora na cidade", "acidente de trabalho", "decidiu"])
    def test_cid_casa_por_substring(self, texto):
        """O marcador é buscado como substring, inclusive dentro de palavras."""
        assert contem_cid(texto)

    @pytest.mark.parametrize("texto", ["crm12345", "crm-sp 123456", "crmsp 123456"])
    def test_marcadores_crm(self, texto):
        assert contem_crm(texto)

    def test_cif_por_substring(self, classifier):
        assert classifier.detect_evidence("codificação CIF b230").has_cif_criteria
        assert classifier.detect_evidence("especificidade do quadro").has_cif_criteria

    def test_quebra_de_linha_apos_sigla(self, classifier):
        """'CRM-' e 'CID-' no fim da linha continuam reconhecidos após desfazer a hifenização."""
        continuo = classifier.detect_evidence("Laudo medico. Dr. Joao CRM-SP 123456. CID-H90.3")
        quebrado = classifier.detect_evidence("Laudo medico. Dr. Joao CRM-\nSP 123456. CID-\nH90.3")

        assert quebrado.has_valid_professional_id
        assert quebrado.has_cid_diagnosis
        assert quebrado.has_valid_signature
        assert quebrado == continuo

    def test_pontuacao_com_cid_por_substring(self, classifier):
        texto = "Laudo medico. Deficiencia fisica por acidente. Dr. X CRM 123"
        evidencias = classifier.detect_evidence(texto).model_copy(
            update={"type_detected": classifier.classify(texto).identificado}
        )

        assert evidencias.has_cid_diagnosis
        assert CompletenessScorer().score(evidencias).score == 65


class TestLogger:
    """Logger injetável."""

    def test_usa_logger_injetado(self):
        logger = MagicMock()
        KeywordClassifier(logger=logger).classify("Surdez")
        assert logger.debug.called
