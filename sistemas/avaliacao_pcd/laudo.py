# sistemas/avaliacao_pcd/laudo.py
"""
Geração do Laudo Caracterizador de Pessoa com Deficiência.

O texto do laudo é o próprio documento legal entregue: cabeçalhos, ordem
das seções e citações legais precisam permanecer textualmente estáveis.
Linhas de campos opcionais ausentes são omitidas, nunca deixadas em branco.

A "assinatura digital" é apenas um marcador de rastreabilidade derivado
de laudo_id + CPF + data de emissão (SHA-256 truncado). Não é uma
assinatura criptográfica e não garante autenticidade.
"""

import hashlib
import time
import uuid
from datetime import datetime
from typing import Callable, List, Optional

from config import LAUDO_LOCAL_EMISSAO, LAUDO_VALIDADE_ANOS
from utils.logging_config import get_logger
from utils.security_sanitizer import mask_cpf, only_digits
from utils.timezone import add_years, format_date_br, format_datetime_br, now_local, to_local

from sistemas.avaliacao_pcd.constants import (
    TITULO_LAUDO,
    SEPARADOR_LAUDO,
    SecaoLaudo,
    CITACAO_LEI_13146,
    CITACAO_DECRETO_3298,
    CITACAO_CIF,
    CONCLUSAO_LAUDO,
    VALIDADE_LAUDO,
    VALIDADE_POR_EXTENSO,
    RODAPE_LAUDO,
    RESUMO_LAUDO,
    LINHA_ASSINATURA,
    RESTRICOES_LABORAIS,
    PREFIXO_ASSINATURA,
    TAMANHO_ASSINATURA,
    LAUDO_ERRO_DOCUMENTO,
    LAUDO_ERRO_RESUMO,
    LAUDO_ERRO_VALIDADE,
    LAUDO_ERRO_ASSINATURA,
    LAUDO_ERRO_RESTRICAO,
)
from sistemas.avaliacao_pcd.schemas import (
    ConfirmedCaseDossier,
    LaudoClassification,
    LaudoReport,
)


def _linha_opcional(rotulo: str, valor) -> List[str]:
    return [f"{rotulo}: {valor}"] if valor else []


def _itens(valores) -> List[str]:
    return [f"- {valor}" for valor in valores]


def gerar_assinatura(laudo_id: str, cpf: str, issued_at: str) -> str:
    """Marcador de rastreabilidade (não criptográfico) do laudo."""
    digest = hashlib.sha256(f"{laudo_id}{cpf}{issued_at}".encode("utf-8")).hexdigest()
    return f"{PREFIXO_ASSINATURA}{digest[:TAMANHO_ASSINATURA]}"


def restricoes_laborais(tipo) -> List[str]:
    """Restrições laborais fixas por tipo de deficiência (vazia para os demais tipos)."""
    return list(RESTRICOES_LABORAIS.get(tipo.value, ()))


def laudo_invalido() -> LaudoReport:
    """Laudo sentinela devolvido quando a geração falha."""
    return LaudoReport(
        laudo_id=f"ERROR-{int(time.time() * 1000)}",
        full_document=LAUDO_ERRO_DOCUMENTO,
        summary=LAUDO_ERRO_RESUMO,
        validity_period=LAUDO_ERRO_VALIDADE,
        digital_signature=LAUDO_ERRO_ASSINATURA,
        issued_at=format_datetime_br(now_local()),
        classification=LaudoClassification(
            pcd_status=False,
            quota_eligible=False,
            work_restrictions=[LAUDO_ERRO_RESTRICAO],
        ),
    )


class ReportGenerator:
    """
    Gerador do Laudo Caracterizador.

    Só deve ser chamado para casos já confirmados: todo laudo válido sai com
    pcd_status e quota_eligible verdadeiros.

    Args:
        clock: Função que retorna o datetime local de emissão (padrão: now_local)
        local_emissao: Local impresso no bloco de assinatura
        validade_anos: Validade do laudo em anos-calendário
    """

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        local_emissao: str = LAUDO_LOCAL_EMISSAO,
        validade_anos: int = LAUDO_VALIDADE_ANOS,
        logger=None,
    ):
        self._clock = clock or now_local
        self._local_emissao = local_emissao
        self._validade_anos = validade_anos
        self._logger = logger or get_logger(__name__)

    def generate(self, dossier: ConfirmedCaseDossier) -> LaudoReport:
        """Gera o laudo; em caso de erro devolve laudo_invalido()."""
        try:
            return self._gerar(dossier)
        except Exception as e:
            self._logger.exception("Erro na geração do laudo", erro=str(e))
            return laudo_invalido()

    def _gerar(self, dossier: ConfirmedCaseDossier) -> LaudoReport:
        candidato = dossier.candidate_info
        medico = dossier.medical_info
        profissional = dossier.professional_info

        self._logger.info(
            "Gerando Laudo Caracterizador",
            cpf=mask_cpf(candidato.cpf),
            crm=profissional.crm,
        )

        emitido_em = to_local(self._clock())
        laudo_id = (
            f"LAUDO-PCD-{emitido_em.strftime('%Y%m%d%H%M%S')}"
            f"-{uuid.uuid4().hex[:8].upper()}-{only_digits(candidato.cpf)}"
        )
        issued_at = format_datetime_br(emitido_em)

        valido_de = profissional.issue_date
        valido_ate = add_years(valido_de, self._validade_anos)

        documento = self._renderizar(dossier, laudo_id)

        resumo = RESUMO_LAUDO.format(
            nome=candidato.full_name,
            tipo=medico.deficiency_type.value,
            diagnostico=medico.diagnosis,
            cid=medico.cid_code,
            grau=medico.severity_level.value,
            prognostico=medico.prognosis.value,
            anos=self._validade_anos,
        )

        laudo = LaudoReport(
            laudo_id=laudo_id,
            full_document=documento,
            summary=resumo,
            validity_period=f"{format_date_br(valido_de)} ate {format_date_br(valido_ate)}",
            valid_from=valido_de,
            valid_until=valido_ate,
            digital_signature=gerar_assinatura(laudo_id, candidato.cpf, issued_at),
            issued_at=issued_at,
            classification=LaudoClassification(
                pcd_status=True,
                quota_eligible=True,
                work_restrictions=restricoes_laborais(medico.deficiency_type),
            ),
        )

        self._logger.info("Laudo gerado", laudo_id=laudo_id, valido_ate=format_date_br(valido_ate))
        return laudo

    def _renderizar(self, dossier: ConfirmedCaseDossier, laudo_id: str) -> str:
        candidato = dossier.candidate_info
        medico = dossier.medical_info
        funcional = dossier.functional_assessment
        profissional = dossier.professional_info
        base_legal = dossier.legal_basis

        data_emissao = format_date_br(profissional.issue_date)
        anos = self._validade_anos
        anos_texto = f"{anos} ({VALIDADE_POR_EXTENSO[anos]})" if anos in VALIDADE_POR_EXTENSO else str(anos)

        linhas = [
            TITULO_LAUDO,
            SEPARADOR_LAUDO,
            "",
            SecaoLaudo.IDENTIFICACAO,
            f"Numero do Laudo: {laudo_id}",
            f"Data de Emissao: {data_emissao}",
            f"Validade: {anos} anos a partir da data de emissao",
        ]
        if profissional.expiration_date:
            linhas.append(f"Data de Expiracao: {format_date_br(profissional.expiration_date)}")

        linhas += ["", SecaoLaudo.AVALIADO, f"Nome Completo: {candidato.full_name}", f"CPF: {candidato.cpf}"]
        linhas += _linha_opcional("RG", candidato.rg)
        linhas.append(f"Data de Nascimento: {candidato.birth_date}")
        linhas += _linha_opcional("Endereco", candidato.address)
        linhas += _linha_opcional("Telefone", candidato.phone)
        linhas += _linha_opcional("Email", candidato.email)

        linhas += [
            "",
            SecaoLaudo.MEDICAS,
            f"Tipo de Deficiencia: {medico.deficiency_type.value}",
            f"Diagnostico Principal: {medico.diagnosis}",
            f"CID-10: {medico.cid_code}",
        ]
        linhas += _linha_opcional("CIF", medico.cif_code)
        linhas += _linha_opcional("Data de Inicio", medico.onset_date)
        linhas += [
            f"Prognostico: {medico.prognosis.value}",
            f"Grau da Deficiencia: {medico.severity_level.value}",
        ]

        linhas += ["", SecaoLaudo.FUNCIONAL, "", "Limitacoes Funcionais Identificadas:"]
        linhas += _itens(funcional.functional_limitations)
        linhas += ["", "Funcoes Preservadas:"]
        linhas += _itens(funcional.preserved_functions)
        linhas += ["", "Capacidade Adaptativa:", funcional.adaptive_capacity]
        if funcional.assistive_technology:
            linhas += ["", "Tecnologias Assistivas:"]
            linhas += _itens(funcional.assistive_technology)

        linhas += [
            "",
            SecaoLaudo.CONCLUSAO,
            CONCLUSAO_LAUDO.format(
                nome=candidato.full_name,
                cpf=candidato.cpf,
                tipo=medico.deficiency_type.value.lower(),
                diagnostico=medico.diagnosis,
                cid=medico.cid_code,
            ),
            "",
            SecaoLaudo.FUNDAMENTACAO,
        ]
        if base_legal.lei13146:
            linhas.append(CITACAO_LEI_13146)
        if base_legal.decreto3298:
            linhas.append(CITACAO_DECRETO_3298)
        if base_legal.cif:
            linhas.append(CITACAO_CIF)
        linhas += _itens(base_legal.other_laws or [])

        linhas += [
            "",
            VALIDADE_LAUDO.format(anos=anos_texto),
            "",
            SecaoLaudo.RESPONSAVEL,
            f"Dr(a). {profissional.doctor_name}",
            f"CRM: {profissional.crm}",
            f"Especialidade: {profissional.specialization}",
            "",
            LINHA_ASSINATURA,
            "Assinatura e Carimbo",
            "",
            f"Data: {data_emissao}",
            f"Local: {self._local_emissao}",
            "",
            SEPARADOR_LAUDO,
            RODAPE_LAUDO,
        ]
        return "\n".join(linhas)


# Instância padrão usada pelo router
report_generator = ReportGenerator()
