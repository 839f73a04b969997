# sistemas/avaliacao_pcd/constants.py
"""
Constantes do sistema de Avaliação PCD

Tabelas de regras por palavras-chave, pesos de completude e textos legais.
Todas as tabelas são somente leitura e carregadas uma vez na importação.
Os gatilhos são comparados com o texto já normalizado (minúsculas, NFC).
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from sistemas.avaliacao_pcd.schemas import TipoDeficiencia, QualidadeDocumental


# ==========================================
# Classificação por palavras-chave
# ==========================================

@dataclass(frozen=True)
class RegraDeficiencia:
    """Regra de detecção de um tipo de deficiência base."""
    tipo: TipoDeficiencia
    gatilhos: Tuple[str, ...]
    qualificacoes: Tuple[str, ...]
    # Exame obrigatório para o tipo: basta um dos termos estar presente
    exames_obrigatorios: Tuple[str, ...] = ()
    lacuna_exame: Optional[str] = None


# Ordem de avaliação fixa. Desempate: a ÚLTIMA regra que casar define o
# tipo principal (e, com ele, qualificações e lacunas de exame).
REGRAS_DEFICIENCIA: Tuple[RegraDeficiencia, ...] = (
    RegraDeficiencia(
        tipo=TipoDeficiencia.FISICA,
        gatilhos=(
            "deficiência física", "deficiencia fisica", "mobilidade reduzida",
            "paraplegia", "amputação", "amputacao",
        ),
        qualificacoes=("Ortopedia", "Fisiatria"),
    ),
    RegraDeficiencia(
        tipo=TipoDeficiencia.INTELECTUAL,
        gatilhos=(
            "deficiência intelectual", "deficiencia intelectual", "retardo mental",
            "transtorno do desenvolvimento",
        ),
        qualificacoes=("Neurologia", "Psiquiatria"),
    ),
    RegraDeficiencia(
        tipo=TipoDeficiencia.AUDITIVA,
        gatilhos=(
            "deficiência auditiva", "deficiencia auditiva", "surdez",
            "perda auditiva", "audiometria",
        ),
        qualificacoes=("Otorrinolaringologia", "Fonoaudiologia"),
        exames_obrigatorios=("audiometria", "bera"),
        lacuna_exame="Audiometria ou BERA (obrigatorio para deficiencia auditiva)",
    ),
    RegraDeficiencia(
        tipo=TipoDeficiencia.VISUAL,
        gatilhos=(
            "deficiência visual", "deficiencia visual", "cegueira",
            "baixa visão", "baixa visao", "acuidade visual",
        ),
        qualificacoes=("Oftalmologia",),
        exames_obrigatorios=("acuidade visual", "campo visual"),
        lacuna_exame="Exame de acuidade visual e campo visual (obrigatorio para deficiencia visual)",
    ),
    RegraDeficiencia(
        tipo=TipoDeficiencia.PSICOSSOCIAL,
        gatilhos=("transtorno mental", "psicossocial", "esquizofrenia", "bipolar"),
        qualificacoes=("Psiquiatria",),
    ),
)

# Número mínimo de tipos base encontrados para classificar como MULTIPLA
MINIMO_TIPOS_MULTIPLA = 2


# ==========================================
# Evidências documentais
# ==========================================

# Busca por substring, inclusive "CRM-SP" e "cidh90" (hifenização desfeita)
MARCADORES_CID = ("cid", "c.i.d")
MARCADORES_CRM = ("crm",)

TRATAMENTOS_MEDICOS = ("dr.", "dra.")

MARCADORES_LAUDO_MEDICO = ("laudo médico", "laudo medico", "parecer médico", "parecer medico")
MARCADORES_RELATORIO_ESPECIALISTA = ("relatório", "relatorio", "especialista", "avaliação", "avaliacao")
MARCADORES_EXAMES_COMPLEMENTARES = ("exame", "resultado", "tomografia")
MARCADORES_CIF = ("funcionalidade", "cif", "limitação funcional", "limitacao funcional")

# Datas no formato brasileiro (idade do documento)
PADRAO_DATA_BR = re.compile(r"\b(\d{2})/(\d{2})/(\d{4})\b")


# ==========================================
# Pontuação de completude
# ==========================================

# Rubrica aditiva (soma 100). Chave = campo de DocumentEvidenceFlags.
PESOS_COMPLETUDE = {
    "has_medical_report": 20,
    "has_specialist_report": 20,
    "has_cid_diagnosis": 10,
    "has_valid_signature": 10,
    "has_valid_professional_id": 10,
    "type_detected": 15,
    "has_cif_criteria": 5,
    "has_complementary_exams": 10,
}

PONTUACAO_MAXIMA = 100

# (pontuação mínima, qualidade), avaliado em ordem decrescente
FAIXAS_QUALIDADE = (
    (85, QualidadeDocumental.EXCELENTE),
    (70, QualidadeDocumental.BOA),
    (50, QualidadeDocumental.REGULAR),
)

# Abaixo disso a documentação é considerada insuficiente para recomendação
PONTUACAO_MINIMA_RECOMENDADA = 70


# ==========================================
# Pendências e recomendações (análise documental)
# ==========================================

class Pendencia:
    LAUDO_MEDICO = "Laudo medico atualizado (obrigatorio)"
    CID = "Diagnostico com codigo CID"
    CRM = "Documento com CRM do medico"


class Urgencia:
    CID_AUSENTE = "Falta diagnostico com CID - fundamental para avaliacao"
    TIPO_NAO_IDENTIFICADO = "Tipo de deficiencia nao identificado no documento"
    TIPO_DIVERGENTE = "Tipo de deficiencia detectada ({detectado}) difere do esperado ({esperado})"
    FALHA_ANALISE = "Sistema indisponivel ou PDF invalido - analise manual urgente"


class Recomendacao:
    SOLICITAR_FALTANTES = "Solicitar documentos faltantes listados"
    VERIFICAR_CRM = "Verificar assinatura e carimbo medico com CRM valido"
    DOCUMENTACAO_INSUFICIENTE = "Documentacao insuficiente - solicitar relatorio medico mais detalhado"
    IDENTIFICAR_TIPO = "Identificar tipo especifico de deficiencia nos documentos"
    REPROCESSAR = "Erro tecnico na analise - reprocessar documentacao ou verificar URL do PDF"


ERRO_ANALISE = "Erro na analise: {mensagem}"
ERRO_TEXTO_VAZIO = "Nenhum texto pode ser extraido do PDF"


# ==========================================
# Avaliação de elegibilidade
# ==========================================

@dataclass(frozen=True)
class RegraLimitacao:
    """Regra de detecção de tipo em documento estruturado, com o achado funcional."""
    tipo: TipoDeficiencia
    gatilhos: Tuple[str, ...]
    achado: str


# Mesma política de desempate das REGRAS_DEFICIENCIA: a última regra que casar
# (considerando todos os documentos, em ordem) define o tipo.
REGRAS_LIMITACAO: Tuple[RegraLimitacao, ...] = (
    RegraLimitacao(
        tipo=TipoDeficiencia.FISICA,
        gatilhos=("deficiência física", "deficiencia fisica", "mobilidade"),
        achado="Limitações de mobilidade identificadas",
    ),
    RegraLimitacao(
        tipo=TipoDeficiencia.INTELECTUAL,
        gatilhos=("deficiência intelectual", "deficiencia intelectual", "cognitiv"),
        achado="Limitações cognitivas identificadas",
    ),
    RegraLimitacao(
        tipo=TipoDeficiencia.AUDITIVA,
        gatilhos=("deficiência auditiva", "deficiencia auditiva", "surdez"),
        achado="Limitações auditivas identificadas",
    ),
    RegraLimitacao(
        tipo=TipoDeficiencia.VISUAL,
        gatilhos=("deficiência visual", "deficiencia visual", "cegueira"),
        achado="Limitações visuais identificadas",
    ),
    RegraLimitacao(
        tipo=TipoDeficiencia.PSICOSSOCIAL,
        gatilhos=("transtorno mental", "psicossocial"),
        achado="Limitações psicossociais identificadas",
    ),
)

MARCADORES_LIMITACAO_FUNCIONAL = (
    "limitação funcional", "limitacao funcional",
    "limitações funcionais", "limitacoes funcionais",
)


class EvidenciaClinica:
    CID = "CID identificado na documentação"
    LIMITACAO_FUNCIONAL = "Limitações funcionais documentadas"


class DocumentoFaltante:
    LAUDO_MEDICO = "Laudo médico atualizado (menos de 1 ano)"
    RELATORIO_ESPECIALISTA = "Relatório de médico especialista na área da deficiência"
    REVISAO_MANUAL = "Erro na análise - revisão manual necessária"


# Confiança por ramo da tabela de decisão
CONFIANCA_DOCUMENTACAO_INCOMPLETA = 0.3
CONFIANCA_CONFIRMADO = 0.8
CONFIANCA_SEM_LIMITACAO = 0.6
CONFIANCA_NAO_ENQUADRA = 0.7
CONFIANCA_ERRO = 0.1

FATORES_COMPENSATORIOS = (
    "Capacidade adaptativa preservada",
    "Uso de tecnologia assistiva",
    "Suporte familiar adequado",
)

FUNDAMENTACAO_LEI_13146 = (
    "Art. 2º - Considera-se pessoa com deficiência aquela que tem impedimento de longo prazo "
    "de natureza física, mental, intelectual ou sensorial, o qual, em interação com uma ou mais "
    "barreiras, pode obstruir sua participação plena e efetiva na sociedade em igualdade de "
    "condições com as demais pessoas."
)
FUNDAMENTACAO_CIF = (
    "Classificação baseada no modelo bio-psico-social da deficiência, considerando funções e "
    "estruturas do corpo, atividade e participação social."
)
FUNDAMENTACAO_DECRETO = "Decreto 3.298/1999 e suas atualizações para classificação e avaliação"

RACIOCINIO_SIM = (
    "Baseado na análise da documentação fornecida, identificou-se {tipo} com limitações "
    "funcionais que atendem aos critérios da Lei 13.146/2015. A documentação apresenta "
    "evidências clínicas suficientes para caracterizar impedimento de longo prazo que, em "
    "interação com barreiras, pode obstruir a participação plena na sociedade."
)
RACIOCINIO_NAO = (
    "A documentação analisada não apresenta evidências suficientes de impedimento de longo "
    "prazo que atenda aos critérios estabelecidos pela Lei 13.146/2015. As condições "
    "apresentadas não caracterizam deficiência nos termos legais vigentes."
)
# Partes ausentes ficam vazias e os espaços do modelo são mantidos
RACIOCINIO_TALVEZ = (
    "A documentação fornecida é insuficiente para conclusão definitiva. "
    "{faltantes} {avaliacao_fisica}"
)
RACIOCINIO_FALTAM_DOCUMENTOS = "Faltam documentos essenciais."
RACIOCINIO_AVALIACAO_FISICA = "Recomenda-se avaliação física presencial para melhor caracterização."
RACIOCINIO_ERRO = (
    "Erro técnico durante a análise. Recomenda-se revisão manual completa da documentação."
)


# ==========================================
# Laudo caracterizador
# ==========================================

# Cabeçalhos literais, na ordem em que aparecem no laudo
class SecaoLaudo:
    IDENTIFICACAO = "IDENTIFICACAO DO LAUDO"
    AVALIADO = "DADOS DO AVALIADO"
    MEDICAS = "INFORMACOES MEDICAS"
    FUNCIONAL = "AVALIACAO FUNCIONAL"
    CONCLUSAO = "CONCLUSAO TECNICA"
    FUNDAMENTACAO = "FUNDAMENTACAO LEGAL"
    RESPONSAVEL = "RESPONSAVEL TECNICO"


TITULO_LAUDO = "LAUDO CARACTERIZADOR DE PESSOA COM DEFICIENCIA"
SEPARADOR_LAUDO = "==============================================="

CITACAO_LEI_13146 = "- Lei no 13.146/2015 (Lei Brasileira de Inclusao da Pessoa com Deficiencia)"
CITACAO_DECRETO_3298 = "- Decreto no 3.298/1999 (Regulamenta a Lei no 7.853/1989)"
CITACAO_CIF = "- Classificacao Internacional de Funcionalidade, Incapacidade e Saude (CIF/OMS)"

RESTRICOES_LABORAIS = {
    "FISICA": (
        "Atividades que exijam grande esforco fisico",
        "Trabalhos em altura sem adaptacoes adequadas",
    ),
    "VISUAL": (
        "Atividades que dependam exclusivamente da visao",
        "Conducao de veiculos sem adaptacoes",
    ),
    "AUDITIVA": (
        "Ambientes com exigencia de comunicacao oral sem adaptacoes",
    ),
}

PREFIXO_ASSINATURA = "SHA256-"
TAMANHO_ASSINATURA = 16

LAUDO_ERRO_DOCUMENTO = "ERRO: Nao foi possivel gerar o laudo. Favor revisar os dados fornecidos."
LAUDO_ERRO_RESUMO = "Erro na geracao do laudo caracterizador"
LAUDO_ERRO_VALIDADE = "Invalido"
LAUDO_ERRO_ASSINATURA = "INVALID"
LAUDO_ERRO_RESTRICAO = "Documento invalido devido a erro de geracao"

VALIDADE_POR_EXTENSO = {1: "um", 2: "dois", 3: "tres", 4: "quatro", 5: "cinco"}

CONCLUSAO_LAUDO = (
    "Com base na avaliacao medica realizada e na analise da documentacao apresentada,\n"
    "ATESTO que {nome}, portador(a) do CPF {cpf},\n"
    "apresenta deficiencia do tipo {tipo},\n"
    "enquadrando-se nos criterios estabelecidos pela legislacao brasileira para\n"
    "PESSOA COM DEFICIENCIA (PCD).\n"
    "\n"
    "O diagnostico de {diagnostico} (CID-10: {cid})\n"
    "configura impedimento de longo prazo que, em interacao com diversas barreiras,\n"
    "pode obstruir a participacao plena e efetiva na sociedade em igualdade de\n"
    "condicoes com as demais pessoas."
)

VALIDADE_LAUDO = (
    "Este laudo tem validade de {anos} anos a partir da data de emissao e\n"
    "foi elaborado de acordo com as normas tecnicas vigentes e criterios\n"
    "estabelecidos pela legislacao brasileira."
)

RODAPE_LAUDO = (
    "Este documento possui validade legal e foi emitido em conformidade\n"
    "com a legislacao brasileira vigente sobre pessoas com deficiencia."
)

RESUMO_LAUDO = (
    "Laudo Caracterizador emitido para {nome} confirmando enquadramento como PCD "
    "tipo {tipo} com base no diagnostico {diagnostico} ({cid}). Deficiencia "
    "classificada como {grau} com prognostico {prognostico}. Documento valido por {anos} anos."
)

LINHA_ASSINATURA = "_________________________________"
