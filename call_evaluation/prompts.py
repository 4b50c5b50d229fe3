from __future__ import annotations  # Evaluation prompt templates for both rubrics

from typing import Sequence

from dialogue import Message, ScenarioContext, format_transcript

from .models import Rubric

PRINCIPLES_RUBRIC = """Avalie o atendente nos seguintes princípios (nota de 0 a 10 para cada):

1. ACOLHIMENTO: O atendente demonstrou receptividade, cordialidade e disposição para ajudar desde o início?
2. EMPATIA: O atendente compreendeu as emoções e necessidades do cliente, demonstrando sensibilidade?
3. RESOLUTIVIDADE: O atendente foi eficaz em resolver o problema ou encaminhar adequadamente?
4. ARGUMENTAÇÃO: O atendente apresentou argumentos claros, lógicos e convincentes para a oferta/solução?
5. CONTRA-ARGUMENTAÇÃO: O atendente soube lidar com objeções, dúvidas e resistências do cliente de forma adequada?

AVALIAÇÃO DA ABORDAGEM DE VENDA:
- Avalie se a abordagem de venda foi adequada ao perfil do cliente
- Considere timing, tom, técnicas utilizadas e respeito ao cliente
- Classifique como: "Excelente", "Boa", "Aceitável", "Inadequada" ou "Não se aplica"

PROBABILIDADE DE ACEITAÇÃO:
- Com base no desenrolar da conversa, estime a probabilidade (0-100%) de o cliente aceitar a oferta
- Considere sinais de interesse, objeções levantadas e engajamento

FEEDBACKS PARA MELHORIA:
- Forneça 3-5 feedbacks específicos e acionáveis
- Cada feedback deve incluir: o princípio relacionado, o que foi observado, e como melhorar
- Cite trechos específicos da conversa quando relevante"""

PRINCIPLES_SHAPE = """{
  "principios": {
    "acolhimento": { "nota": número 0-10, "observacao": "breve observação" },
    "empatia": { "nota": número 0-10, "observacao": "breve observação" },
    "resolutividade": { "nota": número 0-10, "observacao": "breve observação" },
    "argumentacao": { "nota": número 0-10, "observacao": "breve observação" },
    "contra_argumentacao": { "nota": número 0-10, "observacao": "breve observação" }
  },
  "abordagem_venda": {
    "classificacao": "Excelente | Boa | Aceitável | Inadequada | Não se aplica",
    "justificativa": "explicação detalhada da classificação"
  },
  "probabilidade_aceitacao": número 0-100,
  "justificativa_probabilidade": "explicação da probabilidade estimada",
  "feedbacks": [
    {
      "principio": "nome do princípio relacionado",
      "observacao": "o que foi observado no atendimento",
      "sugestao": "como melhorar especificamente",
      "trecho_exemplo": "trecho da conversa (se aplicável)"
    }
  ],
  "resumo_geral": "Resumo executivo da avaliação em 2-3 frases"
}"""

SALES_CRITERIA_RUBRIC = """Avalie o atendente nos seguintes critérios (nota de 0 a 10 para cada):

1. RESOLUÇÃO DA DEMANDA: A demanda principal do cliente foi resolvida (ou encaminhada) ANTES de qualquer oferta?
2. TIMING DA ABORDAGEM: A oferta foi feita no momento certo, depois de resolver a demanda e criar rapport?
3. IDENTIFICAÇÃO DE NECESSIDADES: O atendente fez perguntas para descobrir dores e necessidades do cliente?
4. TÉCNICA DE APRESENTAÇÃO: O produto foi apresentado com benefícios ligados às necessidades identificadas?
5. TRATAMENTO DE OBJEÇÕES: O atendente acolheu e respondeu as objeções sem pressionar o cliente?

CLASSIFICAÇÃO DO TIMING DA VENDA:
- "Prematura": oferta feita antes de resolver a demanda ou sem rapport
- "Adequada": oferta feita após resolver a demanda e entender o cliente
- "Tardia": oportunidades claras surgiram e a oferta veio tarde demais ou no encerramento apressado
- "Ausente": nenhuma oferta foi feita

PROBABILIDADE DE ACEITAÇÃO (0-100%):
Parta de uma base de 20% e ajuste conforme os sinais observados:
- Demanda principal resolvida antes da oferta: +15-25%
- Necessidade identificada com perguntas abertas: +10-20%
- Benefícios conectados à dor do cliente: +10-15%
- Objeções tratadas com empatia e resposta concreta: +10-15%
- Cliente fez perguntas ou pediu detalhes sobre o produto: +15-25%
- Oferta prematura ou insistente: -20-30%
- Objeções ignoradas ou rebatidas com pressão: -15-25%
- Cliente demonstrou irritação com a oferta: -20-30%
Limite o resultado entre 0 e 100.

DORES NÃO EXPLORADAS:
- Liste necessidades que o cliente deixou transparecer e que o atendente não aproveitou
- Para cada uma, indique o produto sugerido e o momento ideal para a oferta
- Use uma lista vazia se não houver

FEEDBACKS PARA MELHORIA:
- Forneça 3-5 feedbacks específicos e acionáveis
- Cada feedback deve incluir: a área, o que foi observado, o impacto na venda e como melhorar"""

SALES_CRITERIA_SHAPE = """{
  "criterios": {
    "resolucao_demanda": { "nota": número 0-10, "observacao": "breve observação" },
    "timing_abordagem": { "nota": número 0-10, "observacao": "breve observação" },
    "identificacao_necessidades": { "nota": número 0-10, "observacao": "breve observação" },
    "tecnica_apresentacao": { "nota": número 0-10, "observacao": "breve observação" },
    "tratamento_objecoes": { "nota": número 0-10, "observacao": "breve observação" }
  },
  "timing_classificacao": "Prematura | Adequada | Tardia | Ausente",
  "timing_justificativa": "por que o momento da oferta recebeu essa classificação",
  "probabilidade_aceitacao": número 0-100,
  "justificativa_probabilidade": "sinais considerados no cálculo",
  "dores_nao_exploradas": [
    {
      "dor_identificada": "necessidade percebida na fala do cliente",
      "produto_sugerido": "produto que atenderia essa necessidade",
      "momento_ideal": "em que ponto da conversa a oferta caberia"
    }
  ],
  "feedbacks": [
    {
      "area": "critério relacionado",
      "observacao": "o que foi observado no atendimento",
      "impacto": "efeito na chance de venda",
      "sugestao": "como melhorar especificamente"
    }
  ],
  "resumo_geral": "Resumo executivo da avaliação em 2-3 frases"
}"""

_TEMPLATES = {
    "principles": (
        "Analise a conversa abaixo e avalie a conduta do operador com base em princípios fundamentais de atendimento.",
        PRINCIPLES_RUBRIC,
        PRINCIPLES_SHAPE,
    ),
    "sales_criteria": (
        "Analise a conversa abaixo e avalie a condução da venda pelo operador, com foco no momento da oferta.",
        SALES_CRITERIA_RUBRIC,
        SALES_CRITERIA_SHAPE,
    ),
}


def build_evaluation_prompt(
    transcript: Sequence[Message],
    context: ScenarioContext,
    rubric: Rubric = "principles",
) -> str:
    """Compose the evaluator prompt for ``rubric`` over the full transcript."""

    if rubric not in _TEMPLATES:
        raise ValueError(f"Unknown rubric '{rubric}'")
    intro, definitions, shape = _TEMPLATES[rubric]
    sections = [
        "Você é um avaliador especialista em atendimento ao cliente de call center bancário.",
        f"CENÁRIO: {context.scenario}\nPERFIL DO CLIENTE: {context.customer_profile}",
        intro,
        f"TRANSCRIÇÃO DA CONVERSA:\n{format_transcript(transcript)}",
        f"INSTRUÇÕES DE AVALIAÇÃO:\n\n{definitions}",
        f"FORMATO DA RESPOSTA (JSON):\n{shape}",
        "Responda APENAS com o objeto JSON, sem texto adicional.",
    ]
    return "\n\n".join(sections)


__all__ = ["build_evaluation_prompt", "PRINCIPLES_SHAPE", "SALES_CRITERIA_SHAPE"]
