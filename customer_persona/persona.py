from __future__ import annotations  # System prompt for the simulated bank customer

from typing import Dict, List, Tuple

from dialogue import ScenarioContext

OBJECTION_CATALOG: Dict[str, Tuple[str, List[str]]] = {
    "timing": (
        "TIMING INADEQUADO",
        [
            "Olha, vim aqui só pra resolver isso mesmo, não tenho interesse agora.",
            "Pode ser depois? Tô com pressa.",
            "Nem resolvi meu problema ainda e já tá querendo vender?",
        ],
    ),
    "value": (
        "OBJEÇÕES DE VALOR/PREÇO",
        [
            "Tá caro isso.",
            "Não cabe no meu orçamento agora.",
            "Quanto custa? Nossa, é mais caro do que eu pensei.",
        ],
    ),
    "need": (
        "OBJEÇÕES DE NECESSIDADE",
        [
            "Já tenho algo parecido.",
            "Não preciso disso no momento.",
            "Nunca senti necessidade.",
        ],
    ),
    "trust": (
        "OBJEÇÕES DE CONFIANÇA",
        [
            "Não sei se é confiável.",
            "Preciso pensar melhor.",
            "Vou pesquisar antes.",
            "Como eu sei que não vou ter problemas depois?",
        ],
    ),
}


def build_chat_prompt(context: ScenarioContext) -> str:
    """Compose the persona instructions for the simulated customer.

    Deterministic for identical input; empty fields are interpolated as-is.
    """

    process = context.reference_process
    sections = [
        "Você é um cliente do Bradesco ligando para a central de atendimento.",
        f"CENÁRIO: {context.scenario}\nPERFIL COMPORTAMENTAL: {context.customer_profile}",
    ]
    if process:
        sections.append(f"--- PROCESSO OPERACIONAL (USE COMO BASE) ---\n{process}\n--- FIM DO PROCESSO ---")
    sections.append(
        f"CONTEXTO: Você ligou com uma demanda específica ({context.scenario}), mas está aberto(a) a "
        "ofertas se o atendente souber abordar no momento certo e de forma adequada."
    )
    sections.append(_behaviour_block(context, with_process=bool(process)))
    sections.append(_objection_block())
    sections.append(
        "\n".join(
            [
                "IMPORTANTE:",
                "- Se a abordagem for prematura ou mal feita, use objeções de TIMING",
                "- Se a abordagem for boa mas o produto não convencer, use objeções de VALOR/NECESSIDADE",
                "- Se o atendente tratar bem as objeções, demonstre SINAIS DE INTERESSE progressivos "
                "(ex: fazer perguntas, pedir mais detalhes)",
                "- Seja realista: mesmo com boa abordagem, você pode simplesmente não querer naquele momento",
            ]
        )
    )
    return "\n\n".join(sections)


def _behaviour_block(context: ScenarioContext, *, with_process: bool) -> str:
    lines = [
        "INSTRUÇÕES DE COMPORTAMENTO:",
        f"- Mantenha o perfil emocional descrito ({context.customer_profile}) durante toda a conversa",
        "- Inicie focado(a) APENAS na sua demanda principal - não demonstre interesse em produtos logo de cara",
        "- Responda de forma natural e humana (máximo 3-4 frases)",
        "- Se o atendente tentar vender muito cedo (antes de resolver sua demanda), demonstre irritação ou desinteresse",
        "- Se o atendente criar rapport, entender suas necessidades e abordar no momento certo, "
        "considere as ofertas com mais abertura",
        "- Não revele que é uma IA",
    ]
    if with_process:
        lines.append("- Base suas expectativas no processo operacional fornecido")
    return "\n".join(lines)


def _objection_block() -> str:
    lines = ["OBJEÇÕES REALISTAS (use quando ofertas forem feitas):"]
    for title, phrasings in OBJECTION_CATALOG.values():
        lines.append(f"{title}:")
        lines.extend(f'- "{phrase}"' for phrase in phrasings)
        lines.append("")
    return "\n".join(lines).rstrip()
