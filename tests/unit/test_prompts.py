from call_evaluation import build_evaluation_prompt
from customer_persona import OBJECTION_CATALOG, build_chat_prompt
from dialogue import Message, ScenarioContext
from sales_timing import build_timing_prompt

CONTEXT = ScenarioContext(scenario="Problema com Cartão", customer_profile="Cliente Calmo")
TRANSCRIPT = [
    Message(role="assistant", content="Meu cartão está bloqueado."),
    Message(role="user", content="Vou verificar para o senhor."),
]


def test_chat_prompt_carries_persona_and_objections():
    prompt = build_chat_prompt(CONTEXT)
    assert "CENÁRIO: Problema com Cartão" in prompt
    assert "PERFIL COMPORTAMENTAL: Cliente Calmo" in prompt
    assert "Não revele que é uma IA" in prompt
    for title, phrasings in OBJECTION_CATALOG.values():
        assert title in prompt
        assert all(phrase in prompt for phrase in phrasings)
    assert "PROCESSO OPERACIONAL" not in prompt


def test_chat_prompt_is_deterministic():
    assert build_chat_prompt(CONTEXT) == build_chat_prompt(CONTEXT)


def test_chat_prompt_embeds_reference_process():
    context = CONTEXT.model_copy(update={"reference_process": "1. Confirmar identidade"})
    prompt = build_chat_prompt(context)
    assert "--- PROCESSO OPERACIONAL (USE COMO BASE) ---\n1. Confirmar identidade" in prompt
    assert "Base suas expectativas no processo operacional fornecido" in prompt


def test_chat_prompt_interpolates_empty_fields():
    prompt = build_chat_prompt(ScenarioContext(scenario="", customer_profile=""))
    assert "CENÁRIO: \nPERFIL COMPORTAMENTAL: " in prompt


def test_objection_catalog_covers_categories():
    assert set(OBJECTION_CATALOG) == {"timing", "value", "need", "trust"}


def test_principles_prompt_lists_rubric_and_shape():
    prompt = build_evaluation_prompt(TRANSCRIPT, CONTEXT, "principles")
    assert "CLIENTE: Meu cartão está bloqueado.\nATENDENTE: Vou verificar para o senhor." in prompt
    assert "CONTRA-ARGUMENTAÇÃO" in prompt
    assert '"contra_argumentacao"' in prompt
    assert '"abordagem_venda"' in prompt
    assert "criterios" not in prompt


def test_sales_criteria_prompt_keeps_probability_heuristics_as_text():
    prompt = build_evaluation_prompt(TRANSCRIPT, CONTEXT, "sales_criteria")
    assert '"timing_classificacao"' in prompt
    assert '"dores_nao_exploradas"' in prompt
    assert "+15-25%" in prompt


def test_timing_prompt_uses_recent_messages():
    prompt = build_timing_prompt(TRANSCRIPT, CONTEXT)
    assert "ÚLTIMAS MENSAGENS DA CONVERSA:\nCLIENTE: Meu cartão está bloqueado." in prompt
    assert '"should_suggest"' in prompt
