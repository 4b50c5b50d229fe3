import copy

import pytest

from call_evaluation import (
    PrinciplesEvaluation,
    SalesCriteriaEvaluation,
    SchemaMismatch,
    fallback_evaluation,
    map_evaluation,
)
from conftest import PRINCIPLES_PAYLOAD, SALES_CRITERIA_PAYLOAD


def test_principles_payload_round_trips():
    result = map_evaluation(PRINCIPLES_PAYLOAD, "principles")

    assert isinstance(result, PrinciplesEvaluation)
    assert result.principles.welcoming.score == 8
    assert result.sales_approach.classification == "Boa"
    assert result.acceptance_probability == 55
    assert result.feedbacks[0].example_quote == "CLIENTE: Tá caro isso."
    dumped = result.model_dump(mode="json", by_alias=True)
    for key, value in PRINCIPLES_PAYLOAD.items():
        assert dumped[key] == value


def test_sales_criteria_payload_round_trips():
    result = map_evaluation(SALES_CRITERIA_PAYLOAD, "sales_criteria")

    assert isinstance(result, SalesCriteriaEvaluation)
    assert result.timing_classification == "Prematura"
    assert result.criteria.objection_handling.score == 3
    assert result.unexplored_needs[0].suggested_product == "Cartão com milhas"
    dumped = result.model_dump(mode="json", by_alias=True)
    for key, value in SALES_CRITERIA_PAYLOAD.items():
        assert dumped[key] == value


def test_unknown_keys_are_ignored():
    payload = copy.deepcopy(PRINCIPLES_PAYLOAD)
    payload["csat"] = 4
    payload["principios"]["acolhimento"]["extra"] = "x"
    result = map_evaluation(payload, "principles")
    dumped = result.model_dump(mode="json", by_alias=True)
    assert "csat" not in dumped
    assert "extra" not in dumped["principios"]["acolhimento"]


def test_optional_fields_default():
    payload = copy.deepcopy(SALES_CRITERIA_PAYLOAD)
    del payload["dores_nao_exploradas"]
    assert map_evaluation(payload, "sales_criteria").unexplored_needs == ()

    principles = copy.deepcopy(PRINCIPLES_PAYLOAD)
    del principles["feedbacks"][0]["trecho_exemplo"]
    assert map_evaluation(principles, "principles").feedbacks[0].example_quote is None


def test_missing_required_keys_are_reported():
    payload = copy.deepcopy(PRINCIPLES_PAYLOAD)
    del payload["resumo_geral"]
    del payload["principios"]["empatia"]
    with pytest.raises(SchemaMismatch) as info:
        map_evaluation(payload, "principles")
    assert info.value.missing == ["resumo_geral", "principios.empatia"]


def test_payload_for_other_rubric_is_rejected():
    with pytest.raises(SchemaMismatch) as info:
        map_evaluation(PRINCIPLES_PAYLOAD, "sales_criteria")
    assert "criterios" in info.value.missing


def test_numeric_fields_are_coerced_and_clamped():
    payload = copy.deepcopy(PRINCIPLES_PAYLOAD)
    payload["principios"]["empatia"]["nota"] = "7,5"
    payload["principios"]["acolhimento"]["nota"] = 12
    payload["probabilidade_aceitacao"] = "65%"
    result = map_evaluation(payload, "principles")
    assert result.principles.empathy.score == 7.5
    assert result.principles.welcoming.score == 10.0
    assert result.acceptance_probability == 65.0


def test_classification_matching_ignores_case_and_accents():
    payload = copy.deepcopy(PRINCIPLES_PAYLOAD)
    payload["abordagem_venda"]["classificacao"] = "aceitavel"
    assert map_evaluation(payload, "principles").sales_approach.classification == "Aceitável"


def test_unusable_values_raise_schema_mismatch():
    payload = copy.deepcopy(PRINCIPLES_PAYLOAD)
    payload["principios"]["empatia"]["nota"] = "alta"
    with pytest.raises(SchemaMismatch):
        map_evaluation(payload, "principles")

    payload = copy.deepcopy(SALES_CRITERIA_PAYLOAD)
    payload["timing_classificacao"] = "Quando der"
    with pytest.raises(SchemaMismatch):
        map_evaluation(payload, "sales_criteria")


def test_result_is_immutable():
    result = map_evaluation(PRINCIPLES_PAYLOAD, "principles")
    with pytest.raises(Exception):
        result.summary = "changed"


@pytest.mark.parametrize("rubric", ["principles", "sales_criteria"])
def test_fallback_evaluation_is_renderable(rubric):
    body = fallback_evaluation(rubric, "timeout")
    assert body["erro"] == "timeout"
    result = map_evaluation(body, rubric)
    assert result.acceptance_probability == 0
    assert result.feedbacks == ()


@pytest.mark.parametrize("value", ["nan", "inf", float("nan")])
def test_non_finite_scores_raise_schema_mismatch(value):
    payload = copy.deepcopy(PRINCIPLES_PAYLOAD)
    payload["principios"]["empatia"]["nota"] = value
    with pytest.raises(SchemaMismatch):
        map_evaluation(payload, "principles")
