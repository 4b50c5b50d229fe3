"""Catalog of practice scenarios and customer profiles offered to trainees."""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel

from .models import ScenarioContext


class CustomerProfile(BaseModel):
    id: str
    label: str
    emotion: str


class Scenario(BaseModel):
    id: str
    title: str
    description: str
    profiles: Tuple[CustomerProfile, ...]

    def profile(self, profile_id: str) -> CustomerProfile:
        for profile in self.profiles:
            if profile.id == profile_id:
                return profile
        raise KeyError(f"Profile '{profile_id}' not found for scenario '{self.id}'")


def _profiles(*rows: Tuple[str, str, str]) -> Tuple[CustomerProfile, ...]:
    return tuple(CustomerProfile(id=pid, label=label, emotion=emotion) for pid, label, emotion in rows)


SCENARIOS: Dict[str, Scenario] = {
    scenario.id: scenario
    for scenario in (
        Scenario(
            id="limite",
            title="Solicitação de Aumento de Limite",
            description="Cliente deseja aumentar o limite do cartão de crédito",
            profiles=_profiles(
                ("calmo", "Cliente Calmo", "😊"),
                ("ansioso", "Cliente Ansioso", "😰"),
                ("irritado", "Cliente Irritado", "😠"),
            ),
        ),
        Scenario(
            id="cobranca",
            title="Contestação de Cobrança",
            description="Cliente contesta uma cobrança não reconhecida",
            profiles=_profiles(
                ("confuso", "Cliente Confuso", "🤔"),
                ("preocupado", "Cliente Preocupado", "😟"),
                ("irritado", "Cliente Muito Irritado", "😡"),
            ),
        ),
        Scenario(
            id="cartao",
            title="Problema com Cartão",
            description="Cliente com problema de cartão bloqueado ou não recebido",
            profiles=_profiles(
                ("calmo", "Cliente Calmo", "😊"),
                ("urgente", "Cliente com Urgência", "⏰"),
                ("frustrado", "Cliente Frustrado", "😤"),
            ),
        ),
        Scenario(
            id="credito",
            title="Solicitação de Crédito",
            description="Cliente interessado em contratar um empréstimo",
            profiles=_profiles(
                ("empolgado", "Cliente Empolgado", "🤩"),
                ("cauteloso", "Cliente Cauteloso", "🤨"),
                ("desconfiado", "Cliente Desconfiado", "🧐"),
            ),
        ),
    )
}


def list_scenarios() -> List[Scenario]:
    return list(SCENARIOS.values())


def get_scenario(scenario_id: str) -> Scenario:
    """Return the scenario registered under ``scenario_id``.

    Raises:
        KeyError: If the scenario is unknown.
    """

    if scenario_id not in SCENARIOS:
        raise KeyError(f"Scenario '{scenario_id}' not found")
    return SCENARIOS[scenario_id]


def build_context(
    scenario_id: str,
    profile_id: str,
    reference_process: Optional[str] = None,
) -> ScenarioContext:
    """Resolve catalog ids into the title/label pair the prompts expect."""

    scenario = get_scenario(scenario_id)
    profile = scenario.profile(profile_id)
    return ScenarioContext(
        scenario=scenario.title,
        customer_profile=profile.label,
        reference_process=reference_process,
    )


__all__ = ["CustomerProfile", "Scenario", "SCENARIOS", "build_context", "get_scenario", "list_scenarios"]
