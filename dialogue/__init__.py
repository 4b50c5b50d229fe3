"""Conversation primitives and the scenario catalog."""
from .models import SPEAKER_LABELS, Message, ScenarioContext, format_transcript
from .scenarios import SCENARIOS, CustomerProfile, Scenario, build_context, get_scenario, list_scenarios

__all__ = [
    "CustomerProfile",
    "Message",
    "SCENARIOS",
    "SPEAKER_LABELS",
    "Scenario",
    "ScenarioContext",
    "build_context",
    "format_transcript",
    "get_scenario",
    "list_scenarios",
]
