"""Configuration package for the call-center training services."""
from .routes import AppConfig, LlmRoute, load_config, load_route, resolve_route
from .settings import Settings, settings

CHAT_ROUTE_KEY = "customer_persona.reply"
EVALUATION_ROUTE_KEY = "call_evaluation.evaluate"
TIMING_ROUTE_KEY = "sales_timing.suggest"

__all__ = [
    "AppConfig",
    "LlmRoute",
    "load_config",
    "load_route",
    "resolve_route",
    "Settings",
    "settings",
    "CHAT_ROUTE_KEY",
    "EVALUATION_ROUTE_KEY",
    "TIMING_ROUTE_KEY",
]
