from .persona import OBJECTION_CATALOG, build_chat_prompt

__all__ = ["OBJECTION_CATALOG", "build_chat_prompt"]
