"""Pydantic schemas for the training API."""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from dialogue import Message

RubricName = Literal["principles", "sales_criteria"]


class _CamelReq(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ChatReq(_CamelReq):
    messages: List[Message] = Field(default_factory=list)
    scenario: str
    customer_profile: str = Field(alias="customerProfile")
    process_id: Optional[str] = Field(default=None, alias="processId")


class ChatResp(BaseModel):
    message: str


class EvaluateReq(_CamelReq):
    transcript: List[Message]
    scenario: str
    customer_profile: str = Field(alias="customerProfile")
    rubric: RubricName = "principles"


class TimingReq(_CamelReq):
    messages: List[Message]
    scenario: str
    customer_profile: str = Field(alias="customerProfile")


class StartReq(BaseModel):
    scenario_id: str
    profile_id: str
    process_id: Optional[str] = None
    rubric: Optional[RubricName] = None


class TurnReq(BaseModel):
    session_id: str
    user_msg: str


class SessionReq(BaseModel):
    session_id: str


class SessionResp(BaseModel):
    session_id: str
    state: str
    scenario: str
    customer_profile: str
    rubric: RubricName
    messages: List[Message] = Field(default_factory=list)
    evaluation: Optional[Dict[str, Any]] = None
