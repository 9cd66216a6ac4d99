"""
Pydantic models for the service's own HTTP API.

Inbound models only describe the shape of the JSON body. Business validation
(required fields, channel name length) is performed by the agent handlers so
that every rejection carries a message naming the offending field.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from convoai_server.config.constants import (
    AGENT_STATUS_RUNNING,
    DEFAULT_TOKEN_EXPIRE_SECONDS,
    RTC_ROLE_PUBLISHER,
    TOKEN_TYPE_RTC,
)


class InviteAgentRequest(BaseModel):
    """Request body for POST /agent/invite."""

    model_config = ConfigDict(frozen=True)

    requester_id: str = Field("", description="RTC identity of the end user")
    channel_name: str = Field("", description="Channel the agent should join")
    input_modalities: Optional[List[str]] = Field(
        None, description="Input modalities, defaults apply when omitted"
    )
    output_modalities: Optional[List[str]] = Field(
        None, description="Output modalities, defaults apply when omitted"
    )


class RemoveAgentRequest(BaseModel):
    """Request body for POST /agent/remove."""

    model_config = ConfigDict(frozen=True)

    agent_id: str = Field("", description="Identifier returned by /agent/invite")


class InviteAgentResponse(BaseModel):
    agent_id: str
    create_ts: int = Field(..., description="Unix timestamp of the invitation")
    status: str = AGENT_STATUS_RUNNING


class RemoveAgentResponse(BaseModel):
    success: bool
    agent_id: str


class ErrorResponse(BaseModel):
    error: str


class TokenRequest(BaseModel):
    """Request body for POST /token/getNew."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    token_type: str = Field(TOKEN_TYPE_RTC, alias="tokenType")
    channel: str = ""
    uid: Union[str, int] = "0"
    role: str = RTC_ROLE_PUBLISHER
    expire: int = DEFAULT_TOKEN_EXPIRE_SECONDS


class TokenResponse(BaseModel):
    token: str
