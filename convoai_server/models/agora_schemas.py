"""
Pydantic models for the Agora Conversational AI "join" request.

These models mirror the JSON body the platform expects when starting an
agent. They are frozen: a start request is assembled once per invitation and
never modified afterwards.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from convoai_server.models.tts_schemas import TTSConfig


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class ASRConfig(_Frozen):
    """Automatic speech recognition settings."""

    language: str
    task: str


class SystemMessage(_Frozen):
    role: str
    content: str


class LLMParams(_Frozen):
    model: str
    max_tokens: int
    temperature: float
    top_p: float


class LLMConfig(_Frozen):
    """Language model endpoint and conversation settings."""

    url: str
    api_key: str
    system_messages: List[SystemMessage]
    greeting_message: str
    failure_message: str
    max_history: int
    params: LLMParams
    input_modalities: List[str]
    output_modalities: List[str]


class VADConfig(_Frozen):
    """Voice activity detection tuning, all durations in milliseconds."""

    silence_duration_ms: int
    speech_duration_ms: int
    threshold: float
    interrupt_duration_ms: int
    prefix_padding_ms: int


class AdvancedFeatures(_Frozen):
    enable_aivad: bool = False
    enable_bhvs: bool = False


class Properties(_Frozen):
    """Everything the platform needs to run one agent in one channel."""

    channel: str
    token: str
    agent_rtc_uid: str
    remote_rtc_uids: List[str]
    enable_string_uid: bool
    idle_timeout: int
    asr: ASRConfig
    llm: LLMConfig
    tts: TTSConfig
    vad: VADConfig
    advanced_features: AdvancedFeatures = Field(default_factory=AdvancedFeatures)


class AgoraStartRequest(_Frozen):
    """Body of the POST {base_url}/{app_id}/join request."""

    name: str = Field(..., description="Unique session name for this invitation")
    properties: Properties
