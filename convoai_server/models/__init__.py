"""
Pydantic models for the ConvoAI server.

Key components:
- agent_schemas: Request and response bodies of the service's own HTTP API.
- agora_schemas: The start request posted to the Conversational AI platform.
- tts_schemas: TTS vendor credentials and the vendor-tagged TTS configuration.
"""

from convoai_server.models.agent_schemas import (
    ErrorResponse,
    InviteAgentRequest,
    InviteAgentResponse,
    RemoveAgentRequest,
    RemoveAgentResponse,
    TokenRequest,
    TokenResponse,
)
from convoai_server.models.agora_schemas import (
    AdvancedFeatures,
    AgoraStartRequest,
    ASRConfig,
    LLMConfig,
    LLMParams,
    Properties,
    SystemMessage,
    VADConfig,
)
from convoai_server.models.tts_schemas import (
    ElevenLabsTTSConfig,
    ElevenLabsTTSCredentials,
    ElevenLabsTTSParams,
    MicrosoftTTSConfig,
    MicrosoftTTSCredentials,
    MicrosoftTTSParams,
)
