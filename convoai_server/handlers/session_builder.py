"""
Assembly of the Agora Conversational AI start request.

Given a validated invitation, this module collects an RTC token for the agent,
resolves the TTS vendor configuration, fills in modalities from caller input
or configured defaults, and combines them with the service's fixed ASR, LLM
and VAD tuning into a single AgoraStartRequest.
"""

import json
import logging
import secrets
import string
import time
from typing import List, Optional, Sequence

from convoai_server.config import constants
from convoai_server.config.settings import ConvoAIConfig
from convoai_server.errors import TokenGenerationError
from convoai_server.handlers.tts_resolver import resolve_tts_config
from convoai_server.models.agent_schemas import InviteAgentRequest
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
from convoai_server.services.token_service import TokenIssuer

logger = logging.getLogger(constants.LOGGER_NAME)

REDACTED = "***"

# Credential fields anywhere in the start request: the agent token, the LLM
# api_key and the TTS vendor keys
_SECRET_FIELDS = frozenset({"token", "api_key", "key"})


def redact_secrets(payload):
    """Return a copy of a JSON-like payload with credential values masked."""
    if isinstance(payload, dict):
        return {
            name: REDACTED if name in _SECRET_FIELDS else redact_secrets(value)
            for name, value in payload.items()
        }
    if isinstance(payload, list):
        return [redact_secrets(item) for item in payload]
    return payload


def resolve_modalities(
    requested: Optional[Sequence[str]], fallback: Sequence[str]
) -> List[str]:
    """Return the requested modalities, or the fallback when none were given."""
    if not requested:
        return list(fallback)
    return list(requested)


def is_string_uid(identity: str) -> bool:
    """
    Check whether an identity must be sent as a string UID.

    Returns True if the identity contains any character outside 0-9. Purely
    numeric identities, including "0" and the empty string, are numeric UIDs.
    """
    return any(ch < "0" or ch > "9" for ch in identity)


def get_remote_rtc_uids(requester_id: str) -> List[str]:
    # TODO: map requester "0" to the "*" wildcard once the client apps can
    # handle an agent that subscribes to every user in the channel.
    return [requester_id]


def generate_session_name() -> str:
    """Return a session name unique per invitation: agent-<ns timestamp>-<suffix>."""
    suffix = "".join(
        secrets.choice(string.ascii_lowercase)
        for _ in range(constants.SESSION_NAME_SUFFIX_LENGTH)
    )
    return f"{constants.SESSION_NAME_PREFIX}-{time.time_ns()}-{suffix}"


def _build_llm_config(
    config: ConvoAIConfig, input_modalities: List[str], output_modalities: List[str]
) -> LLMConfig:
    return LLMConfig(
        url=config.llm_url,
        api_key=config.llm_token,
        system_messages=[
            SystemMessage(role=constants.LLM_SYSTEM_ROLE, content=constants.LLM_SYSTEM_PROMPT)
        ],
        greeting_message=constants.LLM_GREETING_MESSAGE,
        failure_message=constants.LLM_FAILURE_MESSAGE,
        max_history=constants.LLM_MAX_HISTORY,
        params=LLMParams(
            model=config.llm_model,
            max_tokens=constants.LLM_MAX_TOKENS,
            temperature=constants.LLM_TEMPERATURE,
            top_p=constants.LLM_TOP_P,
        ),
        input_modalities=input_modalities,
        output_modalities=output_modalities,
    )


def build_start_request(
    request: InviteAgentRequest,
    config: ConvoAIConfig,
    token_issuer: TokenIssuer,
) -> AgoraStartRequest:
    """
    Build the start request for a validated invitation.

    Args:
        request: The validated invitation
        config: Process configuration
        token_issuer: Capability that signs RTC tokens

    Returns:
        AgoraStartRequest ready to be posted to the join endpoint

    Raises:
        TokenGenerationError: The agent token could not be issued
        TTSConfigError: The TTS vendor configuration is unusable
    """
    try:
        token = token_issuer.issue_rtc_token(
            request.channel_name,
            constants.AGENT_TOKEN_UID,
            constants.RTC_ROLE_PUBLISHER,
            constants.DEFAULT_TOKEN_EXPIRE_SECONDS,
        )
    except TokenGenerationError:
        raise
    except Exception as e:
        raise TokenGenerationError(f"failed to generate token: {e}") from e

    tts = resolve_tts_config(config.tts_vendor, config.tts_credentials)

    input_modalities = resolve_modalities(
        request.input_modalities, config.default_input_modalities
    )
    output_modalities = resolve_modalities(
        request.output_modalities, config.default_output_modalities
    )

    start_request = AgoraStartRequest(
        name=generate_session_name(),
        properties=Properties(
            channel=request.channel_name,
            token=token,
            agent_rtc_uid=config.agent_uid,
            remote_rtc_uids=get_remote_rtc_uids(request.requester_id),
            enable_string_uid=is_string_uid(request.requester_id),
            idle_timeout=constants.IDLE_TIMEOUT_SECONDS,
            asr=ASRConfig(language=constants.ASR_LANGUAGE, task=constants.ASR_TASK),
            llm=_build_llm_config(config, input_modalities, output_modalities),
            tts=tts,
            vad=VADConfig(
                silence_duration_ms=constants.VAD_SILENCE_DURATION_MS,
                speech_duration_ms=constants.VAD_SPEECH_DURATION_MS,
                threshold=constants.VAD_THRESHOLD,
                interrupt_duration_ms=constants.VAD_INTERRUPT_DURATION_MS,
                prefix_padding_ms=constants.VAD_PREFIX_PADDING_MS,
            ),
            advanced_features=AdvancedFeatures(
                enable_aivad=constants.ENABLE_AIVAD,
                enable_bhvs=constants.ENABLE_BHVS,
            ),
        ),
    )
    if logger.isEnabledFor(logging.DEBUG):
        payload = redact_secrets(start_request.model_dump(mode="json"))
        logger.debug(
            f"Built start request {start_request.name} for channel {request.channel_name}: "
            f"{json.dumps(payload, indent=2)}"
        )
    return start_request
