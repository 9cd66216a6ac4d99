"""
Process configuration for the Conversational AI service.

The configuration is read from the environment exactly once at startup and
held in an immutable ConvoAIConfig that is passed to every component that
needs it. The TTS vendor credential variant is selected here, from TTS_VENDOR,
and never changes for the lifetime of the process.
"""

import logging
import os
from typing import List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from convoai_server.config.constants import (
    DEFAULT_INPUT_MODALITIES,
    DEFAULT_OUTPUT_MODALITIES,
    DEFAULT_PORT,
    LOGGER_NAME,
    SUPPORTED_MODALITIES,
)
from convoai_server.errors import ConfigError
from convoai_server.models.tts_schemas import (
    TTS_VENDOR_ELEVENLABS,
    TTS_VENDOR_MICROSOFT,
    ElevenLabsTTSCredentials,
    MicrosoftTTSCredentials,
    VendorCredentials,
)

logger = logging.getLogger(LOGGER_NAME)


class ConvoAIConfig(BaseModel):
    """Immutable snapshot of everything the service reads from the environment."""

    model_config = ConfigDict(frozen=True)

    # Agora
    app_id: str = ""
    app_certificate: str = ""
    customer_id: str = ""
    customer_secret: str = ""
    base_url: str = ""
    agent_uid: str = ""

    # LLM
    llm_model: str = ""
    llm_url: str = ""
    llm_token: str = ""

    # TTS
    tts_vendor: str = ""
    tts_credentials: Optional[VendorCredentials] = None

    # Modalities, raw comma-separated values
    input_modalities: str = ""
    output_modalities: str = ""

    # Server
    port: int = DEFAULT_PORT
    cors_allow_origin: str = ""

    @property
    def default_input_modalities(self) -> Tuple[str, ...]:
        return tuple(parse_modalities(self.input_modalities)) or DEFAULT_INPUT_MODALITIES

    @property
    def default_output_modalities(self) -> Tuple[str, ...]:
        return tuple(parse_modalities(self.output_modalities)) or DEFAULT_OUTPUT_MODALITIES


def parse_modalities(value: str) -> List[str]:
    """Split a comma-separated modality list, ignoring surrounding whitespace."""
    if not value or not value.strip():
        return []
    return [item.strip() for item in value.split(",")]


def validate_modalities(value: str) -> bool:
    """Return True if every element of the comma list is a supported modality."""
    return all(item in SUPPORTED_MODALITIES for item in parse_modalities(value))


def _load_tts_credentials(vendor: str, env: Mapping[str, str]) -> Optional[VendorCredentials]:
    if vendor == TTS_VENDOR_MICROSOFT:
        return MicrosoftTTSCredentials(
            key=env.get("MICROSOFT_TTS_KEY", ""),
            region=env.get("MICROSOFT_TTS_REGION", ""),
            voice_name=env.get("MICROSOFT_TTS_VOICE_NAME", ""),
            rate=env.get("MICROSOFT_TTS_RATE", ""),
            volume=env.get("MICROSOFT_TTS_VOLUME", ""),
        )
    if vendor == TTS_VENDOR_ELEVENLABS:
        return ElevenLabsTTSCredentials(
            api_key=env.get("ELEVENLABS_API_KEY", ""),
            voice_id=env.get("ELEVENLABS_VOICE_ID", ""),
            model_id=env.get("ELEVENLABS_MODEL_ID", ""),
        )
    return None


def load_config(environ: Optional[Mapping[str, str]] = None) -> ConvoAIConfig:
    """
    Build a ConvoAIConfig from the process environment.

    Args:
        environ: Mapping to read from instead of os.environ (used by tests)

    Returns:
        ConvoAIConfig: The frozen configuration

    Raises:
        ConfigError: PORT is not an integer
    """
    env = os.environ if environ is None else environ
    vendor = env.get("TTS_VENDOR", "").strip()

    port_value = env.get("PORT", "") or str(DEFAULT_PORT)
    try:
        port = int(port_value)
    except ValueError as e:
        raise ConfigError(f"config error: invalid PORT value {port_value!r}") from e

    return ConvoAIConfig(
        app_id=env.get("AGORA_APP_ID", ""),
        app_certificate=env.get("AGORA_APP_CERTIFICATE", ""),
        customer_id=env.get("AGORA_CUSTOMER_ID", ""),
        customer_secret=env.get("AGORA_CUSTOMER_SECRET", ""),
        base_url=env.get("AGORA_CONVO_AI_BASE_URL", ""),
        agent_uid=env.get("AGENT_UID", ""),
        llm_model=env.get("LLM_MODEL", ""),
        llm_url=env.get("LLM_URL", ""),
        llm_token=env.get("LLM_TOKEN", ""),
        tts_vendor=vendor,
        tts_credentials=_load_tts_credentials(vendor, env),
        input_modalities=env.get("INPUT_MODALITIES", ""),
        output_modalities=env.get("OUTPUT_MODALITIES", ""),
        port=port,
        cors_allow_origin=env.get("CORS_ALLOW_ORIGIN", ""),
    )


def validate_environment(config: ConvoAIConfig) -> None:
    """
    Check that the configuration is complete enough to serve requests.

    Raises:
        ConfigError: Naming the first missing or malformed setting
    """
    if not config.app_id or not config.app_certificate:
        raise ConfigError(
            "config error: Agora credentials (APP_ID, APP_CERTIFICATE) are not set"
        )

    if not config.customer_id or not config.customer_secret or not config.base_url:
        raise ConfigError(
            "config error: Agora Conversation AI credentials "
            "(CUSTOMER_ID, CUSTOMER_SECRET, BASE_URL) are not set"
        )

    if not config.llm_url or not config.llm_token:
        raise ConfigError("config error: LLM configuration (LLM_URL, LLM_TOKEN) is not set")

    if not config.tts_vendor:
        raise ConfigError("config error: TTS_VENDOR is not set")

    if not validate_modalities(config.input_modalities):
        raise ConfigError("config error: Invalid INPUT_MODALITIES format")
    if not validate_modalities(config.output_modalities):
        raise ConfigError("config error: Invalid OUTPUT_MODALITIES format")

    logger.info(
        f"Configuration validated (tts_vendor={config.tts_vendor}, "
        f"llm_model={config.llm_model or '-'})"
    )
