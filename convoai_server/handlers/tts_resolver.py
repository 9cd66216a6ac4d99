"""
Resolution of the configured text-to-speech vendor into request parameters.

The resolver is pure: it reads only its arguments and never performs I/O, so a
misconfiguration is reported before any network call is attempted.
"""

import logging
import math
from typing import Optional

from convoai_server.config.constants import LOGGER_NAME
from convoai_server.errors import (
    InvalidTTSValueError,
    MissingTTSCredentialsError,
    UnsupportedTTSVendorError,
)
from convoai_server.models.tts_schemas import (
    TTS_VENDOR_ELEVENLABS,
    TTS_VENDOR_MICROSOFT,
    ElevenLabsTTSConfig,
    ElevenLabsTTSCredentials,
    ElevenLabsTTSParams,
    MicrosoftTTSConfig,
    MicrosoftTTSCredentials,
    MicrosoftTTSParams,
    TTSConfig,
    VendorCredentials,
)

logger = logging.getLogger(LOGGER_NAME)

_MICROSOFT_REQUIRED = ("key", "region", "voice_name", "rate", "volume")
_ELEVENLABS_REQUIRED = ("api_key", "voice_id", "model_id")


def _missing_fields(credentials, required) -> list:
    if credentials is None:
        return list(required)
    return [name for name in required if not getattr(credentials, name)]


def _parse_float(field: str, value: str) -> float:
    try:
        number = float(value)
    except ValueError as e:
        raise InvalidTTSValueError(field, value, str(e)) from e

    # NaN and infinity have no JSON encoding
    if not math.isfinite(number):
        raise InvalidTTSValueError(field, value, f"{value!r} is not a finite number")
    return number


def _resolve_microsoft(credentials: Optional[MicrosoftTTSCredentials]) -> MicrosoftTTSConfig:
    missing = _missing_fields(credentials, _MICROSOFT_REQUIRED)
    if missing:
        raise MissingTTSCredentialsError("Microsoft", missing)

    return MicrosoftTTSConfig(
        params=MicrosoftTTSParams(
            key=credentials.key,
            region=credentials.region,
            voice_name=credentials.voice_name,
            rate=_parse_float("rate", credentials.rate),
            volume=_parse_float("volume", credentials.volume),
        )
    )


def _resolve_elevenlabs(credentials: Optional[ElevenLabsTTSCredentials]) -> ElevenLabsTTSConfig:
    missing = _missing_fields(credentials, _ELEVENLABS_REQUIRED)
    if missing:
        raise MissingTTSCredentialsError("ElevenLabs", missing)

    return ElevenLabsTTSConfig(
        params=ElevenLabsTTSParams(
            api_key=credentials.api_key,
            model_id=credentials.model_id,
            voice_id=credentials.voice_id,
        )
    )


def resolve_tts_config(
    vendor: str, credentials: Optional[VendorCredentials]
) -> TTSConfig:
    """
    Turn the configured vendor and its credentials into a tagged TTS config.

    Args:
        vendor: The configured vendor tag ("microsoft" or "elevenlabs")
        credentials: The credential variant loaded for that vendor, or None

    Returns:
        MicrosoftTTSConfig or ElevenLabsTTSConfig

    Raises:
        MissingTTSCredentialsError: A required credential field is empty, or
            the credentials belong to a different vendor
        InvalidTTSValueError: Microsoft rate or volume is not a finite number
        UnsupportedTTSVendorError: The vendor tag is not recognised
    """
    if vendor == TTS_VENDOR_MICROSOFT:
        if not isinstance(credentials, MicrosoftTTSCredentials):
            credentials = None
        return _resolve_microsoft(credentials)

    if vendor == TTS_VENDOR_ELEVENLABS:
        if not isinstance(credentials, ElevenLabsTTSCredentials):
            credentials = None
        return _resolve_elevenlabs(credentials)

    logger.error(f"Unsupported TTS vendor configured: {vendor!r}")
    raise UnsupportedTTSVendorError(vendor)
