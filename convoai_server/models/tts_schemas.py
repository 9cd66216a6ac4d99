"""
Pydantic models for text-to-speech vendor configuration.

Two families of models live here: the raw credentials read from the
environment (always strings, possibly empty) and the resolved, vendor-tagged
configuration that is embedded in the agent start request. The resolved form
is a discriminated union on ``vendor`` so every vendor carries its own typed
parameter set.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

TTS_VENDOR_MICROSOFT = "microsoft"
TTS_VENDOR_ELEVENLABS = "elevenlabs"
SUPPORTED_TTS_VENDORS = (TTS_VENDOR_MICROSOFT, TTS_VENDOR_ELEVENLABS)


# Credentials (as configured)
class MicrosoftTTSCredentials(BaseModel):
    """Microsoft Azure speech credentials as read from the environment."""

    model_config = ConfigDict(frozen=True)

    vendor: Literal["microsoft"] = TTS_VENDOR_MICROSOFT
    key: str = ""
    region: str = ""
    voice_name: str = ""
    rate: str = Field("", description="Speaking rate, parsed as a float")
    volume: str = Field("", description="Volume, parsed as a float")


class ElevenLabsTTSCredentials(BaseModel):
    """ElevenLabs credentials as read from the environment."""

    model_config = ConfigDict(frozen=True)

    vendor: Literal["elevenlabs"] = TTS_VENDOR_ELEVENLABS
    api_key: str = ""
    voice_id: str = ""
    model_id: str = ""


VendorCredentials = Annotated[
    Union[MicrosoftTTSCredentials, ElevenLabsTTSCredentials],
    Field(discriminator="vendor"),
]


# Resolved parameters (as sent to the platform)
class MicrosoftTTSParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    region: str
    voice_name: str
    rate: float
    volume: float


class ElevenLabsTTSParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str
    model_id: str
    voice_id: str


class MicrosoftTTSConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    vendor: Literal["microsoft"] = TTS_VENDOR_MICROSOFT
    params: MicrosoftTTSParams


class ElevenLabsTTSConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    vendor: Literal["elevenlabs"] = TTS_VENDOR_ELEVENLABS
    params: ElevenLabsTTSParams


TTSConfig = Annotated[
    Union[MicrosoftTTSConfig, ElevenLabsTTSConfig],
    Field(discriminator="vendor"),
]
