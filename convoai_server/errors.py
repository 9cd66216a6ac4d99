"""
Exception types raised by the Conversational AI service.

Every failure the service can report is a ConvoAIError. The HTTP layer maps
RequestValidationError to a client error and everything else to a server
error, using the exception message as the human-readable detail.
"""

from typing import Optional


class ConvoAIError(Exception):
    """Base class for all service errors."""


class RequestValidationError(ConvoAIError):
    """A caller-supplied field is missing or malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ConfigError(ConvoAIError):
    """The process environment does not describe a usable configuration."""


class TTSConfigError(ConfigError):
    """The configured text-to-speech vendor cannot be turned into parameters."""


class MissingTTSCredentialsError(TTSConfigError):
    def __init__(self, vendor: str, missing_fields):
        self.vendor = vendor
        self.missing_fields = tuple(missing_fields)
        super().__init__(
            f"missing {vendor} TTS configuration: {', '.join(self.missing_fields)}"
        )


class InvalidTTSValueError(TTSConfigError):
    def __init__(self, field: str, value: str, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"invalid {field} value: {reason}")


class UnsupportedTTSVendorError(TTSConfigError):
    def __init__(self, vendor: str):
        self.vendor = vendor
        super().__init__(f"unsupported TTS vendor: {vendor}")


class TokenGenerationError(ConvoAIError):
    """The RTC token for the agent could not be issued."""


class AgentPlatformError(ConvoAIError):
    """The Conversational AI platform answered with a non-success status."""

    def __init__(self, message: str, status_code: int, body: str = "", url: str = ""):
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(message)


class AgentResponseDecodeError(ConvoAIError):
    """A successful join response did not carry a usable agent identifier."""


class AgentTransportError(ConvoAIError):
    """The request never produced a response (connection failure or timeout)."""

    def __init__(self, message: str, url: str):
        self.url = url
        super().__init__(message)
