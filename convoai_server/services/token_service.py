"""
RTC token issuing for agents and clients.

The rest of the service only depends on the TokenIssuer protocol, so tests can
substitute a stub and never touch the signing code. AgoraTokenService is the
production implementation, backed by agora-token-builder.
"""

import logging
import time
from typing import Protocol

from agora_token_builder import RtcTokenBuilder

from convoai_server.config.constants import (
    DEFAULT_TOKEN_EXPIRE_SECONDS,
    LOGGER_NAME,
    RTC_ROLE_PUBLISHER,
    RTC_ROLE_SUBSCRIBER,
)
from convoai_server.errors import TokenGenerationError

logger = logging.getLogger(LOGGER_NAME)

# Role values understood by the Agora RTC token format
RTC_ROLES = {
    RTC_ROLE_PUBLISHER: 1,
    RTC_ROLE_SUBSCRIBER: 2,
}


class TokenIssuer(Protocol):
    """Anything that can sign an RTC token for a channel and identity."""

    def issue_rtc_token(
        self, channel: str, uid: str, role: str, expire_seconds: int
    ) -> str:
        ...


class AgoraTokenService:
    """
    Issues Agora RTC tokens from the project's app ID and certificate.

    Numeric identities are signed as integer UIDs; anything else is signed as
    a user account (string UID).
    """

    def __init__(self, app_id: str, app_certificate: str):
        self.app_id = app_id
        self.app_certificate = app_certificate

    def issue_rtc_token(
        self,
        channel: str,
        uid: str,
        role: str = RTC_ROLE_PUBLISHER,
        expire_seconds: int = DEFAULT_TOKEN_EXPIRE_SECONDS,
    ) -> str:
        """
        Sign an RTC token.

        Args:
            channel: Channel the token grants access to
            uid: Identity the token is bound to ("0" allows any uid)
            role: "publisher" or "subscriber"
            expire_seconds: Lifetime of the token privileges, relative to now

        Returns:
            The signed token

        Raises:
            TokenGenerationError: Invalid arguments or a signing failure
        """
        if not channel:
            raise TokenGenerationError("failed to generate token: channel is required")
        if role not in RTC_ROLES:
            raise TokenGenerationError(f"failed to generate token: unknown role {role!r}")
        if expire_seconds <= 0:
            expire_seconds = DEFAULT_TOKEN_EXPIRE_SECONDS

        privilege_expired_ts = int(time.time()) + expire_seconds
        try:
            if uid.isdigit():
                token = RtcTokenBuilder.buildTokenWithUid(
                    self.app_id,
                    self.app_certificate,
                    channel,
                    int(uid),
                    RTC_ROLES[role],
                    privilege_expired_ts,
                )
            else:
                token = RtcTokenBuilder.buildTokenWithAccount(
                    self.app_id,
                    self.app_certificate,
                    channel,
                    uid,
                    RTC_ROLES[role],
                    privilege_expired_ts,
                )
        except Exception as e:
            logger.error(f"RTC token signing failed for channel {channel}: {e}")
            raise TokenGenerationError(f"failed to generate token: {e}") from e

        logger.debug(f"Issued {role} RTC token for channel {channel} uid {uid}")
        return token
