"""
Request handlers for inviting and removing Conversational AI agents.

ConvoAIService ties the pieces together: it validates caller input, asks the
session builder for a start request, and hands the result to the platform
client. Validation always runs first, so a rejected request never reaches the
token service, the TTS resolver or the network.
"""

import logging

from convoai_server.config.constants import (
    CHANNEL_NAME_MAX_LENGTH,
    CHANNEL_NAME_MIN_LENGTH,
    LOGGER_NAME,
)
from convoai_server.config.settings import ConvoAIConfig
from convoai_server.errors import ConvoAIError, RequestValidationError
from convoai_server.handlers.session_builder import build_start_request
from convoai_server.models.agent_schemas import (
    InviteAgentRequest,
    InviteAgentResponse,
    RemoveAgentRequest,
    RemoveAgentResponse,
)
from convoai_server.services.convoai_client import ConvoAIClient
from convoai_server.services.token_service import TokenIssuer

logger = logging.getLogger(LOGGER_NAME)


def validate_invite_request(request: InviteAgentRequest) -> None:
    """
    Validate an invitation.

    Raises:
        RequestValidationError: requester_id or channel_name is missing, or
            channel_name is not 3 to 64 bytes long in UTF-8
    """
    if not request.requester_id:
        raise RequestValidationError("requester_id is required", field="requester_id")

    if not request.channel_name:
        raise RequestValidationError("channel_name is required", field="channel_name")

    name_length = len(request.channel_name.encode("utf-8"))
    if not CHANNEL_NAME_MIN_LENGTH <= name_length <= CHANNEL_NAME_MAX_LENGTH:
        raise RequestValidationError(
            f"channel_name length must be between {CHANNEL_NAME_MIN_LENGTH} "
            f"and {CHANNEL_NAME_MAX_LENGTH} characters",
            field="channel_name",
        )


def validate_remove_request(request: RemoveAgentRequest) -> None:
    if not request.agent_id:
        raise RequestValidationError("agent_id is required", field="agent_id")


class ConvoAIService:
    """Handles agent invitations and removals."""

    def __init__(
        self,
        config: ConvoAIConfig,
        token_issuer: TokenIssuer,
        client: ConvoAIClient,
    ):
        self.config = config
        self.token_issuer = token_issuer
        self.client = client

    def invite_agent(self, request: InviteAgentRequest) -> InviteAgentResponse:
        """
        Start an agent for the requester in the given channel.

        Raises:
            RequestValidationError: The request is malformed
            ConvoAIError: Token, TTS configuration or platform failure
        """
        validate_invite_request(request)
        logger.info(
            f"Inviting agent to channel {request.channel_name} "
            f"for requester {request.requester_id}"
        )

        try:
            start_request = build_start_request(request, self.config, self.token_issuer)
            return self.client.join(start_request)
        except ConvoAIError as e:
            logger.error(f"Agent invitation for channel {request.channel_name} failed: {e}")
            raise

    def remove_agent(self, request: RemoveAgentRequest) -> RemoveAgentResponse:
        """
        Stop a running agent.

        Raises:
            RequestValidationError: agent_id is missing
            ConvoAIError: Platform or transport failure
        """
        validate_remove_request(request)

        try:
            return self.client.leave(request.agent_id)
        except ConvoAIError as e:
            logger.error(f"Removal of agent {request.agent_id} failed: {e}")
            raise
