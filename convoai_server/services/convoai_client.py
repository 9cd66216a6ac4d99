"""
HTTP client for the Agora Conversational AI platform.

This module wraps the two REST calls the service makes: "join", which starts
an agent in a channel, and "leave", which stops it. Each call is a single
attempt bounded by a fixed timeout; failures are raised as service errors
carrying the status code, response body or URL needed to diagnose them.
"""

import base64
import logging
import time
from typing import Dict, Optional

import requests

from convoai_server.config.constants import (
    AGENT_STATUS_RUNNING,
    JOIN_TIMEOUT,
    LEAVE_TIMEOUT,
    LOGGER_NAME,
)
from convoai_server.errors import (
    AgentPlatformError,
    AgentResponseDecodeError,
    AgentTransportError,
)
from convoai_server.models.agent_schemas import InviteAgentResponse, RemoveAgentResponse
from convoai_server.models.agora_schemas import AgoraStartRequest

logger = logging.getLogger(LOGGER_NAME)


class ConvoAIClient:
    """
    Client for starting and stopping agents on the Conversational AI platform.

    The requests.Session is injectable so tests can stub the transport.
    """

    def __init__(
        self,
        base_url: str,
        app_id: str,
        customer_id: str,
        customer_secret: str,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Platform base URL, e.g. https://api.agora.io/api/conversational-ai-agent/v2/projects
            app_id: Agora project the agents belong to
            customer_id: RESTful API customer ID
            customer_secret: RESTful API customer secret
            session: Optional requests session to send requests through
        """
        self.base_url = base_url.rstrip("/")
        self.app_id = app_id
        self.customer_id = customer_id
        self.customer_secret = customer_secret
        self.session = session or requests.Session()

    def basic_auth_header(self) -> str:
        credentials = f"{self.customer_id}:{self.customer_secret}"
        return "Basic " + base64.b64encode(credentials.encode("utf-8")).decode("ascii")

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": self.basic_auth_header(),
            "Content-Type": "application/json",
        }

    def join_url(self) -> str:
        return f"{self.base_url}/{self.app_id}/join"

    def leave_url(self, agent_id: str) -> str:
        return f"{self.base_url}/{self.app_id}/agents/{agent_id}/leave"

    def _post(self, url: str, timeout: float, data: Optional[str] = None) -> requests.Response:
        try:
            return self.session.post(url, data=data, headers=self._headers(), timeout=timeout)
        except requests.Timeout as e:
            logger.error(f"Request to {url} timed out after {timeout}s")
            raise AgentTransportError(
                f"request timed out after {timeout}s: {e} (URL: {url})", url
            ) from e
        except requests.RequestException as e:
            logger.error(f"Failed to send request to {url}: {e}")
            raise AgentTransportError(f"failed to send request: {e} (URL: {url})", url) from e

    def join(self, start_request: AgoraStartRequest) -> InviteAgentResponse:
        """
        Start an agent.

        Args:
            start_request: Fully assembled start request

        Returns:
            InviteAgentResponse with the platform's agent ID

        Raises:
            AgentTransportError: Connection failure or timeout
            AgentPlatformError: Non-200 status
            AgentResponseDecodeError: Body is not JSON or lacks a string agent_id
        """
        url = self.join_url()
        logger.info(f"Starting agent {start_request.name} in channel {start_request.properties.channel}")
        logger.debug(f"Join URL: {url}")

        response = self._post(url, JOIN_TIMEOUT, data=start_request.model_dump_json())

        if response.status_code != 200:
            logger.error(
                f"Failed to start conversation: status={response.status_code}, body={response.text}"
            )
            raise AgentPlatformError(
                f"failed to start conversation: status={response.status_code}, "
                f"body={response.text}, url={url}",
                status_code=response.status_code,
                body=response.text,
                url=url,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise AgentResponseDecodeError(f"failed to decode response: {e}") from e

        agent_id = body.get("agent_id") if isinstance(body, dict) else None
        if not isinstance(agent_id, str) or not agent_id:
            raise AgentResponseDecodeError(
                f"failed to decode response: missing agent_id in {response.text}"
            )

        logger.info(f"Agent {agent_id} started for session {start_request.name}")
        return InviteAgentResponse(
            agent_id=agent_id,
            create_ts=int(time.time()),
            status=AGENT_STATUS_RUNNING,
        )

    def leave(self, agent_id: str) -> RemoveAgentResponse:
        """
        Stop an agent.

        Raises:
            AgentTransportError: Connection failure or timeout
            AgentPlatformError: Non-200 status
        """
        url = self.leave_url(agent_id)
        logger.info(f"Removing agent {agent_id}")

        response = self._post(url, LEAVE_TIMEOUT)

        if response.status_code != 200:
            logger.error(f"Failed to remove agent {agent_id}: status={response.status_code}")
            raise AgentPlatformError(
                f"failed to remove agent: {response.status_code}",
                status_code=response.status_code,
                body=response.text,
                url=url,
            )

        logger.info(f"Agent {agent_id} removed")
        return RemoveAgentResponse(success=True, agent_id=agent_id)
