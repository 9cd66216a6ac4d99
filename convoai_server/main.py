"""
FastAPI server for the Agora Conversational AI middleware.

This module builds the FastAPI application that client apps call to invite an
AI agent into an RTC channel, remove it again, and mint RTC tokens. It wires
the immutable process configuration into the token service, the platform
client and the agent handlers, installs the response header middleware, and
maps service errors onto HTTP status codes.
"""

import logging
import sys
from pathlib import Path
from typing import Mapping, Optional

import dotenv
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError as BodyValidationError
from fastapi.responses import JSONResponse

from convoai_server.config.constants import LOGGER_NAME, TOKEN_TYPE_RTC
from convoai_server.config.logging_config import configure_logging
from convoai_server.config.settings import ConvoAIConfig, load_config, validate_environment
from convoai_server.errors import ConfigError, ConvoAIError, RequestValidationError
from convoai_server.handlers.agent_handlers import ConvoAIService
from convoai_server.handlers.tts_resolver import resolve_tts_config
from convoai_server.http_headers import HttpHeaders
from convoai_server.models.agent_schemas import (
    ErrorResponse,
    InviteAgentRequest,
    InviteAgentResponse,
    RemoveAgentRequest,
    RemoveAgentResponse,
    TokenRequest,
    TokenResponse,
)
from convoai_server.services.convoai_client import ConvoAIClient
from convoai_server.services.token_service import AgoraTokenService, TokenIssuer

logger = logging.getLogger(LOGGER_NAME)

APP_TITLE = "ConvoAI Server"
APP_VERSION = "1.0.0"


def load_validated_config(environ: Optional[Mapping[str, str]] = None) -> ConvoAIConfig:
    """
    Load the configuration and check it can serve invitations.

    Besides the environment checks, the TTS vendor is resolved once here so an
    unusable vendor configuration stops the process before it takes traffic.

    Raises:
        ConfigError: The environment or the TTS vendor configuration is unusable
    """
    config = load_config(environ)
    validate_environment(config)
    resolve_tts_config(config.tts_vendor, config.tts_credentials)
    return config


def create_app(
    config: ConvoAIConfig,
    token_issuer: Optional[TokenIssuer] = None,
    client: Optional[ConvoAIClient] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Validated process configuration
        token_issuer: Token signer, defaults to AgoraTokenService
        client: Platform client, defaults to a ConvoAIClient built from config

    Returns:
        FastAPI: The configured application
    """
    token_issuer = token_issuer or AgoraTokenService(config.app_id, config.app_certificate)
    client = client or ConvoAIClient(
        config.base_url, config.app_id, config.customer_id, config.customer_secret
    )
    service = ConvoAIService(config, token_issuer, client)

    app = FastAPI(
        title=APP_TITLE,
        description="Middleware between client apps and Agora Conversational AI agents",
        version=APP_VERSION,
    )
    app.state.service = service

    # Registered innermost first: no-cache ends up outermost
    headers = HttpHeaders(config.cors_allow_origin)
    app.middleware("http")(headers.timestamp)
    app.middleware("http")(headers.cors)
    app.middleware("http")(headers.no_cache)

    @app.exception_handler(BodyValidationError)
    async def body_validation_handler(request: Request, exc: BodyValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "invalid request body") if errors else "invalid request body"
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(ConvoAIError)
    async def service_error_handler(request: Request, exc: ConvoAIError):
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.get("/ping")
    def ping():
        """Health check endpoint."""
        return {"message": "pong"}

    @app.get("/")
    def root():
        return {
            "name": APP_TITLE,
            "version": APP_VERSION,
            "endpoints": {
                "/agent/invite": "Start an AI agent in a channel",
                "/agent/remove": "Stop a running AI agent",
                "/token/getNew": "Mint an RTC token",
                "/ping": "Health check endpoint",
            },
        }

    @app.post(
        "/agent/invite",
        response_model=InviteAgentResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def invite_agent(req: InviteAgentRequest):
        """Invite an AI agent into the requester's channel."""
        return service.invite_agent(req)

    @app.post(
        "/agent/remove",
        response_model=RemoveAgentResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def remove_agent(req: RemoveAgentRequest):
        """Remove a previously invited AI agent."""
        return service.remove_agent(req)

    @app.post(
        "/token/getNew",
        response_model=TokenResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def get_new_token(req: TokenRequest):
        """Mint an RTC token for a client."""
        if req.token_type != TOKEN_TYPE_RTC:
            raise RequestValidationError(f"Unsupported tokenType: {req.token_type}", field="tokenType")
        if not req.channel:
            raise RequestValidationError("channel is required", field="channel")

        token = token_issuer.issue_rtc_token(req.channel, str(req.uid), req.role, req.expire)
        return TokenResponse(token=token)

    return app


def main():
    """Load configuration from the environment and serve the API."""
    env_path = Path(".") / ".env"
    env_found = env_path.exists()
    if env_found:
        dotenv.load_dotenv(env_path)

    configure_logging()
    if not env_found:
        logger.warning("No .env file found, using existing environment variables")

    try:
        config = load_validated_config()
    except ConfigError as e:
        logger.critical(f"FATAL ERROR: {e}")
        sys.exit(1)

    app = create_app(config)
    logger.info(f"Starting server on port {config.port}")
    uvicorn.run(app, host="0.0.0.0", port=config.port)


if __name__ == "__main__":
    main()
