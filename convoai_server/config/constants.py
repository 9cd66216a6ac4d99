"""
Constants and configuration values used throughout the application.

This module defines the fixed tuning values attached to every agent session,
together with the defaults used when talking to the token service and the
Conversational AI platform. Keeping them here makes the agent's observable
behaviour easy to audit in one place.
"""

# Logger name used throughout the application
LOGGER_NAME = "convoai_server"

# Agent status reported once the platform accepts a join request
AGENT_STATUS_RUNNING = "RUNNING"

# Modalities
SUPPORTED_MODALITIES = frozenset({"text", "audio"})
DEFAULT_INPUT_MODALITIES = ("text",)
DEFAULT_OUTPUT_MODALITIES = ("text", "audio")

# Session naming
SESSION_NAME_PREFIX = "agent"
SESSION_NAME_SUFFIX_LENGTH = 6

# Agent session
IDLE_TIMEOUT_SECONDS = 30

# ASR
ASR_LANGUAGE = "en-US"
ASR_TASK = "conversation"

# LLM
LLM_SYSTEM_ROLE = "system"
LLM_SYSTEM_PROMPT = (
    "You are a helpful assistant. Pretend that the text input is audio, "
    "and you are responding to it. Speak fast, clearly, and concisely."
)
LLM_GREETING_MESSAGE = "Hello! How can I assist you today?"
LLM_FAILURE_MESSAGE = "Please wait a moment."
LLM_MAX_HISTORY = 10
LLM_MAX_TOKENS = 1024
LLM_TEMPERATURE = 0.7
LLM_TOP_P = 0.95

# VAD
VAD_SILENCE_DURATION_MS = 480
VAD_SPEECH_DURATION_MS = 15000
VAD_THRESHOLD = 0.5
VAD_INTERRUPT_DURATION_MS = 160
VAD_PREFIX_PADDING_MS = 300

# Advanced features
ENABLE_AIVAD = False
ENABLE_BHVS = False

# Token service
TOKEN_TYPE_RTC = "rtc"
RTC_ROLE_PUBLISHER = "publisher"
RTC_ROLE_SUBSCRIBER = "subscriber"
AGENT_TOKEN_UID = "0"  # placeholder identity the agent token is minted for
DEFAULT_TOKEN_EXPIRE_SECONDS = 3600

# Conversational AI platform timeouts (seconds)
JOIN_TIMEOUT = 30
LEAVE_TIMEOUT = 10

# Channel name limits
CHANNEL_NAME_MIN_LENGTH = 3
CHANNEL_NAME_MAX_LENGTH = 64

# Server defaults
DEFAULT_PORT = 8080
