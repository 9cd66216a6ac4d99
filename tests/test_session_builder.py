"""
Unit tests for start request assembly.

These tests cover modality defaults, UID classification, session naming and
the fixed tuning values that every start request carries.
"""

import logging
import re
from unittest.mock import patch

import pytest

from convoai_server.config.settings import load_config
from convoai_server.errors import (
    MissingTTSCredentialsError,
    TokenGenerationError,
    UnsupportedTTSVendorError,
)
from convoai_server.handlers.session_builder import (
    REDACTED,
    build_start_request,
    generate_session_name,
    get_remote_rtc_uids,
    is_string_uid,
    redact_secrets,
    resolve_modalities,
)
from convoai_server.models.agent_schemas import InviteAgentRequest


class TestResolveModalities:
    def test_none_uses_fallback(self):
        assert resolve_modalities(None, ["text"]) == ["text"]

    def test_empty_uses_fallback(self):
        assert resolve_modalities([], ["text"]) == ["text"]

    def test_requested_passed_through(self):
        assert resolve_modalities(["text", "audio"], ["text"]) == ["text", "audio"]

    def test_no_element_validation(self):
        """Test that unknown modalities are not filtered at this layer."""
        assert resolve_modalities(["video"], ["text"]) == ["video"]


class TestIsStringUID:
    @pytest.mark.parametrize(
        "identity,expected",
        [
            ("12345", False),
            ("0", False),
            ("", False),
            ("user123", True),
            ("123abc", True),
            ("abc", True),
            ("-1", True),
            ("12 34", True),
            ("１２３", True),  # full-width digits are not 0-9
        ],
    )
    def test_classification(self, identity, expected):
        assert is_string_uid(identity) is expected


class TestRemoteRtcUIDs:
    def test_single_identity(self):
        assert get_remote_rtc_uids("123") == ["123"]

    def test_zero_is_not_expanded(self):
        assert get_remote_rtc_uids("0") == ["0"]


class TestGenerateSessionName:
    def test_format(self):
        assert re.fullmatch(r"agent-\d+-[a-z]{6}", generate_session_name())

    def test_unique(self):
        names = {generate_session_name() for _ in range(100)}
        assert len(names) == 100


class TestBuildStartRequest:
    """Tests for build_start_request."""

    @pytest.fixture
    def invite(self):
        return InviteAgentRequest(requester_id="123", channel_name="test-channel")

    def test_identity_and_token(self, invite, config, token_issuer):
        start_request = build_start_request(invite, config, token_issuer)
        properties = start_request.properties

        token_issuer.issue_rtc_token.assert_called_once_with("test-channel", "0", "publisher", 3600)
        assert properties.channel == "test-channel"
        assert properties.token == "tok"
        assert properties.agent_rtc_uid == "123456"
        assert properties.remote_rtc_uids == ["123"]
        assert properties.enable_string_uid is False
        assert start_request.name.startswith("agent-")

    def test_string_uid_requester(self, config, token_issuer):
        invite = InviteAgentRequest(requester_id="user123", channel_name="test-channel")

        properties = build_start_request(invite, config, token_issuer).properties

        assert properties.enable_string_uid is True
        assert properties.remote_rtc_uids == ["user123"]

    def test_fixed_tuning(self, invite, config, token_issuer):
        """Test the constants that no caller input can influence."""
        properties = build_start_request(invite, config, token_issuer).properties

        assert properties.idle_timeout == 30
        assert properties.asr.language == "en-US"
        assert properties.asr.task == "conversation"
        assert properties.vad.silence_duration_ms == 480
        assert properties.vad.speech_duration_ms == 15000
        assert properties.vad.threshold == 0.5
        assert properties.vad.interrupt_duration_ms == 160
        assert properties.vad.prefix_padding_ms == 300
        assert properties.llm.max_history == 10
        assert properties.llm.params.temperature == 0.7
        assert properties.llm.params.top_p == 0.95
        assert properties.llm.params.max_tokens == 1024
        assert properties.advanced_features.enable_aivad is False
        assert properties.advanced_features.enable_bhvs is False

    def test_llm_block(self, invite, config, token_issuer):
        llm = build_start_request(invite, config, token_issuer).properties.llm

        assert llm.url == "https://api.openai.com/v1/chat/completions"
        assert llm.api_key == "test-llm-token"
        assert llm.params.model == "gpt-3.5-turbo"
        assert len(llm.system_messages) == 1
        assert llm.system_messages[0].role == "system"
        assert llm.system_messages[0].content == (
            "You are a helpful assistant. Pretend that the text input is audio, "
            "and you are responding to it. Speak fast, clearly, and concisely."
        )
        assert llm.greeting_message == "Hello! How can I assist you today?"
        assert llm.failure_message == "Please wait a moment."

    def test_default_modalities(self, invite, config, token_issuer):
        llm = build_start_request(invite, config, token_issuer).properties.llm

        assert llm.input_modalities == ["text"]
        assert llm.output_modalities == ["text", "audio"]

    def test_requested_modalities(self, config, token_issuer):
        invite = InviteAgentRequest(
            requester_id="123",
            channel_name="test-channel",
            input_modalities=["audio"],
            output_modalities=["text"],
        )

        llm = build_start_request(invite, config, token_issuer).properties.llm

        assert llm.input_modalities == ["audio"]
        assert llm.output_modalities == ["text"]

    def test_configured_default_modalities(self, test_env, token_issuer, invite):
        test_env["INPUT_MODALITIES"] = "text, audio"
        test_env["OUTPUT_MODALITIES"] = "audio"
        config = load_config(test_env)

        llm = build_start_request(invite, config, token_issuer).properties.llm

        assert llm.input_modalities == ["text", "audio"]
        assert llm.output_modalities == ["audio"]

    def test_tts_block(self, invite, config, token_issuer):
        tts = build_start_request(invite, config, token_issuer).properties.tts

        assert tts.vendor == "microsoft"
        assert tts.params.rate == 1.0
        assert tts.params.volume == 1.0

    def test_wire_format(self, invite, config, token_issuer):
        """Test the top-level JSON keys sent to the platform."""
        body = build_start_request(invite, config, token_issuer).model_dump(mode="json")

        assert set(body) == {"name", "properties"}
        assert set(body["properties"]) == {
            "channel",
            "token",
            "agent_rtc_uid",
            "remote_rtc_uids",
            "enable_string_uid",
            "idle_timeout",
            "asr",
            "llm",
            "tts",
            "vad",
            "advanced_features",
        }
        assert body["properties"]["tts"]["vendor"] == "microsoft"

    def test_unique_names(self, invite, config, token_issuer):
        first = build_start_request(invite, config, token_issuer)
        second = build_start_request(invite, config, token_issuer)

        assert first.name != second.name

    def test_token_failure_aborts_before_tts(self, invite, config, token_issuer):
        token_issuer.issue_rtc_token.side_effect = RuntimeError("bad certificate")

        with patch("convoai_server.handlers.session_builder.resolve_tts_config") as mock_resolve:
            with pytest.raises(TokenGenerationError) as exc_info:
                build_start_request(invite, config, token_issuer)

        assert "failed to generate token" in str(exc_info.value)
        mock_resolve.assert_not_called()

    def test_token_error_propagates_unchanged(self, invite, config, token_issuer):
        error = TokenGenerationError("failed to generate token: channel is required")
        token_issuer.issue_rtc_token.side_effect = error

        with pytest.raises(TokenGenerationError) as exc_info:
            build_start_request(invite, config, token_issuer)

        assert exc_info.value is error

    def test_incomplete_tts_config(self, invite, test_env, token_issuer):
        test_env["MICROSOFT_TTS_REGION"] = ""
        config = load_config(test_env)

        with pytest.raises(MissingTTSCredentialsError):
            build_start_request(invite, config, token_issuer)

    def test_unsupported_vendor(self, invite, test_env, token_issuer):
        test_env["TTS_VENDOR"] = "unsupported"
        config = load_config(test_env)

        with pytest.raises(UnsupportedTTSVendorError):
            build_start_request(invite, config, token_issuer)


class TestStartRequestLogging:
    """Tests for the DEBUG dump of the outbound start request."""

    @pytest.fixture
    def debug_caplog(self, caplog, monkeypatch):
        # configure_logging() turns propagation off for the application logger
        monkeypatch.setattr(logging.getLogger("convoai_server"), "propagate", True)
        caplog.set_level(logging.DEBUG, logger="convoai_server")
        return caplog

    def test_payload_logged_without_secrets(self, debug_caplog, config, token_issuer):
        token_issuer.issue_rtc_token.return_value = "secret-rtc-token"
        invite = InviteAgentRequest(requester_id="123", channel_name="test-channel")

        start_request = build_start_request(invite, config, token_issuer)

        text = debug_caplog.text
        assert start_request.name in text
        assert '"properties"' in text
        assert '"vad"' in text
        assert '"silence_duration_ms": 480' in text
        assert "secret-rtc-token" not in text
        assert "test-llm-token" not in text
        assert "test-ms-key" not in text
        assert REDACTED in text

    def test_elevenlabs_key_masked(self, debug_caplog, test_env, token_issuer):
        test_env.update(
            {
                "TTS_VENDOR": "elevenlabs",
                "ELEVENLABS_API_KEY": "el-secret-key",
                "ELEVENLABS_VOICE_ID": "voice",
                "ELEVENLABS_MODEL_ID": "model",
            }
        )
        invite = InviteAgentRequest(requester_id="123", channel_name="test-channel")

        build_start_request(invite, load_config(test_env), token_issuer)

        assert "el-secret-key" not in debug_caplog.text
        assert '"voice_id": "voice"' in debug_caplog.text

    def test_built_request_keeps_secrets(self, config, token_issuer):
        """Test that masking applies to the log copy only."""
        invite = InviteAgentRequest(requester_id="123", channel_name="test-channel")

        properties = build_start_request(invite, config, token_issuer).properties

        assert properties.token == "tok"
        assert properties.llm.api_key == "test-llm-token"
        assert properties.tts.params.key == "test-ms-key"


class TestRedactSecrets:
    def test_nested(self):
        payload = {"token": "t", "llm": {"api_key": "a", "url": "u"}, "items": [{"key": "k"}]}

        assert redact_secrets(payload) == {
            "token": REDACTED,
            "llm": {"api_key": REDACTED, "url": "u"},
            "items": [{"key": REDACTED}],
        }

    def test_input_unchanged(self):
        payload = {"token": "t"}
        redact_secrets(payload)
        assert payload == {"token": "t"}
