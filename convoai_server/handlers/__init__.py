"""
Handlers module for agent invitation and removal.

Key components:
- agent_handlers: Request validation and the ConvoAIService that ties the
  other handlers to the platform client.
- session_builder: Modality defaults, UID classification and assembly of the
  platform start request.
- tts_resolver: Turns the configured TTS vendor and credentials into the
  vendor-tagged TTS configuration.
"""
