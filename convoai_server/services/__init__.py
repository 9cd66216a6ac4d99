"""
Services module for external API integrations.

Key components:
- token_service: The TokenIssuer protocol and its Agora implementation.
- convoai_client: REST client for the Conversational AI platform's join and
  leave endpoints.
"""
