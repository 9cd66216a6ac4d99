"""
ConvoAI Server - middleware between client apps and Agora Conversational AI

This application lets client apps start and stop server-managed AI agents in
Agora RTC channels without holding any platform credentials themselves. It
mints RTC tokens, assembles the agent start request (ASR, LLM, TTS, VAD and
feature settings) from caller input plus server-side defaults, and relays the
platform's answers back to the caller.

Key Components:
- config: Constants, logging setup and the immutable process configuration
- handlers: Request validation, TTS vendor resolution and start request assembly
- models: Pydantic schemas for the service API and the platform's wire format
- services: Clients for the token signer and the Conversational AI platform
- http_headers: No-cache, CORS and timestamp response middleware
- main: FastAPI application factory and server entry point

Getting Started:
1. Set up environment variables (or a .env file), see .env.example
2. Start the server:
   ```bash
   python run.py
   ```
"""
