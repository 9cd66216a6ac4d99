"""
Configuration module for the ConvoAI server.

Key components:
- constants: Fixed agent tuning values, default modalities, timeouts and
  token defaults shared across modules.
- logging_config: Console and rotating file logging for the application logger.
- settings: The immutable ConvoAIConfig, loaded once from the environment and
  validated at startup.

Usage examples:
```python
from convoai_server.config.logging_config import configure_logging
from convoai_server.config.settings import load_config, validate_environment

logger = configure_logging()
config = load_config()
validate_environment(config)
```
"""
