"""
Application configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Parser configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Structural limits (a message exceeding these fails with MIMEStructureError)
    max_nesting_depth: int = 32
    max_parts: int = 1000

    # Charset handling
    detect_charset: bool = True  # charset-normalizer when declared charset is wrong

    # Synthetic Message-Id domain for messages lacking one
    message_id_domain: str = "mime-body.local"

    # CLI input limit
    max_email_size_mb: int = 25

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Global settings instance
settings = Settings()
