"""
Configuration module for MindForm.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv
from agents import ModelSettings

# Load environment variables
load_dotenv()


@dataclass
class MindFormConfig:
    """Configuration settings for MindForm."""

    # OpenAI settings
    openai_api_key: str = ""
    default_model: str = "gpt-4.1-mini"

    # Model settings for deterministic behavior
    default_temperature: float = 0.0
    default_max_tokens: int | None = None

    # Web server settings
    host: str = "0.0.0.0"
    server_port: int = 9110
    public_base_url: str = "http://localhost:9110"

    # MCP Server settings
    mcp_transport: str = "stdio"  # stdio or sse
    mcp_port: int = 8080

    # Guardrail settings
    enable_guardrails: bool = True

    # Storage settings
    storage_backend: str = "memory"  # memory or json
    storage_dir: str = ".cache/mindform"

    # Clarification rounds per builder session, 0 means unlimited
    max_clarification_rounds: int = 3

    # Tracing / logging
    enable_tracing: bool = True
    log_level: str = "INFO"

    def get_model_settings(self) -> ModelSettings:
        """Get ModelSettings instance with configured defaults."""
        return ModelSettings(
            temperature=self.default_temperature,
            max_tokens=self.default_max_tokens,
        )

    @classmethod
    def from_env(cls) -> "MindFormConfig":
        """
        Create configuration from environment variables.

        Unset variables fall back to the class field defaults.
        """
        _defaults = cls()

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY", _defaults.openai_api_key),
            default_model=os.getenv("OPENAI_MODEL", _defaults.default_model),
            default_temperature=float(os.getenv("MINDFORM_TEMPERATURE", str(_defaults.default_temperature))),
            host=os.getenv("MINDFORM_HOST", _defaults.host),
            server_port=int(os.getenv("MINDFORM_PORT", str(_defaults.server_port))),
            public_base_url=os.getenv("MINDFORM_PUBLIC_URL", _defaults.public_base_url),
            mcp_transport=os.getenv("MCP_TRANSPORT", _defaults.mcp_transport),
            mcp_port=int(os.getenv("MCP_PORT", str(_defaults.mcp_port))),
            enable_guardrails=os.getenv("MINDFORM_ENABLE_GUARDRAILS", str(_defaults.enable_guardrails).lower()).lower() == "true",
            storage_backend=os.getenv("MINDFORM_STORAGE_BACKEND", _defaults.storage_backend),
            storage_dir=os.getenv("MINDFORM_STORAGE_DIR", _defaults.storage_dir),
            max_clarification_rounds=int(os.getenv("MINDFORM_MAX_CLARIFICATION_ROUNDS", str(_defaults.max_clarification_rounds))),
            enable_tracing=os.getenv("OPENAI_AGENTS_DISABLE_TRACING", "0" if _defaults.enable_tracing else "1") != "1",
            log_level=os.getenv("MINDFORM_LOG_LEVEL", _defaults.log_level).upper(),
        )


config = MindFormConfig.from_env()


def get_config() -> MindFormConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> MindFormConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
