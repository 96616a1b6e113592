"""Settings domain models with validation."""

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from enum import Enum
import re


class LogLevel(str, Enum):
    STANDARD = "Standard"
    DETAILED = "Detailed"


class AIProviderSettings(BaseModel):
    """Gemini provider configuration with validation."""

    base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="API base URL"
    )
    api_key: SecretStr = Field(default=SecretStr(""), description="API key")

    # Models per workload
    text_model: str = Field(default="gemini-2.5-flash", description="General text model")
    reasoning_model: str = Field(default="gemini-3-pro-preview", description="Deep reasoning model")
    fast_model: str = Field(default="gemini-2.5-flash-lite-latest", description="Low latency model")

    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Response randomness")
    max_output_tokens: int = Field(default=8192, ge=1, le=65536, description="Maximum tokens per response")

    # Connection settings
    timeout: int = Field(default=60, ge=5, le=300, description="Request timeout in seconds")
    retry_attempts: int = Field(default=2, ge=0, le=10, description="Retry attempts")

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v):
        """Validate API base URL format."""
        url_pattern = re.compile(
            r'^https?://'  # http:// or https://
            r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+[A-Z]{2,6}\.?|'  # domain...
            r'localhost|'  # localhost...
            r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # ...or ip
            r'(?::\d+)?'  # optional port
            r'(?:/?|[/?]\S+)$', re.IGNORECASE)

        if not url_pattern.match(v):
            raise ValueError('Invalid URL format')
        return v.rstrip('/')

    @field_validator('text_model', 'reasoning_model', 'fast_model')
    @classmethod
    def validate_model(cls, v):
        """Validate model name format."""
        if not v or len(v.strip()) == 0:
            raise ValueError('Model name cannot be empty')
        return v.strip()


class VoiceSettings(BaseModel):
    """Push-to-talk recognition settings."""

    language: str = Field(default="en-US", description="Recognition language tag")
    transcript_clear_delay_ms: int = Field(default=2000, ge=0, le=10000,
                                           description="Delay before the transcript bubble clears")
    no_speech_timeout_ms: int = Field(default=8000, ge=1000, le=60000,
                                      description="Session aborts with no-speech after this long")
    phrase_time_limit: float = Field(default=10.0, ge=1.0, le=60.0,
                                     description="Maximum utterance length in seconds")


class RoutingSettings(BaseModel):
    """Command routing settings."""

    agent_command_delay_ms: int = Field(default=500, ge=0, le=5000,
                                        description="Delay before relaying an agent query to the new view")


class HudSettings(BaseModel):
    """Floating voice control settings."""

    visible: bool = Field(default=True, description="Show the floating control at startup")
    offset_right: int = Field(default=90, ge=0, description="Initial offset from the right edge")
    offset_bottom: int = Field(default=150, ge=0, description="Initial offset from the bottom edge")
    click_suppression_ms: int = Field(default=50, ge=0, le=1000,
                                      description="Clicks right after a drag are ignored for this long")


class AdvancedSettings(BaseModel):
    """Logging and diagnostics."""

    log_level: LogLevel = Field(default=LogLevel.STANDARD, description="Logging detail")
    log_retention_days: int = Field(default=10, ge=1, le=365, description="Days of logs to keep")
    log_location: str = Field(default="", description="Custom log directory")


class MaxcoSettings(BaseModel):
    """Complete application settings."""

    ai: AIProviderSettings = Field(default_factory=AIProviderSettings)
    voice: VoiceSettings = Field(default_factory=VoiceSettings)
    routing: RoutingSettings = Field(default_factory=RoutingSettings)
    hud: HudSettings = Field(default_factory=HudSettings)
    advanced: AdvancedSettings = Field(default_factory=AdvancedSettings)

    model_config = ConfigDict(
        extra="ignore",
        validate_assignment=True,
        use_enum_values=True,
    )
