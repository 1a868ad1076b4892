from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # LLM Configuration (any OpenAI-compatible endpoint)
    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://openrouter.ai/api/v1"
    openai_model: str = "google/gemini-2.5-flash"

    # Remote interpretation venue (AWS Lambda)
    lambda_function_name: Optional[str] = None
    aws_region: str = "us-east-1"
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None

    # Digest pipeline
    digest_limit: int = 100
    detection_sample_rows: int = 5
    prompt_sample_chars: int = 100

    # Retry policy for the model call
    llm_max_retries: int = 3
    llm_retry_base_delay: float = 2.0

    # HTTP server
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    # CORS
    cors_origins: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def has_llm_key(self) -> bool:
        """Check if LLM API key is configured."""
        return self.openai_api_key is not None and len(self.openai_api_key.strip()) > 0

    @property
    def has_remote_venue(self) -> bool:
        """Remote execution needs both a function name and AWS credentials."""
        return bool(self.lambda_function_name and self.aws_access_key_id)


settings = Settings()
