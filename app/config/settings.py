from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # GitHub - server-side token; empty string = unauthenticated (60 requests/hour)
    github_token: str = ""
    github_api_url: str = "https://api.github.com"
    github_api_version: str = "2022-11-28"
    github_timeout_seconds: float = 30.0
    # Log a warning once X-RateLimit-Remaining drops to this value
    github_rate_limit_warning: int = 10

    # Timeline pagination
    default_per_page: int = 30
    # GitHub list endpoints cap per_page at 100
    max_per_page: int = 100

    @property
    def github_authenticated(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)


settings = Settings()
