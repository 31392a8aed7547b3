from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
	# Chat completion model used by both the conversation and the feedback endpoints
	openai_model: str = Field(default="gpt-4o-mini", validation_alias="OPENAI_MODEL")
	openai_base_url: str = Field(default="https://api.openai.com/v1/chat/completions", validation_alias="OPENAI_BASE_URL")
	openai_timeout_seconds: float = Field(default=60.0, validation_alias="OPENAI_TIMEOUT_SECONDS")

	# Database
	database_url: str = Field(default="sqlite:///./coach.db", validation_alias="DATABASE_URL")
	# Service credential with write access; merged into database_url when set
	database_password: str | None = Field(default=None, validation_alias="DATABASE_PASSWORD")
	seed_scenarios: bool = Field(default=True, validation_alias="SEED_SCENARIOS")

	# Active sessions with no activity for this long are marked abandoned
	stale_session_hours: int = Field(default=24, validation_alias="STALE_SESSION_HOURS")
	# Sweep interval; 0 (default) disables the sweeper
	stale_session_sweep_seconds: int = Field(default=0, validation_alias="STALE_SESSION_SWEEP_SECONDS")

	# Comma-separated, e.g. "https://a.example,https://b.example"; "*" allows any origin
	cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

	def cors_origin_list(self) -> list[str]:
		return [o.strip() for o in self.cors_origins.split(",") if o.strip()] or ["*"]
