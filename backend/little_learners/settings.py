from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	# Provider can be "vertex" (Vertex AI Express) or "ai_studio" (Generative Language API)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	gemini_model: str = Field(default="gemini-2.5-flash", validation_alias="GEMINI_MODEL")
	# Vertex configuration
	vertex_region: str = Field(default="us-central1", validation_alias="GEMINI_VERTEX_REGION")
	vertex_project: str | None = Field(default=None, validation_alias="GEMINI_VERTEX_PROJECT")
	# Upper bound for a whole Story request; past it the round falls back to Classic content
	gemini_timeout_seconds: float = Field(default=8.0, validation_alias="GEMINI_TIMEOUT_SECONDS")

	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")
	# Key the learner's total score is stored under
	score_key: str = Field(default="littleLearnersTotalScore", validation_alias="SCORE_KEY")
	# In-memory game sessions: idle expiry and upper bound on how many are kept
	session_idle_seconds: int = Field(default=2 * 60 * 60, validation_alias="SESSION_IDLE_SECONDS")
	max_sessions: int = Field(default=1000, validation_alias="MAX_SESSIONS")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
