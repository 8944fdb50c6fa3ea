from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3001
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "rfp_analyzer"
    db_username: str = "rfp_analyzer"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    files_root: str = "uploads"
    pdf_engine: str = "pdfplumber"
    max_document_size_mb: int = 25

    llm_provider: str = "openrouter"
    llm_api_key: str = ""
    llm_base_url: str = ""
    llm_model_name: str = "google/gemini-2.0-flash-lite-001"
    llm_timeout_seconds: int = 120
    llm_max_tokens: int = 4000
    llm_temperature: float = 0.1
    llm_top_p: float = 0.9
    llm_rate_limit_per_minute: int = 60
    llm_app_referer: str = "http://localhost:3001"
    llm_app_title: str = "RFP Analysis Server"

    analysis_chunk_size: int = 20
    custom_analysis_max_questions: int = 50
    chat_history_limit: int = 10

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() in {"dev", "development", "local"}

    @property
    def max_document_size_bytes(self) -> int:
        return self.max_document_size_mb * 1024 * 1024
