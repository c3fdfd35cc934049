from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docpipeline"
    db_username: str = "docpipeline"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    files_root: str = "/app/files"
    storage_timeout_seconds: float = 10.0

    worker_poll_interval_seconds: int = 5
    worker_claim_candidates: int = 10

    pdf_engine: str = "pdfplumber"
    extraction_max_content_length: int = 100_000
    extraction_include_metadata_footer: bool = False

    analysis_max_prompt_chars: int = 15_000
    analysis_max_summary_words: int = 150

    analysis_provider: str = "openai"
    analysis_model_name: str = "gpt-4o"
    analysis_temperature: float = 0.3
    analysis_timeout_seconds: int = 60
    analysis_api_key: str = ""
    analysis_base_url: str = ""

    status_api_base_url: str = "http://localhost:8000/api"
    status_poll_interval_seconds: float = 5.0
    status_fetch_timeout_seconds: float = 10.0
