from pydantic_settings import BaseSettings, SettingsConfigDict

TEN_MIB = 10 * 1024 * 1024


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_file_size_bytes: int = TEN_MIB

    pdf_engine: str = "pdfplumber"
    fallback_to_ocr: bool = True
    min_native_text_chars: int = 1

    ocr_language: str = "eng"
    ocr_dpi: int = 300
    tesseract_cmd: str = ""

    analysis_provider: str = "example"
    analysis_call_timeout_seconds: float = 0.0
    batch_max_workers: int = 1

    analysis_openai_api_key: str = ""
    analysis_openai_model_name: str = ""
    analysis_openai_temperature: float = 0.0
    analysis_openai_timeout_seconds: int = 30

    analysis_openai_compatible_base_url: str = ""
    analysis_openai_compatible_api_key: str = ""
    analysis_openai_compatible_model_name: str = ""
    analysis_openai_compatible_timeout_seconds: int = 30

    analysis_openrouter_api_key: str = ""
    analysis_openrouter_model_name: str = ""
    analysis_groq_api_key: str = ""
    analysis_groq_model_name: str = ""
    analysis_together_api_key: str = ""
    analysis_together_model_name: str = ""
    analysis_deepseek_api_key: str = ""
    analysis_deepseek_model_name: str = ""
    analysis_ollama_api_key: str = "ollama"
    analysis_ollama_model_name: str = ""
