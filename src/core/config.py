from pathlib import Path

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_FILE = BASE_DIR / '.env'


class ClassifierConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix='CLASSIFIER_',
        env_file=ENV_FILE,
        extra='ignore',  # Ignore extra environment variables
    )
    base_url: str = 'http://localhost:5000'
    request_timeout_seconds: float = 30.0
    health_timeout_seconds: float = 5.0
    min_text_length: int = 10
    source_label: str = 'Flask ML Model'

    @computed_field
    @property
    def predict_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/predict"

    @computed_field
    @property
    def predict_proba_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/predict_proba"

    @computed_field
    @property
    def liveness_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/"


class Config(BaseSettings):
    app_name: str = "AI Text Detection Gateway"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Include raw exception text in 500 responses
    expose_error_details: bool = True
    cors_allowed_origins: str = "*"

    # Nested configs
    classifier: ClassifierConfig = ClassifierConfig()

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]


config = Config()
