from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "AquaScore API"
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    ocr_text_max_length: int = 5000
    ocr_text_min_length: int = 10

    fuzzy_max_distance: int = 2
    fuzzy_min_synonym_length: int = 2

    low_data_metric_threshold: int = 3
    low_data_score_cap: float = 60.0

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="AQUASCORE_")


settings = Settings()
