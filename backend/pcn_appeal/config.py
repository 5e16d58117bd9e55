from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    service_name: str = "PCN Appeal Assistant"
    log_level: str = "INFO"

    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    database_url: str = ""

    submission_url: str = ""
    submission_dir: str = "submissions"
    renderer_url: str = ""
    collaborator_timeout: float = 30.0

    calibration_accuracy_threshold: float = 0.75

    model_config = {"env_file": ".env"}


settings = Settings()
