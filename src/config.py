from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Storage
    database_path: str = "data/projects.db"

    # App
    debug: bool = False
    log_level: str = "INFO"

    # IRR solver defaults (Newton-Raphson)
    irr_initial_guess: float = 0.10
    irr_max_iterations: int = 100
    irr_precision: float = 1e-7


settings = Settings()
