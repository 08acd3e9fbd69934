import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from hiring_funnel.core.paths import resolve_repo_path


def _env_files() -> list[str]:
    base = resolve_repo_path("backend/.env")
    env = os.getenv("HF_ENVIRONMENT", "").strip().lower()
    files = [str(base)]
    if env and env != "development":
        files.append(str(resolve_repo_path(f"backend/.env.{env}")))
    else:
        files.append(str(resolve_repo_path("backend/.env.local")))
    return files


class Settings(BaseSettings):
    app_name: str = "Hiring Funnel Analytics"
    environment: str = "development"
    log_level: str = "INFO"

    database_url: str
    sql_echo: bool = False
    api_prefix: str = "/api"

    review_stage_keyword: str = "review"
    shortlist_statuses: list[str] = ["shortlisted", "interview"]
    hired_statuses: list[str] = ["hired"]
    history_row_cap: int = 500

    model_config = SettingsConfigDict(env_prefix="HF_", env_file=_env_files(), extra="ignore")


settings = Settings()
