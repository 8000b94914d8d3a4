"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Preference store: "memory" | "supabase"
    preference_backend: str = "memory"

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_preferences_table: str = "user_preferences"

    # Header set by the authenticating proxy in front of the service
    identity_header: str = "x-user-name"

    # CORS, comma separated
    allowed_origins: str = ""


settings = Settings()
