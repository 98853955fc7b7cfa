from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "dev"
    log_level: str = "INFO"

    # Derivation parameters are constants in credcore.core.password; only
    # caller-side policy lives here.
    token_bytes: int = 32
    reset_token_ttl_minutes: int = 60
    min_password_length: int = 8
    max_concurrent_derivations: int = 4
    log_verification_attempts: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
