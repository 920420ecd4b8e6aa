from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    MONGODB_URI: str = "mongodb://localhost:27017/calendar_app"
    MONGODB_DATABASE: str = "calendar_app"
    STORE_BACKEND: str = "mongo"
    SERVE_STATIC: bool = False
    STATIC_DIR: str = "./dist"
    API_URL: str = "http://localhost:5000/api"
    DISPLAY_TIMEZONE: str | None = None
    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"


settings = Settings()
