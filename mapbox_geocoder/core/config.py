from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Mapbox Geocoder"
    MAPBOX_ACCESS_TOKEN: str | None = None
    MAPBOX_API_BASE_URL: str = "https://api.mapbox.com"
    REQUEST_TIMEOUT: float = 20
    DEFAULT_LOCALE: str | None = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
