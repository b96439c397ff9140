from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Transit Gateway"
    PROJECT_DESCRIPTION: str = "HTTP gateway to a multimodal trip-planning engine"
    VERSION: str = "1.0.0"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 1337
    # Maximum time a request may take, in seconds
    TIMEOUT_SECS: float = 1200.0
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Routing engine Settings
    ROUTER_URL: str = "http://router-ttx"
    ROUTER_ROUTE_PATH: str = "/route"
    ROUTER_TRAVEL_TIMES_PATH: str = "/one-to-city"
    ROUTER_HEALTH_PATH: str = "/healthy"

    # Static asset Settings
    STATIC_DIR: str = "static"
    STATIC_MAX_AGE_SECS: int = 86400

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    class ConfigDict:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
