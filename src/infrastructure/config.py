from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    # --- Core App Settings ---
    FLASK_ENV: str = "production"
    PORT: int = 5000

    # --- MongoDB Atlas ---
    MONGO_USER: str
    MONGO_PASSWORD: str
    MONGO_CLUSTER: str
    MONGO_HOST_SUFFIX: str = "p8uu3.mongodb.net"
    MONGO_DB: str
    MONGO_COLLECTION: str

    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    @property
    def mongo_uri(self) -> str:
        """Atlas SRV connection string; the app name is the cluster name."""
        # Credentials must be percent-escaped inside the URI
        user = quote_plus(self.MONGO_USER)
        password = quote_plus(self.MONGO_PASSWORD)
        return (
            f"mongodb+srv://{user}:{password}"
            f"@{self.MONGO_CLUSTER.lower()}.{self.MONGO_HOST_SUFFIX}"
            f"/?retryWrites=true&w=majority&appName={self.MONGO_CLUSTER}"
        )


# Load settings
settings = Settings()
