from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "ARC Blueprint API"

    # Prefix the schema gateway is mounted under
    API_PREFIX: str = "/api/v1/blueprint"

    # Host REST base; collection endpoints are built as REST_URL + namespace + "/" + route
    REST_URL: str = "http://localhost:8000/wp-json/"
    COLLECTION_NAMESPACE: str = "arc-gateway/v1"

    # Comma separated import paths loaded at startup (they register schemas / field types)
    SCHEMA_MODULES: str = ""
    FIELD_TYPE_MODULES: str = ""

    # Anti-forgery header attached to every client request when a token is present
    CSRF_HEADER: str = "X-WP-Nonce"

    # When set, the schema gateway requires "Authorization: Bearer <token>"
    ADMIN_API_TOKEN: str | None = None

    # Timeout (seconds) for outbound client requests
    HTTP_TIMEOUT: float = 10.0

    DEBUG: bool = False

    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    # Sentry error tracking
    SENTRY_DSN: str | None = None
    SENTRY_ENVIRONMENT: str = "development"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def schema_modules(self) -> list[str]:
        return [m.strip() for m in self.SCHEMA_MODULES.split(",") if m.strip()]

    @property
    def field_type_modules(self) -> list[str]:
        return [m.strip() for m in self.FIELD_TYPE_MODULES.split(",") if m.strip()]

    @property
    def REST_BASE(self) -> str:
        """REST base URL, always ending with a slash."""
        return self.REST_URL if self.REST_URL.endswith("/") else f"{self.REST_URL}/"


settings = Settings()
