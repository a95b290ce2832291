from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "http://localhost:3000"

    # Auth
    JWT_SECRET: str = "dev-secret-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    LOGIN_RATE_LIMIT: str = "5/minute"

    # Operator account (single admin allowed to run imports)
    OPERATOR_EMAIL: str = "admin@example.com"
    OPERATOR_PASSWORD_HASH: str = ""
    OPERATOR_ROLE: str = "ADMIN"

    # Shopify Admin API
    SHOPIFY_SHOP_DOMAIN: str = "example.myshopify.com"
    SHOPIFY_ADMIN_ACCESS_TOKEN: str = ""
    SHOPIFY_API_VERSION: str = "2025-10"
    SHOPIFY_REQUEST_TIMEOUT_SECONDS: float = 30.0

    # Metafield definitions
    METAFIELD_NAMESPACE: str = "custom"
    METAFIELD_OWNER_TYPE: str = "PRODUCT"

    # Monitoring
    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",")]

    @property
    def shopify_graphql_url(self) -> str:
        return f"https://{self.SHOPIFY_SHOP_DOMAIN}/admin/api/{self.SHOPIFY_API_VERSION}/graphql.json"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
