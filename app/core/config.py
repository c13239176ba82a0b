import os
from typing import Optional, List
from dotenv import load_dotenv

load_dotenv()

class Settings:
    ENV: str = os.getenv("ENV", "local")
    APP_NAME: str = os.getenv("APP_NAME", "MediQR")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "False").lower() == "true"
    DATABASE_POOL_SIZE: int = int(os.getenv("DATABASE_POOL_SIZE", 20))
    DATABASE_MAX_OVERFLOW: int = int(os.getenv("DATABASE_MAX_OVERFLOW", 10))

    # JWT issued by the external auth provider
    SECRET_KEY: str = os.getenv("SECRET_KEY", "")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

    # CORS
    BACKEND_CORS_ORIGINS: Optional[str] = os.getenv("BACKEND_CORS_ORIGINS")

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "True").lower() == "true"
    RATE_LIMIT_REQUESTS: int = int(os.getenv("RATE_LIMIT_REQUESTS", 100))
    RATE_LIMIT_PERIOD_SECONDS: int = int(os.getenv("RATE_LIMIT_PERIOD_SECONDS", 60))
    # Comma-separated proxy addresses whose X-Forwarded-For is honoured
    TRUSTED_PROXIES: str = os.getenv("TRUSTED_PROXIES", "")

    # Verification registry
    VERIFICATION_BASE_URL: str = os.getenv("VERIFICATION_BASE_URL", "http://127.0.0.1:8000")
    VERIFICATION_TIMEOUT_SECONDS: float = float(os.getenv("VERIFICATION_TIMEOUT_SECONDS", 10))
    VERIFICATION_MAX_RETRIES: int = int(os.getenv("VERIFICATION_MAX_RETRIES", 2))
    VERIFICATION_BACKOFF_SECONDS: float = float(os.getenv("VERIFICATION_BACKOFF_SECONDS", 0.5))

    # Prescriptions / inventory
    PRESCRIPTION_VALIDITY_DAYS: int = int(os.getenv("PRESCRIPTION_VALIDITY_DAYS", 30))
    DEFAULT_MIN_STOCK_LEVEL: int = int(os.getenv("DEFAULT_MIN_STOCK_LEVEL", 10))
    DEFAULT_MAX_STOCK_LEVEL: int = int(os.getenv("DEFAULT_MAX_STOCK_LEVEL", 1000))
    INVENTORY_DEBIT_ON_DISPENSE: bool = (
        os.getenv("INVENTORY_DEBIT_ON_DISPENSE", "True").lower() == "true"
    )


settings = Settings()
