# visual_learning/core/config.py

"""Application configuration from environment variables"""

from pydantic_settings import BaseSettings # type: ignore
from typing import List, Optional
from urllib.parse import quote_plus
import os


class Settings(BaseSettings):
    """Application settings from environment variables"""

    APP_ENV: str = os.getenv('APP_ENV', 'development')

    # Database
    MONGO_URI: str = os.getenv(
        'MONGO_URI',
        'mongodb://localhost:27017'
    )
    # Atlas credentials; when DB_USER is set they win over MONGO_URI
    DB_USER: Optional[str] = None
    DB_PASS: Optional[str] = None
    DB_CLUSTER: str = 'cluster0.g4e8qzr.mongodb.net'
    DATABASE_NAME: str = 'visualDb'

    # API
    API_TITLE: str = 'Visual Learning API'
    API_VERSION: str = '1.0.0'
    WELCOME_MESSAGE: str = 'Welcome to Visual Learning.........'

    # Security - signing secret for the bearer tokens handed out by /jwt
    ACCESS_SECRET_TOKEN: str = os.getenv('ACCESS_SECRET_TOKEN', 'change-me-in-production-now')
    JWT_ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_DAYS: int = 30

    # Promotion and moderation routes are open unless this is switched on
    STRICT_ROLE_GUARDS: bool = False

    # CORS
    CORS_ORIGINS: List[str] = [
        'http://localhost:3000',
        'http://localhost:5173',
        'http://127.0.0.1:3000',
        'http://127.0.0.1:5173',
    ]

    # Payment provider (Stripe REST API)
    PAYMENT_SECRET_KEY: str = os.getenv('PAYMENT_SECRET_KEY', '')
    PAYMENT_API_URL: str = 'https://api.stripe.com/v1'
    PAYMENT_CURRENCY: str = 'usd'
    PAYMENT_TIMEOUT_SECONDS: float = 10.0

    # Server
    HOST: str = '0.0.0.0'
    PORT: int = int(os.getenv('PORT', '5000'))

    # Logging
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    class Config:
        env_file = '.env'
        case_sensitive = True

    @property
    def mongo_uri(self) -> str:
        """Connection string, built from the Atlas credentials when present"""
        if self.DB_USER:
            user = quote_plus(self.DB_USER)
            password = quote_plus(self.DB_PASS or '')
            return (
                f'mongodb+srv://{user}:{password}@{self.DB_CLUSTER}/'
                '?retryWrites=true&w=majority'
            )
        return self.MONGO_URI


def validate_runtime_config(current: Settings) -> None:
    if current.APP_ENV.lower() == 'production' and current.ACCESS_SECRET_TOKEN == 'change-me-in-production-now':
        raise RuntimeError('ACCESS_SECRET_TOKEN must be set in production.')


settings = Settings()
