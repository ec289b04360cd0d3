import os

from dotenv import load_dotenv

# Carrega o .env da raiz do projeto
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./customers.db")
ENV = os.getenv("ENV", "dev")
ENVIRONMENT = os.getenv("ENVIRONMENT", ENV).strip().lower()
IS_DEV = ENVIRONMENT in {"dev", "development", "local"}
IS_PROD = ENVIRONMENT in {"prod", "production"}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Tokens: customers_tokens.token is String(2 * TOKEN_BYTES_MAX).
TOKEN_BYTES_MIN = 16
TOKEN_BYTES_MAX = 256


def parse_token_bytes(raw: str) -> int:
    value = int(raw)
    if not TOKEN_BYTES_MIN <= value <= TOKEN_BYTES_MAX:
        raise ValueError(f"TOKEN_BYTES must be between {TOKEN_BYTES_MIN} and {TOKEN_BYTES_MAX}, got {value}")
    return value


TOKEN_BYTES = parse_token_bytes(os.getenv("TOKEN_BYTES", "256"))
TOKEN_EXPIRE_MINUTES = int(os.getenv("TOKEN_EXPIRE_MINUTES", "60"))

# Pool / deadlines
DB_STATEMENT_TIMEOUT_MS = int(os.getenv("DB_STATEMENT_TIMEOUT_MS", "5000"))
DB_POOL_TIMEOUT_SECONDS = int(os.getenv("DB_POOL_TIMEOUT_SECONDS", "10"))
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
