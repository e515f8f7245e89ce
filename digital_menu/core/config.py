import os

from dotenv import load_dotenv

# Carrega o .env da raiz do projeto
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./digital_menu.db")
ENV = os.getenv("ENV", "dev")
ENV_NORMALIZED = ENV.lower()
IS_DEV = ENV_NORMALIZED in {"dev", "development", "local"}
IS_PROD = ENV_NORMALIZED in {"prod", "production"}

# CORS
_cors_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip() and origin.strip() != "*"]

if not CORS_ORIGINS and IS_DEV:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

# Sessão do admin (PIN)
ADMIN_SESSION_SECRET = os.getenv("ADMIN_SESSION_SECRET", "")
ADMIN_SESSION_MAX_AGE_SECONDS = int(os.getenv("ADMIN_SESSION_MAX_AGE_SECONDS", "3600"))
ADMIN_SESSION_COOKIE_SECURE = _env_flag("ADMIN_SESSION_COOKIE_SECURE", "0" if IS_DEV else "1")
ADMIN_SESSION_COOKIE_SAMESITE = os.getenv("ADMIN_SESSION_COOKIE_SAMESITE", "lax").strip().lower()
if ADMIN_SESSION_COOKIE_SAMESITE not in {"lax", "strict", "none"}:
    ADMIN_SESSION_COOKIE_SAMESITE = "lax"

ADMIN_PIN = os.getenv("ADMIN_PIN", "").strip()
LOGIN_MAX_ATTEMPTS = int(os.getenv("LOGIN_MAX_ATTEMPTS", "5"))
LOGIN_WINDOW_SECONDS = int(os.getenv("LOGIN_WINDOW_SECONDS", "900"))

# Tema
DEFAULT_APP_BG = os.getenv("DEFAULT_APP_BG", "#400810").strip() or "#400810"
THEME_POLL_INTERVAL_SECONDS = float(os.getenv("THEME_POLL_INTERVAL_SECONDS", "3"))
THEME_RETRY_DELAY_SECONDS = float(os.getenv("THEME_RETRY_DELAY_SECONDS", "0.5"))

# Mídia
MEDIA_MAX_BYTES = int(os.getenv("MEDIA_MAX_BYTES", str(4 * 1024 * 1024)))
