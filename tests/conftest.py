import os
import tempfile
from pathlib import Path

# Precisa rodar antes de qualquer import do pacote (config lê o ambiente no import).
os.environ.setdefault("ENV", "test")
os.environ.setdefault("ADMIN_SESSION_SECRET", "test-session-secret")
os.environ.setdefault("ADMIN_SESSION_COOKIE_SECURE", "0")
os.environ.setdefault("THEME_RETRY_DELAY_SECONDS", "0")
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite:///{Path(tempfile.gettempdir()) / 'digital_menu_test.db'}",
)
