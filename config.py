import os
from dotenv import load_dotenv

load_dotenv()

# --- DATABASE ---
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"sqlite:///{os.path.join(os.path.dirname(__file__), 'db', 'fitness_tracker.db')}"
)

# Render/Heroku hand out postgres://, SQLAlchemy only accepts postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- AUTH ---
SECRET_KEY = os.getenv("SECRET_KEY", "dev_secret_key_123")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))

# --- LOGGING ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# --- STARTUP ---
SEED_TEMPLATES = os.getenv("SEED_TEMPLATES", "true").lower() in ("1", "true", "yes")
