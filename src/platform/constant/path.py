from pathlib import Path


# Project root (holds pyproject.toml, .env, logs/)
BASE_DIR = Path(__file__).resolve().parents[3]

LOG_DIR = BASE_DIR / 'logs'

# Local overrides first, committed defaults otherwise
ENV_FILE = BASE_DIR / '.env' if (BASE_DIR / '.env').exists() else BASE_DIR / '.env.example'
