"""Zentrale Konfigurationsverwaltung"""

import os
from dotenv import load_dotenv
from pathlib import Path

config_dir = Path(__file__).parent
env_file = config_dir / '.env'
load_dotenv(env_file)

PROJECT_ROOT = config_dir.parent

# --- PostgreSQL (Fallbacks wie im docker-compose Setup) ---
POSTGRES_HOST = os.getenv('POSTGRES_HOST', 'postgres')
POSTGRES_PORT = os.getenv('POSTGRES_PORT', '5432')
POSTGRES_DB = os.getenv('POSTGRES_DB', 'orgasuite')
POSTGRES_USER = os.getenv('POSTGRES_USER', 'orgasuite_user')
POSTGRES_PASSWORD = os.getenv('POSTGRES_PASSWORD', 'orgasuite_password')

# Optional: komplette SQLAlchemy URL (überschreibt POSTGRES_*)
DATABASE_URL = os.getenv('DATABASE_URL')

TABLE_GERMAN_BANKS = os.getenv('TABLE_GERMAN_BANKS', 'german_banks')

# --- Bundesbank Import ---
DATA_DIR = PROJECT_ROOT / 'data'

BANK_IMPORT_FILE = Path(os.getenv('BANK_IMPORT_FILE', str(DATA_DIR / 'bundesbank' / 'bundesbank.csv')))
BANK_IMPORT_ENCODING = os.getenv('BANK_IMPORT_ENCODING', 'iso-8859-1')
BANK_IMPORT_ERROR_LOG_LIMIT = int(os.getenv('BANK_IMPORT_ERROR_LOG_LIMIT', '5'))
BANK_IMPORT_PROGRESS_INTERVAL = int(os.getenv('BANK_IMPORT_PROGRESS_INTERVAL', '100'))

# --- Logging ---
LOG_DIR = Path(os.getenv('LOG_DIR', str(PROJECT_ROOT / 'logs')))
