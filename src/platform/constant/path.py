from pathlib import Path


# Project root (directory holding pyproject.toml)
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

LOG_DIR = BASE_DIR / 'logs'
