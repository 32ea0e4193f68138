import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

loaded = load_dotenv()
if not loaded and Path(".env").exists():
	raise RuntimeError(".env file present but failed to load")

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///checkcx.db"


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_optional_str_env(name: str) -> Optional[str]:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return None
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except Exception:
		logger.exception("Invalid %s: %r", name, raw)
		return default


def get_float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except Exception:
		logger.exception("Invalid %s: %r", name, raw)
		return default


def get_bool_env(name: str, default: bool) -> bool:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw.strip().lower() in ("1", "true", "yes", "on")


def database_url() -> str:
	return get_str_env("DATABASE_URL", DEFAULT_DATABASE_URL)


def preferences_path() -> str:
	default = os.path.join(os.path.expanduser("~"), ".config", "check-cx-admin", "preferences.json")
	return get_str_env("CHECKCX_PREFERENCES_PATH", default)
