import json
import os
from dataclasses import dataclass, field
from typing import Dict, Optional
from dotenv import load_dotenv

load_dotenv()

DEFAULT_SEED_CATALOG = {"Go Programming": 3, "Clean Code": 2}


def _parse_catalog(raw: Optional[str]) -> Dict[str, int]:
    """Parse LIBRARY_SEED_CATALOG, a JSON object of title -> copies."""
    if not raw:
        return dict(DEFAULT_SEED_CATALOG)
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("LIBRARY_SEED_CATALOG must be a JSON object of title -> copies")
    catalog = {}
    for title, copies in data.items():
        copies = int(copies)
        if copies < 0:
            raise ValueError(f"Negative copy count for {title!r} in LIBRARY_SEED_CATALOG")
        catalog[str(title)] = copies
    return catalog


def _positive_days(name: str, default: str) -> int:
    """Read a day count from the environment; loans need a positive period."""
    days = int(os.getenv(name, default))
    if days <= 0:
        raise ValueError(f"{name} must be a positive number of days, got {days}")
    return days


@dataclass
class Settings:
    # API settings
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "3000"))

    # Loan rules
    loan_period_days: int = _positive_days("LOAN_PERIOD_DAYS", "28")
    loan_extension_days: int = _positive_days("LOAN_EXTENSION_DAYS", "21")

    # Catalog seeded at startup
    seed_catalog: Dict[str, int] = field(default_factory=lambda: _parse_catalog(os.getenv("LIBRARY_SEED_CATALOG")))

    # Application settings
    app_name: str = os.getenv("APP_NAME", "e-Library")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")


settings = Settings()
