import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv


def load_env() -> None:
    """Load .env from the working directory if present.
    Existing environment variables take precedence.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise SystemExit(f"{name} must be a number, got: {raw!r}")


def env_list(name: str, default: Optional[List[str]] = None) -> Optional[List[str]]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return [x.strip() for x in raw.split(",") if x.strip()]
