import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .console import err_console

# Load environment variables from .env file
load_dotenv()

# Configuration Defaults
DEFAULT_CONFIG = {
    "TERMCAPTURE_FILENAME": "redirected_output.txt",
    "TERMCAPTURE_ENCODING": "utf-8",
    "TERMCAPTURE_FLUSH_INTERVAL": "1.0",
}

# File Paths
TERMCAPTURE_DIR = Path(os.getenv("TERMCAPTURE_DIR", str(Path.home() / ".termcapture")))
CONFIG_FILE = Path(os.getenv("TERMCAPTURE_CONFIG_FILE", str(TERMCAPTURE_DIR / "config.json")))


def load_config() -> dict[str, Any]:
    """Load configuration from file"""
    if CONFIG_FILE.exists():
        try:
            with open(CONFIG_FILE) as f:
                config: dict[str, Any] = json.load(f)
                return config
        except Exception as e:
            err_console.print(f"[yellow]Warning: Could not load config file: {e}[/yellow]")
    return {}


def get_setting(key: str, default: str) -> str:
    """Get setting with priority: Env Var > Config File > Default"""
    # 1. Environment Variable
    env_val = os.getenv(key)
    if env_val:
        return env_val

    # 2. Config File
    config = load_config()
    if key in config:
        return str(config[key])

    # 3. Default
    return default


def get_float_setting(key: str, default: float) -> float:
    """Get float setting with priority: Env Var > Config File > Default"""
    value = get_setting(key, str(default))
    try:
        return float(value)
    except ValueError:
        err_console.print(
            f"[yellow]Warning: Invalid float value for {key}: {value}, using default {default}[/yellow]"
        )
        return default


# Initialize Configuration
DEFAULT_FILENAME = (
    get_setting("TERMCAPTURE_FILENAME", DEFAULT_CONFIG["TERMCAPTURE_FILENAME"]).strip()
    or DEFAULT_CONFIG["TERMCAPTURE_FILENAME"]
)
ENCODING = get_setting("TERMCAPTURE_ENCODING", DEFAULT_CONFIG["TERMCAPTURE_ENCODING"])

# Seconds between periodic flushes
FLUSH_INTERVAL = get_float_setting("TERMCAPTURE_FLUSH_INTERVAL", 1.0)
