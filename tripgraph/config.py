"""tripgraph configuration and Keychain helpers.

Shared by the store adapters, the HTTP server and the CLI.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".tripgraph" / "config.json"
DEFAULT_SNAPSHOT_PATH = Path.home() / ".tripgraph" / "snapshot.json"
KEYCHAIN_SERVICE = "tripgraph"

DEFAULTS: Dict[str, Any] = {
    "api_url": "",
    "collections": {
        "contacts": "/api/contacts",
        "events": "/api/events",
        "todos": "/api/todos",
        "tripNotes": "/api/trip-notes",
        "dossiers": "/api/dossiers",
        "settings": "/api/settings",
    },
    "snapshot_path": str(DEFAULT_SNAPSHOT_PATH),
    "provider": "gemini",
    "model": None,
    "max_contacts": 20,
    "max_steps": 80,
    "request_timeout": 10,
}

# Environment variable → config key
ENV_OVERRIDES = {
    "TRIPGRAPH_API_URL": "api_url",
    "TRIPGRAPH_API_TOKEN": "api_token",
    "TRIPGRAPH_SNAPSHOT": "snapshot_path",
    "TRIPGRAPH_PROVIDER": "provider",
    "TRIPGRAPH_MODEL": "model",
}


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load config: defaults, then the JSON file, then environment overrides."""
    config = json.loads(json.dumps(DEFAULTS))
    config_path = path or DEFAULT_CONFIG_PATH

    if config_path.exists():
        try:
            loaded = json.loads(config_path.read_text())
            if isinstance(loaded, dict):
                config.update(loaded)
            else:
                logger.warning("Config %s is not a JSON object, ignoring", config_path)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to read config %s: %s", config_path, exc)

    for env_var, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            config[key] = value

    return config


def save_config(config: Dict[str, Any], path: Optional[Path] = None):
    """Save config to disk."""
    config_path = path or DEFAULT_CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config, indent=2))


def store_api_key(provider: str, key: str) -> bool:
    """Store an LLM API key in macOS Keychain. Returns True on success."""
    subprocess.run(
        ["security", "delete-generic-password", "-a", provider, "-s", KEYCHAIN_SERVICE],
        capture_output=True,
    )
    result = subprocess.run(
        ["security", "add-generic-password", "-a", provider, "-s", KEYCHAIN_SERVICE, "-w", key],
        capture_output=True, text=True,
    )
    if result.returncode != 0:
        logger.warning("Keychain rejected key for %s: %s", provider, result.stderr.strip())
    return result.returncode == 0


def get_api_key(env_var: str, keychain_account: str) -> Optional[str]:
    """Load an API key from the environment or macOS Keychain.

    Checks the env var first, then Keychain (set via `tripgraph set-key`).
    """
    key = os.environ.get(env_var)
    if key:
        return key.strip()

    try:
        result = subprocess.run(
            ["security", "find-generic-password", "-a", keychain_account, "-s", KEYCHAIN_SERVICE, "-w"],
            capture_output=True, text=True,
        )
        if result.returncode == 0 and result.stdout.strip():
            return result.stdout.strip()
    except FileNotFoundError:
        # Not on macOS
        pass

    return None
