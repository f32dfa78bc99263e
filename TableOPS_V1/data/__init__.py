"""
Point d'entrée data: paths to the JSON files shipped with the package.
Exposes getters rather than objects loaded at import time.
"""

from pathlib import Path

DATA_DIR = Path(__file__).parent


def get_SETTINGS_PATH() -> Path:
    return DATA_DIR / "settings.json"
