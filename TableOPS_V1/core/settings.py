"""
Runtime configuration, loaded from ``data/settings.json`` and validated via
Pydantic.
"""

from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field

from TableOPS_V1.data import get_SETTINGS_PATH
from TableOPS_V1.domain.types import ReferenceClock
from TableOPS_V1.utils import load_and_validate


class Settings(BaseModel):
    """
    Paramètres de l'application.

    Exemple de fichier:
    {
        "reference_clock": {"date": "2025-05-19", "hour": 22, "minute": 19},
        "table_count": 10,
        "log_file": "logs.txt",
        "admin_username": "admin",
        "admin_password": "admin123",
        "log_level": "WARNING",
        "diagnostic_log_file": null
    }
    """

    reference_clock: ReferenceClock
    table_count: int = Field(default=10, ge=1, description="Tables in the room")
    log_file: Path = Path("logs.txt")
    admin_username: str = "admin"
    admin_password: str = "admin123"
    log_level: str = "WARNING"
    diagnostic_log_file: Optional[Path] = None


def load_settings(path: Optional[Union[Path, str]] = None) -> Settings:
    """Charge les paramètres depuis le JSON (fichier par défaut si ``path`` est None).

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If a field is missing or out of range.
    """
    return load_and_validate(Path(path) if path else get_SETTINGS_PATH(), Settings)
