"""Substrate selection from configuration."""

from typing import Optional

from journeyscopes.config import StoreSettings, get_settings
from journeyscopes.services.storage.interface import KeyValueSubstrate
from journeyscopes.services.storage.json_files import JsonFileSubstrate
from journeyscopes.services.storage.memory import InMemorySubstrate


def create_substrate(settings: Optional[StoreSettings] = None) -> KeyValueSubstrate:
    """Build the substrate named by `settings.backend`."""
    settings = settings or get_settings().store
    if settings.backend == "file":
        return JsonFileSubstrate(settings.data_dir)
    return InMemorySubstrate()
