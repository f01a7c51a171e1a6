#!/usr/bin/env python3
"""
Koinos Configuration Manager

Stores table and logging preferences for the koinos tools in a shared
.koinos directory.
"""

import json
import logging
import os
import pathlib
from dataclasses import asdict, dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class KoinosConfig:
    """Configuration shared by all koinos tools"""

    version: str = "1.0"
    table_box: str = "ROUNDED"
    show_lines: bool = False
    table_title: Optional[str] = None
    log_level: str = "WARNING"
    default_sort: Optional[str] = None
    descending: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "KoinosConfig":
        """Create from dictionary, unknown keys are ignored"""
        defaults = cls()
        return cls(
            version=data.get("version", defaults.version),
            table_box=data.get("table_box", defaults.table_box),
            show_lines=bool(data.get("show_lines", defaults.show_lines)),
            table_title=data.get("table_title", defaults.table_title),
            log_level=data.get("log_level", defaults.log_level),
            default_sort=data.get("default_sort", defaults.default_sort),
            descending=bool(data.get("descending", defaults.descending)),
        )


def default_koinos_dir() -> pathlib.Path:
    """$KOINOS_HOME if set, otherwise ~/.koinos"""
    override = os.environ.get("KOINOS_HOME")
    if override:
        return pathlib.Path(override)
    return pathlib.Path.home() / ".koinos"


class SharedConfigManager:
    """Manages shared configuration for all koinos tools"""

    def __init__(self, koinos_dir: Optional[pathlib.Path] = None):
        """Initialize configuration manager

        Args:
            koinos_dir: Override default .koinos directory location
        """
        self.koinos_dir = koinos_dir or default_koinos_dir()
        self.config_file = self.koinos_dir / "config.json"

    def load(self) -> KoinosConfig:
        """Load configuration from file"""
        if not self.config_file.exists():
            return KoinosConfig()
        try:
            with self.config_file.open() as f:
                data = json.load(f)
            return KoinosConfig.from_dict(data)
        except (json.JSONDecodeError, AttributeError, OSError) as e:
            # If config is corrupted, return default
            logger.warning("Ignoring unreadable config %s: %s", self.config_file, e)
            return KoinosConfig()

    def save(self, config: KoinosConfig):
        """Save configuration to file"""
        self.koinos_dir.mkdir(parents=True, exist_ok=True)
        with self.config_file.open("w") as f:
            json.dump(config.to_dict(), f, indent=2)

    def reset(self):
        """Reset configuration to default"""
        if self.config_file.exists():
            self.config_file.unlink()
