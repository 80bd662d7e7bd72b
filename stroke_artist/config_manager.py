"""Configuration persistence manager for the stroke artist.

This module handles loading and saving of canvas and toolbar settings to/from
JSON files.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple

from stroke_artist.models import CONFIG_FILE, ArtistConfig


class ConfigManager:
    """Handles loading and saving of artist configuration."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.stroke_artist_config.json)
        """
        self.config_path = config_path

    def load(self) -> ArtistConfig:
        """Load configuration from file, returning defaults if not found.

        Returns:
            ArtistConfig with loaded or default values
        """
        config = ArtistConfig()

        try:
            if self.config_path.exists():
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                    # Update config with loaded values (fallback to defaults)
                    config.canvas_width = int(data.get("canvas_width", config.canvas_width))
                    config.canvas_height = int(data.get("canvas_height", config.canvas_height))
                    palette = data.get("palette")
                    if palette:
                        config.palette = [tuple(int(c) for c in color) for color in palette]
                    diameters = data.get("pen_diameters")
                    if diameters:
                        config.pen_diameters = [float(d) for d in diameters]
                print(f"✓ Loaded configuration from {self.config_path}")
        except Exception as e:
            print(f"Warning: Could not load config file: {e}")
            config = ArtistConfig()

        return config

    def save(self, config: ArtistConfig) -> Tuple[bool, Optional[str]]:
        """Save configuration to file.

        Args:
            config: ArtistConfig to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        try:
            with open(self.config_path, "w") as f:
                json.dump(asdict(config), f, indent=2)
            return True, None
        except Exception as e:
            return False, str(e)
