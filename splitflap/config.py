"""
Board Configuration System

Centralized configuration for flap metrics, animation timing and rendering.
Values can be loaded from a YAML file; unknown keys are ignored.
"""

import logging
import os
from dataclasses import dataclass
from typing import Tuple

import yaml

from .alphabet import Alphabet, DEFAULT_SYMBOLS
from .grid import BASE_CELL_HEIGHT, BASE_CELL_WIDTH, BASE_SPACING


@dataclass
class BoardConfig:
    """
    Configuration for a split-flap board.

    Cell metrics are in pixels at content scale 1.0 and are multiplied by the
    content's scale factor before the grid is fitted to the canvas.
    """

    # Flap metrics at scale 1.0
    base_cell_width: float = BASE_CELL_WIDTH
    base_cell_height: float = BASE_CELL_HEIGHT
    base_spacing: float = BASE_SPACING

    # Largest grid the board will build; bigger canvases or smaller scales are rejected
    max_cells: int = 20000

    # Animation
    step_interval: float = 0.03  # seconds between flips

    # Symbols a flap cycles through, in order
    alphabet: str = DEFAULT_SYMBOLS

    # Rendering
    background_color: Tuple[int, int, int] = (0, 0, 0)
    flap_color: Tuple[int, int, int] = (0, 0, 0)
    text_color: Tuple[int, int, int] = (255, 255, 255)
    separator_color: Tuple[int, int, int] = (128, 128, 128)
    corner_radius: int = 10
    font_path: str = "/usr/share/fonts/truetype/dejavu/DejaVuSansMono-Bold.ttf"
    fallback_to_default_font: bool = True

    def build_alphabet(self) -> Alphabet:
        """Create the Alphabet described by this configuration"""
        return Alphabet(self.alphabet)

    def to_dict(self) -> dict:
        """Convert config to dictionary for serialization"""
        return {
            field.name: getattr(self, field.name)
            for field in self.__dataclass_fields__.values()
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'BoardConfig':
        """Create config from dictionary"""
        # Filter data to only include valid fields
        valid_fields = {field.name for field in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in valid_fields}

        # YAML gives lists for colours
        for key, value in filtered_data.items():
            if key.endswith('_color') and isinstance(value, list):
                filtered_data[key] = tuple(value)

        return cls(**filtered_data)

    @classmethod
    def from_yaml(cls, path: str) -> 'BoardConfig':
        """Load config from a YAML file, falling back to defaults if it is missing"""
        if not os.path.exists(path):
            logging.warning(f"Board config not found at {path}, using defaults")
            return cls()

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Board config {path} must contain a mapping")

        logging.info(f"Loaded board config from {path}")
        return cls.from_dict(data)

    def copy(self) -> 'BoardConfig':
        """Create a copy of this configuration"""
        return BoardConfig(**self.to_dict())

    def validate(self) -> list:
        """Validate configuration and return list of issues"""
        issues = []

        for field in ['base_cell_width', 'base_cell_height']:
            value = getattr(self, field)
            if value <= 0:
                issues.append(f"{field} must be positive, got {value}")

        if self.base_spacing < 0:
            issues.append(f"base_spacing must not be negative, got {self.base_spacing}")

        if self.max_cells <= 0:
            issues.append(f"max_cells must be positive, got {self.max_cells}")

        if self.step_interval < 0:
            issues.append(f"step_interval must not be negative, got {self.step_interval}")

        if not self.alphabet:
            issues.append("alphabet must not be empty")
        elif len(set(self.alphabet)) != len(self.alphabet):
            issues.append("alphabet must not contain duplicate symbols")

        if not os.path.exists(self.font_path):
            if not self.fallback_to_default_font:
                issues.append(f"Font not found: {self.font_path}")

        # Check color values
        color_fields = ['background_color', 'flap_color', 'text_color', 'separator_color']
        for field in color_fields:
            color = getattr(self, field)
            if not (isinstance(color, tuple) and len(color) == 3 and
                    all(0 <= c <= 255 for c in color)):
                issues.append(f"{field} must be RGB tuple (0-255), got {color}")

        return issues
