"""
Configuration validation for AI Blog Summary.
"""

import re
from typing import List

from .constants import VALID_ICON_SIZES, VALID_POPUP_THEMES, VALID_THUNDERBOLT_THEMES
from .settings import PluginSettings
from ..models.summary import LengthPreset, OutputStyle

_HEX_COLOR = re.compile(r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


class ConfigValidator:
    """Validates configuration settings."""

    @staticmethod
    def validate(settings: PluginSettings) -> List[str]:
        """Validate the settings and return a list of problems (empty when valid)."""
        errors = []

        errors.extend(ConfigValidator._validate_generation(settings))
        errors.extend(ConfigValidator._validate_display(settings))
        errors.extend(ConfigValidator._validate_service(settings))

        return errors

    @staticmethod
    def _validate_generation(settings: PluginSettings) -> List[str]:
        errors = []

        valid_lengths = [preset.value for preset in LengthPreset]
        if settings.default_length not in valid_lengths:
            errors.append(
                f"Default length '{settings.default_length}' is not one of {', '.join(valid_lengths)}"
            )

        valid_styles = [style.value for style in OutputStyle]
        if settings.output_style not in valid_styles:
            errors.append(
                f"Output style '{settings.output_style}' is not one of {', '.join(valid_styles)}"
            )

        if not (1 <= settings.timeout <= 300):
            errors.append(f"Timeout {settings.timeout}s is not in valid range (1-300)")

        if settings.api_delay > 60000:
            errors.append("API delay must not exceed 60000 ms")

        if not settings.model:
            errors.append("Model must not be empty")

        return errors

    @staticmethod
    def _validate_display(settings: PluginSettings) -> List[str]:
        errors = []

        if settings.icon_size not in VALID_ICON_SIZES:
            errors.append(f"Icon size '{settings.icon_size}' is not valid")

        if settings.popup_theme not in VALID_POPUP_THEMES:
            errors.append(f"Popup theme '{settings.popup_theme}' is not valid")

        if settings.thunderbolt.theme not in VALID_THUNDERBOLT_THEMES:
            errors.append(f"Thunderbolt theme '{settings.thunderbolt.theme}' is not valid")

        colors = {
            "icon_color": settings.icon_color,
            "readmore_button_color": settings.readmore_button_color,
            "list_bullet_color": settings.list_bullet_color,
            "thunderbolt.bullet_color": settings.thunderbolt.bullet_color,
            "thunderbolt.card_bg_color": settings.thunderbolt.card_bg_color,
        }
        for name, value in colors.items():
            if not _HEX_COLOR.match(value or ""):
                errors.append(f"{name} '{value}' is not a hex color")

        if settings.thunderbolt.posts_per_page < 1:
            errors.append("Thunderbolt posts per page must be positive")

        return errors

    @staticmethod
    def _validate_service(settings: PluginSettings) -> List[str]:
        errors = []

        if not (1 <= settings.port <= 65535):
            errors.append(f"Port {settings.port} is not in valid range (1-65535)")

        if not settings.database_path:
            errors.append("Database path must not be empty")

        return errors
