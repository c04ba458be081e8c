"""
Environment variable handling for AI Blog Summary configuration.
"""

import os
from typing import Any, Dict

from dotenv import load_dotenv

from .settings import PluginSettings

ENV_PREFIX = "AI_SUMMARY_"


class EnvironmentLoader:
    """Loads configuration from environment variables."""

    # settings field -> environment variable suffix
    FIELD_MAP = {
        "provider": "PROVIDER",
        "api_key": "API_KEY",
        "model": "MODEL",
        "timeout": "TIMEOUT",
        "api_delay": "API_DELAY_MS",
        "default_length": "DEFAULT_LENGTH",
        "default_language": "DEFAULT_LANGUAGE",
        "output_style": "OUTPUT_STYLE",
        "auto_generate": "AUTO_GENERATE",
        "icon_size": "ICON_SIZE",
        "icon_color": "ICON_COLOR",
        "popup_theme": "POPUP_THEME",
        "readmore_button_color": "READMORE_BUTTON_COLOR",
        "list_bullet_color": "LIST_BULLET_COLOR",
        "database_path": "DATABASE_PATH",
        "host": "HOST",
        "port": "PORT",
        "log_level": "LOG_LEVEL",
        "log_file": "LOG_FILE",
    }

    THUNDERBOLT_FIELD_MAP = {
        "theme": "THUNDERBOLT_THEME",
        "bullet_color": "THUNDERBOLT_BULLET_COLOR",
        "card_bg_color": "THUNDERBOLT_CARD_BG_COLOR",
        "show_share": "THUNDERBOLT_SHOW_SHARE",
        "posts_per_page": "THUNDERBOLT_POSTS_PER_PAGE",
    }

    @staticmethod
    def load_settings(load_env_file: bool = True) -> PluginSettings:
        """Load settings from the environment (and ``.env`` when present)."""
        if load_env_file:
            load_dotenv()

        data: Dict[str, Any] = EnvironmentLoader._collect(EnvironmentLoader.FIELD_MAP)

        # OPENAI_API_KEY is accepted as a fallback for the provider key
        if not data.get("api_key"):
            fallback_key = os.getenv("OPENAI_API_KEY", "").strip()
            if fallback_key:
                data["api_key"] = fallback_key

        thunderbolt = EnvironmentLoader._collect(EnvironmentLoader.THUNDERBOLT_FIELD_MAP)
        if thunderbolt:
            data["thunderbolt"] = thunderbolt

        return PluginSettings.from_dict(data)

    @staticmethod
    def _collect(field_map: Dict[str, str]) -> Dict[str, Any]:
        values = {}
        for field_name, suffix in field_map.items():
            value = os.getenv(f"{ENV_PREFIX}{suffix}")
            if value is not None and value != "":
                values[field_name] = value
        return values

