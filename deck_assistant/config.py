"""Runtime settings loaded from YAML and the environment."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/settings.yaml"


@dataclass
class Settings:
    """Settings shared by the CLI and the I/O layers."""

    cache_dir: str = ".cache"
    cache_ttl_hours: int = 24

    providers: list[str] = field(default_factory=lambda: ["scryfall", "mtgio"])
    enable_fallback: bool = True
    scryfall_delay: float = 0.1
    mtgio_delay: float = 0.5
    batch_size: int = 75

    algorithm: str = "cmc"
    min_theme_cards: int = 5

    llm_provider: str = "gemini"
    gemini_model: str = "gemini-2.5-flash"
    anthropic_model: str = "claude-sonnet-4-20250514"
    openai_model: str = "gpt-4o"
    ollama_model: Optional[str] = None
    ollama_host: Optional[str] = None
    llm_max_tokens: int = 4096

    output_dir: str = "output"

    @classmethod
    def from_config(cls, config_path: str = DEFAULT_CONFIG_PATH) -> "Settings":
        """
        Create settings from a YAML config file.

        Missing files or sections fall back to the defaults above.

        Args:
            config_path: Path to the YAML settings file

        Returns:
            Settings instance
        """
        path = Path(config_path)
        if not path.exists():
            logger.warning(f"Settings file not found: {config_path}, using defaults")
            return cls()

        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        defaults = cls()
        cache = config.get("cache", {})
        api = config.get("api", {})
        mana = config.get("mana", {})
        synergy = config.get("synergy", {})
        llm = config.get("llm", {})
        report = config.get("report", {})

        return cls(
            cache_dir=cache.get("directory", defaults.cache_dir),
            cache_ttl_hours=cache.get("ttl_hours", defaults.cache_ttl_hours),
            providers=api.get("providers", defaults.providers),
            enable_fallback=api.get("enable_fallback", defaults.enable_fallback),
            scryfall_delay=api.get("scryfall_delay", defaults.scryfall_delay),
            mtgio_delay=api.get("mtgio_delay", defaults.mtgio_delay),
            batch_size=api.get("batch_size", defaults.batch_size),
            algorithm=mana.get("algorithm", defaults.algorithm),
            min_theme_cards=synergy.get("min_theme_cards", defaults.min_theme_cards),
            llm_provider=llm.get("provider", defaults.llm_provider),
            gemini_model=llm.get("gemini_model", defaults.gemini_model),
            anthropic_model=llm.get("anthropic_model", defaults.anthropic_model),
            openai_model=llm.get("openai_model", defaults.openai_model),
            ollama_model=llm.get("ollama_model", defaults.ollama_model),
            ollama_host=llm.get("ollama_host", defaults.ollama_host),
            llm_max_tokens=llm.get("max_tokens", defaults.llm_max_tokens),
            output_dir=report.get("output_dir", defaults.output_dir),
        )


def get_api_key(env_var: str) -> Optional[str]:
    """Read an API key from the environment, loading .env first."""
    load_dotenv()
    return os.getenv(env_var) or None
