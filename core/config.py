"""
Configuration management for corpus sentiment runs
"""

import os
from pathlib import Path
from typing import Any, Optional
import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class PipelineSettings(BaseModel):
    """Grouping and tokenization parameters"""
    group_by: str = "document"
    window_size: int = 80  # lines per window for literature
    per_document: bool = True
    timezone: str = "UTC"  # hour-of-day buckets are taken in this zone
    include_empty_groups: bool = True
    remove_stopwords: bool = False

    @field_validator("window_size")
    @classmethod
    def _positive_window(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("window_size must be positive")
        return value


class LexiconSettings(BaseModel):
    """Lexicon selection"""
    default: str = "bing"
    nltk_data_dir: Optional[Path] = Field(
        default_factory=lambda: Path(os.environ["NLTK_DATA"]) if os.getenv("NLTK_DATA") else None
    )
    auto_download: bool = True


class LoggingSettings(BaseModel):
    """Logging output"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Config(BaseSettings):
    """Main configuration class"""

    model_config = SettingsConfigDict(env_prefix="CORPUS_SENTIMENT_", env_nested_delimiter="__")

    # Where exported tables go by default
    output_dir: Path = Path("~/corpus_sentiment").expanduser()

    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    lexicon: LexiconSettings = Field(default_factory=LexiconSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load configuration from YAML file"""
        if config_path is None:
            env_path = os.getenv("CORPUS_SENTIMENT_CONFIG")
            config_path = Path(env_path) if env_path else Path("~/corpus_sentiment/settings.yaml")
        config_path = Path(config_path).expanduser()

        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f)
                return cls(**data) if data else cls()

        return cls()

    def save(self, config_path: Optional[Path] = None):
        """Save configuration to YAML file"""
        if config_path is None:
            config_path = self.output_dir / "settings.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)

    def get(self, key: str, default: Any = None) -> Any:
        """Get nested configuration value using dot notation"""
        keys = key.split(".")
        value = self

        for k in keys:
            if hasattr(value, k):
                value = getattr(value, k)
            elif isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value


_config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance"""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def reload_config(config_path: Optional[Path] = None):
    """Reload configuration from disk"""
    global _config
    _config = Config.load(config_path)
    return _config
