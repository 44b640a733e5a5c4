"""Application configuration using Pydantic Settings."""

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchSettings(BaseSettings):
    """Person name search settings."""

    model_config = SettingsConfigDict(env_prefix="SEARCH_")

    case_sensitive: bool = False
    max_results: int = 50


class TraversalSettings(BaseSettings):
    """Depth limits for ancestor/descendant queries."""

    model_config = SettingsConfigDict(env_prefix="TRAVERSAL_")

    default_ancestor_depth: int = 5
    default_descendant_depth: int = 5
    max_depth: int = 50


class DatabaseSettings(BaseSettings):
    """Database path settings."""

    model_config = SettingsConfigDict(env_prefix="DATABASE_")

    persons_db_path: str = "data/persons.db"
    graph_db_path: str = "data/family_graph.db"

    def ensure_dirs(self) -> None:
        """Create parent directories of both database files."""
        for path in (self.persons_db_path, self.graph_db_path):
            Path(path).parent.mkdir(parents=True, exist_ok=True)


class LoggingSettings(BaseSettings):
    """Structured logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    json_output: bool = True


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    search: SearchSettings = SearchSettings()
    traversal: TraversalSettings = TraversalSettings()
    database: DatabaseSettings = DatabaseSettings()
    logging: LoggingSettings = LoggingSettings()


settings = Settings()
