"""Configuration management using Pydantic BaseSettings."""
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable overrides."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True
    )
    
    # Logging
    log_level: str = Field(default="INFO", alias="VENDSCORE_LOG_LEVEL")
    log_dir: Path = Field(default_factory=lambda: Path("./logs"), alias="VENDSCORE_LOG_DIR")
    log_json: bool = Field(default=True, alias="VENDSCORE_LOG_JSON")
    
    # Weighted dimensions that have no live input yet
    placeholder_payback_rating: float = Field(default=3.0, alias="VENDSCORE_PLACEHOLDER_PAYBACK")
    placeholder_route_fit_rating: float = Field(default=3.0, alias="VENDSCORE_PLACEHOLDER_ROUTE_FIT")
    placeholder_install_rating: float = Field(default=3.0, alias="VENDSCORE_PLACEHOLDER_INSTALL")
    
    # Minimum rated sub-metrics before a category average is reported
    general_min_rated: int = Field(default=3, alias="VENDSCORE_GENERAL_MIN_RATED")
    module_min_rated: int = Field(default=1, alias="VENDSCORE_MODULE_MIN_RATED")
    
    # Financial input defaults for new locations
    default_avg_ticket_price: float = Field(default=2.50, alias="VENDSCORE_DEFAULT_AVG_TICKET")
    default_capture_rate: float = Field(default=0.05, alias="VENDSCORE_DEFAULT_CAPTURE_RATE")
    default_days_open: int = Field(default=30, alias="VENDSCORE_DEFAULT_DAYS_OPEN")
    
    @property
    def log_file(self) -> Path:
        """Return path of the JSON log file."""
        return self.log_dir / "vendscore.log"


# Global settings instance
settings = Settings()
