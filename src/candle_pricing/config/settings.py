"""
Centralized settings and path configuration for the candle calculator.
"""
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    # Walk up from this file to find the project root
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Installed outside a checkout: use the working directory
    return Path.cwd()


@dataclass
class Settings:
    """Application settings with sensible defaults."""
    
    # Project paths
    project_root: Path
    data_dir: Path
    log_dir: Path
    
    # History storage
    history_key: str = "candle_calc_history_v2"
    history_limit: int = 10
    
    # Display
    currency_symbol: str = "₹"
    
    # Form defaults
    default_gst_percent: float = 18.0
    
    @property
    def history_path(self) -> Path:
        """File backing the history slot."""
        return self.data_dir / f"{self.history_key}.json"
    
    @classmethod
    def load(cls, project_root: Optional[Path] = None, data_dir: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure."""
        root = project_root or get_project_root()
        
        return cls(
            project_root=root,
            data_dir=data_dir or root / 'data',
            log_dir=root / 'logs',
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
