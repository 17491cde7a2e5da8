"""
Runtime configuration for the analytics job and CLI.
Values come from the environment, with a .env file loaded if present.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


@dataclass
class AnalyticsConfig:
    """Configuration for analytics runs."""
    top_n: int = 10
    output_dir: Path = Path('./data/processed/analytics')
    log_level: str = 'INFO'

    def __post_init__(self):
        """Validate and normalize values."""
        if not isinstance(self.top_n, int) or self.top_n <= 0:
            raise ValueError(f"top_n must be a positive integer, got {self.top_n!r}")

        self.output_dir = Path(self.output_dir)
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

    @property
    def default_output_path(self) -> Path:
        """Default location for the analytics JSON."""
        return self.output_dir / 'analytics.json'

    @classmethod
    def from_env(cls) -> 'AnalyticsConfig':
        """
        Build configuration from environment variables.

        Reads APP_ANALYTICS_TOP_N, APP_ANALYTICS_OUTPUT_DIR and APP_ANALYTICS_LOG_LEVEL.

        Raises:
            ValueError: If a variable holds an invalid value
        """
        return cls(
            top_n=int(os.getenv('APP_ANALYTICS_TOP_N', '10')),
            output_dir=Path(os.getenv('APP_ANALYTICS_OUTPUT_DIR', './data/processed/analytics')),
            log_level=os.getenv('APP_ANALYTICS_LOG_LEVEL', 'INFO')
        )
