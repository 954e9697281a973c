"""Building blocks for managing replicated block volumes: builders, rollout checks, stats and usage fields."""

__version__ = "0.1.0"