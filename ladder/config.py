import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Engine runtime settings"""

    # Logging settings
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    LOG_DIR = os.getenv('LADDER_LOG_DIR', 'logs')
    LOG_TO_FILE = os.getenv('LADDER_LOG_TO_FILE', 'True').lower() == 'true'

    # Cache settings (seconds)
    CACHE_TTL_ROSTER = int(os.getenv('CACHE_TTL_ROSTER', 300))
    CACHE_TTL_PROFILE = int(os.getenv('CACHE_TTL_PROFILE', 600))
    CACHE_TTL_MATCH_STATS = int(os.getenv('CACHE_TTL_MATCH_STATS', 180))
    CACHE_TTL_RATING_HISTORY = int(os.getenv('CACHE_TTL_RATING_HISTORY', 120))
    CACHE_MAX_SIZE = int(os.getenv('CACHE_MAX_SIZE', 1000))

    # Default ladder used when a caller does not name one
    DEFAULT_LADDER = os.getenv('DEFAULT_LADDER', 'D1')

    @classmethod
    def cache_ttls(cls):
        """Get TTL per cached data class"""
        return {
            'roster': cls.CACHE_TTL_ROSTER,
            'profile': cls.CACHE_TTL_PROFILE,
            'match_stats': cls.CACHE_TTL_MATCH_STATS,
            'rating_history': cls.CACHE_TTL_RATING_HISTORY,
        }

    @classmethod
    def validate(cls):
        """Validate that configured values are usable"""
        for name, ttl in cls.cache_ttls().items():
            if ttl <= 0:
                raise ValueError(f"Cache TTL for '{name}' must be positive, got {ttl}")
        if cls.CACHE_MAX_SIZE <= 0:
            raise ValueError("CACHE_MAX_SIZE must be positive")
