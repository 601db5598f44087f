"""
Services package for the ladder engine.

Caching and composition on top of the pure operations layer.
"""

from .ladder_service import LadderEntry, LadderService, MatchFinalization
from .result_cache import MISS, ResultCache

__all__ = ['LadderEntry', 'LadderService', 'MatchFinalization', 'MISS', 'ResultCache']
