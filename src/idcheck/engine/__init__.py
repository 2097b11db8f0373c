"""Fingerprinting, result cache and the validation facade."""

from .cache import CacheEntry, ResultCache
from .facade import Validator
from .fingerprint import fingerprint

__all__ = ["CacheEntry", "ResultCache", "Validator", "fingerprint"]
