"""Content type detection and per-line classification."""

from .detector import detect_content_type
from .lines import classify_lines
from .media import lookup_media
from .profiles import PROFILES, get_profile

__all__ = ["detect_content_type", "classify_lines", "lookup_media", "PROFILES", "get_profile"]
