"""Input segmentation."""

from .segmenter import iter_lines, segment

__all__ = ["iter_lines", "segment"]
