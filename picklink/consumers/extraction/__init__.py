"""Pick extraction from free text."""

from picklink.consumers.extraction.parser import looks_like_pick, parse_pick_simple

__all__ = ["looks_like_pick", "parse_pick_simple"]
