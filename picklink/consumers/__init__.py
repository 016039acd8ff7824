"""Consumer layer.

Business logic on top of core types: matching picks to events and
extracting picks from text.
"""
