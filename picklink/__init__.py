"""picklink: resolve free-text sports picks to sportsbook events."""

__version__ = "0.1.0"
