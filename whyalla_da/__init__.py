"""Core package for the Whyalla development application scraper."""

__all__ = [
    "config",
    "models",
    "geometry",
    "proximity",
    "regions",
    "segmenter",
    "normalize",
    "suburbs",
    "parser",
    "decoder",
    "scraper",
    "db",
    "loader",
    "cli",
]
