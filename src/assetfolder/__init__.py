"""AssetFolder - Filename-driven bulk asset loading for game content folders."""

__version__ = "0.1.0"
