"""In-memory query engine over a static video-game catalog."""

__version__ = "0.1.0"
