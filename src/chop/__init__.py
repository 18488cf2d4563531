"""chop - stream filter for Markdown checkbox todo lists."""

__version__ = "0.1.0"
