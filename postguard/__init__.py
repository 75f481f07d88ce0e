"""postguard — lexical content moderation for journal posts."""

__version__ = "0.1.0"
