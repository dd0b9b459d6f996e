"""linkconv — convert links between wiki and Markdown notation in a vault."""

__version__ = "0.3.0"
