"""StyleMorph: multi-outfit virtual try-on with Gemini."""

__version__ = "1.0.0"
