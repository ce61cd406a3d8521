"""wut: one-sentence descriptions of unfamiliar files, written by an LLM."""

__version__ = "0.2.0"

__all__ = ["__version__"]
