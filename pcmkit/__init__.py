"""Reading and converting PCM audio from WAVE, AIFF, CAFF and raw files."""

__version__ = "0.1.0"