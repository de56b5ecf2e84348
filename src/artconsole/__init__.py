"""Serial configuration console for Art-Net DMX nodes."""

__version__ = "0.1.0"
