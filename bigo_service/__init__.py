"""HTTP service exposing the Big-O Lens analyzer."""

__version__ = "1.0.0"
