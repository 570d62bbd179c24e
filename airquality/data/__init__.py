"""Loaders that fill an IntBuffer from external sources."""
