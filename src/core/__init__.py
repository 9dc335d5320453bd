"""Core domain package for pastescore.

Core contains glyph normalization, signature matching and per-game extraction
without any UI or configuration-file code, keeping the engine portable.
"""
