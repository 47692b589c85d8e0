"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Metadata keys, sentinels and literal sets
- exceptions: Codec exception hierarchy
"""
