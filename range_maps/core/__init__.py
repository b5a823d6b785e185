"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: KML tag names, geometry labels, storage defaults
- exceptions: Custom exception hierarchy
"""
