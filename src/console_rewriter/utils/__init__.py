"""
Shared utilities: logging/console output and node rendering.
"""
