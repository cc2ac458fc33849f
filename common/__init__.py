"""
Shared helpers for logging, running external commands and file handling.
"""
