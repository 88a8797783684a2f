"""Command line interface for BuildWatch."""

from .main import main

__all__ = ['main']
