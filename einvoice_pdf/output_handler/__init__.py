"""
Output Handler Module for the E-Invoice PDF Renderer.

This module provides functionality for:
    - Output directory creation
    - Stale output removal
    - PDF file writing

Author: E-Invoice Tooling Team
"""

from .handler import OutputHandler

__all__ = ['OutputHandler']
