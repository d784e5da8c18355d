"""
Input Handler Module for the E-Invoice PDF Renderer.

This module provides functionality for:
    - Validating the input directory
    - Discovering invoice XML documents (top level only)

Author: E-Invoice Tooling Team
"""

from .handler import InputHandler

__all__ = ['InputHandler']
