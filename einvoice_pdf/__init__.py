"""
E-Invoice PDF Renderer - Source Package.

This package contains all core modules for rendering electronic invoice
XML documents (全电发票) as fixed-layout PDF replicas. Each module has a
single responsibility.

Modules:
    - input_handler: Discovery of invoice XML documents
    - model: Typed invoice records and XML deserialization
    - renderer: Fonts, formatting and page layout
    - output_handler: PDF file output
    - utils: Logging, helpers and exceptions

Architecture:
    Input → Model → Renderer → Output
"""

__version__ = "1.0.0"
__author__ = "E-Invoice Tooling Team"

__all__ = [
    'input_handler',
    'model',
    'renderer',
    'output_handler',
    'utils'
]
