"""
projinit: generate project scaffolding from templates.
"""

__version__ = "0.1.0"
