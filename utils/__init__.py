"""
Utilities Package
Logging setup shared by the scripts
"""

from .logging_setup import configure_logging

__all__ = ['configure_logging']
