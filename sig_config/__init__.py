"""
Sig Configuration Package.

Provides Pydantic Settings loaded from environment variables.
"""

from sig_config.settings import Settings

__all__ = ["Settings"]
