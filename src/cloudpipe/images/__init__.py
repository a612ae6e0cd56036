"""
Image generation module for Cloud Pipe
"""

from .client import ImageGenerationClient

__all__ = ["ImageGenerationClient"]
