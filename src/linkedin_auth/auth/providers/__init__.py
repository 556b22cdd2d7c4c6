"""Auth strategies."""

from .base import Strategy
from .linkedin import LinkedInStrategy, extract_email, extract_image

__all__ = ["Strategy", "LinkedInStrategy", "extract_email", "extract_image"]
