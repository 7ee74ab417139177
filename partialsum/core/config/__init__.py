"""Configuration models for partialsum."""

from .checksum_config import ChecksumConfig
from .config import Config

__all__ = ["ChecksumConfig", "Config"]
