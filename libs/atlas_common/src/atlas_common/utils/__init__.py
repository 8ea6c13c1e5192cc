"""Utility helpers shared across the country atlas."""

from .flag_utils import PLACEHOLDER_FLAG, flag_emoji
from .id_generation import generate_ulid

__all__ = ["PLACEHOLDER_FLAG", "flag_emoji", "generate_ulid"]
