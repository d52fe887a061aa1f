"""Validated transport options."""

from .base import Option, OptionBool, OptionFile, OptionInt, OptionRegex
from .registry import OptionRegistry, OptionSet, VERSION

__all__ = [
    "Option", "OptionBool", "OptionFile", "OptionInt", "OptionRegex",
    "OptionRegistry", "OptionSet", "VERSION",
]
