"""Self-validating option values."""

from __future__ import annotations

import os
import re
from typing import Any

from ..core.model import OptionError

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


class Option:
    """Option value holder. Subclasses validate in `validate`."""

    def __init__(self, name: str, default: Any = None):
        self.name = name
        self._value = default

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, value={self._value!r})"

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        self._value = self.validate(value)

    def validate(self, value: Any) -> Any:
        """Return the normalised value or raise OptionError."""
        return value


class OptionBool(Option):
    """Boolean option; accepts bools and the usual on/off spellings."""

    def __init__(self, name: str, default: bool = False):
        super().__init__(name, bool(default))

    def validate(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return value != 0
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise OptionError(f'"{value}" is not a valid boolean for {self.name}')


class OptionInt(Option):
    """Integer option with a lower bound."""

    def __init__(self, name: str, default: int = 0, minimum: int = 0):
        super().__init__(name, default)
        self.minimum = minimum

    def validate(self, value: Any) -> int:
        if isinstance(value, bool):
            raise OptionError(f'"{value}" is not a valid integer for {self.name}')
        try:
            number = int(str(value).strip()) if isinstance(value, str) else int(value)
        except (TypeError, ValueError):
            raise OptionError(f'"{value}" is not a valid integer for {self.name}')
        if isinstance(value, float) and number != value:
            raise OptionError(f'"{value}" is not a valid integer for {self.name}')
        if number < self.minimum:
            raise OptionError(f"{self.name} must be >= {self.minimum}, got {number}")
        return number


class OptionRegex(Option):
    """String option that must match a regular expression.

    Values are stripped before matching. The failure message is a
    %-format string receiving the offending value.
    """

    def __init__(self, name: str, regex: str = r"^$", message: str = '"%s" is not a valid value'):
        super().__init__(name, "")
        self.regex = regex
        self.message = message

    def set_regex(self, regex: str) -> None:
        self.regex = regex

    def set_message(self, message: str) -> None:
        self.message = message

    def validate(self, value: Any) -> str:
        value = str(value).strip()
        if not re.search(self.regex, value):
            raise OptionError(self.message % value)
        return value


class OptionFile(Option):
    """Path option that must point at a readable regular file.

    An empty value means unset.
    """

    def __init__(self, name: str):
        super().__init__(name, "")

    def validate(self, value: Any) -> str:
        path = os.fspath(value) if isinstance(value, os.PathLike) else str(value).strip()
        if not path:
            return ""
        if not (os.path.isfile(path) and os.access(path, os.R_OK)):
            raise OptionError(f'"{path}" file is not accessible')
        return path
