from __future__ import annotations
from typing import Any, Callable, Dict, Iterator, List, Mapping

from .base import Option, OptionBool, OptionFile, OptionInt, OptionRegex
from ..core.model import OptionError

VERSION = "0.1.0"

OptionFactory = Callable[[], Option]


def _canonical(name: str) -> str:
    return name.strip().lower().replace("-", "_")


class OptionRegistry:
    def __init__(self) -> None:
        self._factories: Dict[str, OptionFactory] = {}
        self._aliases: Dict[str, str] = {}

    def register(self, name: str, factory: OptionFactory, *aliases: str) -> None:
        key = _canonical(name)
        self._factories[key] = factory
        self._aliases[key] = key
        for alias in aliases:
            self._aliases[_canonical(alias)] = key

    def resolve(self, name: str) -> str:
        try:
            return self._aliases[_canonical(name)]
        except KeyError:
            raise OptionError(f'"{name}" is not a supported option') from None

    def build(self, name: str) -> Option:
        return self._factories[self.resolve(name)]()

    def names(self) -> List[str]:
        return sorted(self._factories)


def _regex(name: str, regex: str, message: str, default: str = "") -> OptionFactory:
    def factory() -> Option:
        option = OptionRegex(name, regex, message)
        if default:
            option.value = default
        return option
    return factory


# singleton used project-wide
_REGISTRY = OptionRegistry()

_REGISTRY.register("timeout", lambda: OptionInt("timeout", 30), "read_timeout")
_REGISTRY.register("connect_timeout", lambda: OptionInt("connect_timeout", 10))
_REGISTRY.register("follow_location", lambda: OptionBool("follow_location", True), "follow_redirects", "location")
_REGISTRY.register("max_redirects", lambda: OptionInt("max_redirects", 10), "max_redirs")
_REGISTRY.register("verify_ssl", lambda: OptionBool("verify_ssl", True), "verify", "ssl_verifypeer")
_REGISTRY.register("ca_file", lambda: OptionFile("ca_file"), "cainfo")
_REGISTRY.register("cert_file", lambda: OptionFile("cert_file"), "sslcert")
_REGISTRY.register("key_file", lambda: OptionFile("key_file"), "sslkey")
_REGISTRY.register("cookie_file", lambda: OptionFile("cookie_file"), "cookiefile")
_REGISTRY.register(
    "user_agent",
    _regex("user_agent", r"^\S.*$", '"%s" is not a valid user agent', f"spiral/{VERSION}"),
    "useragent",
)
_REGISTRY.register(
    "proxy",
    _regex("proxy", r"^(https?|socks5h?)://\S+$", '"%s" is not a valid proxy URL'),
)
_REGISTRY.register(
    "auth",
    _regex("auth", r"^[^:\s]+:\S*$", '"%s" is not a valid user:password pair'),
    "userpwd",
)
_REGISTRY.register(
    "http_version",
    _regex("http_version", r"^(1\.0|1\.1|2)$", '"%s" is not a supported HTTP version', "1.1"),
)


class OptionSet(Mapping[str, Any]):
    """Validated transport options keyed by canonical option name.

    Every known option is present with its default; assigning a value runs
    it through the option's validation and raises OptionError on failure.
    Names are case-insensitive and accept dashes for underscores.
    """

    def __init__(self, values: Mapping[str, Any] | None = None, *, registry: OptionRegistry | None = None):
        self._registry = registry or _REGISTRY
        self._options: Dict[str, Option] = {name: self._registry.build(name) for name in self._registry.names()}
        if values:
            self.update(values)

    def __getitem__(self, name: str) -> Any:
        return self._options[self._registry.resolve(name)].value

    def __setitem__(self, name: str, value: Any) -> None:
        self._options[self._registry.resolve(name)].value = value

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        try:
            self._registry.resolve(name)
        except OptionError:
            return False
        return True

    def __iter__(self) -> Iterator[str]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self) -> str:
        return f"OptionSet({dict(self)!r})"

    def option(self, name: str) -> Option:
        """Return the Option object behind `name`."""
        return self._options[self._registry.resolve(name)]

    def update(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            self[name] = value

    @classmethod
    def from_pairs(cls, pairs: List[str]) -> "OptionSet":
        """Build from ``name=value`` strings as given on the command line."""
        options = cls()
        for pair in pairs:
            name, sep, value = pair.partition("=")
            if not sep:
                raise OptionError(f'"{pair}" is not a name=value pair')
            options[name] = value
        return options
