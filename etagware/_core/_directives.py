from __future__ import annotations

from typing import Dict, Union

DirectiveValue = Union[bool, int]


class CacheControlBuilder:
    """
    Fluent builder for ``Cache-Control`` response headers.

    Directives are rendered in the order they were first set. ``public`` and
    ``private`` exclude each other: setting one removes the other.

    Supported Directives:
    - public, private [RFC9111, Section 5.2.2.9, 5.2.2.7]
    - no-cache, no-store [RFC9111, Section 5.2.2.4, 5.2.2.5]
    - max-age, s-maxage [RFC9111, Section 5.2.2.1, 5.2.2.10]
    - must-revalidate, proxy-revalidate [RFC9111, Section 5.2.2.2, 5.2.2.8]
    - no-transform [RFC9111, Section 5.2.2.6]
    - immutable [RFC8246]
    - stale-while-revalidate, stale-if-error [RFC5861]

    Numeric arguments are not validated; passing a negative value is the
    caller's problem.

    Examples:
        >>> CacheControlBuilder.create().public().max_age(31536000).immutable().render()
        'public, max-age=31536000, immutable'
    """

    def __init__(self) -> None:
        self._directives: Dict[str, DirectiveValue] = {}

    @classmethod
    def create(cls) -> "CacheControlBuilder":
        return cls()

    def public(self) -> "CacheControlBuilder":
        self._directives["public"] = True
        self._directives.pop("private", None)
        return self

    def private(self) -> "CacheControlBuilder":
        self._directives["private"] = True
        self._directives.pop("public", None)
        return self

    def no_cache(self) -> "CacheControlBuilder":
        self._directives["no-cache"] = True
        return self

    def no_store(self) -> "CacheControlBuilder":
        self._directives["no-store"] = True
        return self

    def max_age(self, seconds: int) -> "CacheControlBuilder":
        self._directives["max-age"] = seconds
        return self

    def s_maxage(self, seconds: int) -> "CacheControlBuilder":
        self._directives["s-maxage"] = seconds
        return self

    def must_revalidate(self) -> "CacheControlBuilder":
        self._directives["must-revalidate"] = True
        return self

    def proxy_revalidate(self) -> "CacheControlBuilder":
        self._directives["proxy-revalidate"] = True
        return self

    def no_transform(self) -> "CacheControlBuilder":
        self._directives["no-transform"] = True
        return self

    def immutable(self) -> "CacheControlBuilder":
        self._directives["immutable"] = True
        return self

    def stale_while_revalidate(self, seconds: int) -> "CacheControlBuilder":
        self._directives["stale-while-revalidate"] = seconds
        return self

    def stale_if_error(self, seconds: int) -> "CacheControlBuilder":
        self._directives["stale-if-error"] = seconds
        return self

    def render(self) -> str:
        parts = []
        for name, value in self._directives.items():
            # bool is an int subclass, so the flag check must come first
            if value is True:
                parts.append(name)
            else:
                parts.append(f"{name}={value}")
        return ", ".join(parts)

    def to_dict(self) -> Dict[str, DirectiveValue]:
        return dict(self._directives)

    def copy(self) -> "CacheControlBuilder":
        builder = CacheControlBuilder()
        builder._directives = dict(self._directives)
        return builder

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"CacheControlBuilder({self.render()!r})"

    def __bool__(self) -> bool:
        return bool(self._directives)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CacheControlBuilder) and list(self._directives.items()) == list(
            other._directives.items()
        )
