from __future__ import annotations

import typing as tp

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


def parse_bool(value: tp.Union[str, bool]) -> bool:
    """
    Parse a boolean flag coming from configuration or the environment.

    Examples:
        >>> parse_bool("Yes")
        True
        >>> parse_bool("off")
        False
    """
    if isinstance(value, bool):
        return value
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def filter_pairs(
    pairs: tp.Iterable[tp.Tuple[str, str]], names_to_exclude: tp.Iterable[str]
) -> tp.List[tp.Tuple[str, str]]:
    """
    Drop header pairs whose name is in ``names_to_exclude`` (case-insensitive).

    Example:
    ```python
        filter_pairs([("Content-Length", "3"), ("ETag", '"x"')], ["content-length"])
        # [("ETag", '"x"')]
    ```
    """
    exclude_set = {name.lower() for name in names_to_exclude}
    return [(name, value) for name, value in pairs if name.lower() not in exclude_set]
