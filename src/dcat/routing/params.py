"""Path parameter converters.

Built-in converters for route path segments like ``{id:int}``, used when
building URLs to check that a supplied value fits its segment.
"""

import re

from dcat.errors import ConfigurationError

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}


def format_param(name: str, value: object, param_type: str) -> str:
    """Render *value* for a ``{name:param_type}`` segment.

    Raises ``ConfigurationError`` if the type is unknown or the rendered
    value does not match the converter pattern.
    """
    try:
        pattern, _ = CONVERTERS[param_type]
    except KeyError:
        msg = f"Unknown path converter {param_type!r} for parameter {name!r}."
        raise ConfigurationError(msg) from None

    rendered = str(value)
    if not re.fullmatch(pattern, rendered):
        msg = f"Value {rendered!r} does not match {{{name}:{param_type}}}."
        raise ConfigurationError(msg)
    return rendered
