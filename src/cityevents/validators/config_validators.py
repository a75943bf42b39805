"""
Normalizers applied to raw environment values before Settings validates them.

Values from `.env` files often carry stray whitespace or the wrong case
(`LOG_LEVEL= debug `); the Literal checks on Settings only see the cleaned value.
"""


def _clean(value):
    if value is None or not isinstance(value, str):
        return value
    return value.strip()


def to_uppercase(value: str | None) -> str | None:
    value = _clean(value)
    return value.upper() if isinstance(value, str) else value


def to_lowercase(value: str | None) -> str | None:
    value = _clean(value)
    return value.lower() if isinstance(value, str) else value
