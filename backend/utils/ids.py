from typing import Optional, Union

# Largest value an Integer primary key column can hold
MAX_ID = 2**31 - 1


def parse_id(value: Union[int, str, None]) -> Optional[int]:
    """
    Turn a path/body id into a primary key.

    Malformed ids return None so callers treat them exactly like unknown ids.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        parsed = value
    else:
        value = str(value).strip()
        # isdigit() alone also accepts characters like "²" that int() rejects
        if not (value.isascii() and value.isdigit()):
            return None
        parsed = int(value)
    return parsed if 0 < parsed <= MAX_ID else None
