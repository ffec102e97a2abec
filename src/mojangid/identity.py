import re
import uuid

# Minecraft account names: letters, digits and underscore, 2 to 16 long
_USERNAME_RE = re.compile(r"[A-Za-z0-9_]{2,16}")
_HEX = "[0-9a-fA-F]"
_CANONICAL_UUID_RE = re.compile(rf"{_HEX}{{8}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{12}}")
_COMPACT_UUID_RE = re.compile(rf"({_HEX}{{8}})({_HEX}{{4}})({_HEX}{{4}})({_HEX}{{4}})({_HEX}{{12}})")


def is_valid_username(username: object) -> bool:
    return isinstance(username, str) and _USERNAME_RE.fullmatch(username) is not None


def uuid_from_string(value: str, has_hyphens: bool) -> uuid.UUID:
    """Parse a UUID string, either canonical (8-4-4-4-12) or compact.

    Raises ValueError if the string is not a well-formed UUID of the given form.
    """
    if has_hyphens:
        if _CANONICAL_UUID_RE.fullmatch(value) is None:
            raise ValueError(f"Invalid UUID string: {value!r}")
        return uuid.UUID(value)

    match = _COMPACT_UUID_RE.fullmatch(value)
    if match is None:
        raise ValueError(f"Invalid compact UUID string: {value!r}")
    return uuid.UUID("-".join(match.groups()))


def uuid_to_compact(value: uuid.UUID) -> str:
    return value.hex
