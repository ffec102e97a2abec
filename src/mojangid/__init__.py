from mojangid.config import Settings
from mojangid.errors import (
    BadStatusError,
    InvalidArgumentError,
    InvalidUsernameError,
    MojangAPIError,
    MojangIdError,
    ParseError,
    TransportError,
)
from mojangid.identity import is_valid_username, uuid_from_string, uuid_to_compact
from mojangid.resolver import (
    MAX_NAMES_PER_REQUEST,
    AsyncMojangClient,
    MojangClient,
    request_username_for_uuid,
    request_uuid_for_username,
)
from mojangid.schemas.profile import NameChange, Profile

__all__ = [
    "AsyncMojangClient",
    "BadStatusError",
    "InvalidArgumentError",
    "InvalidUsernameError",
    "MAX_NAMES_PER_REQUEST",
    "MojangAPIError",
    "MojangClient",
    "MojangIdError",
    "NameChange",
    "ParseError",
    "Profile",
    "Settings",
    "TransportError",
    "is_valid_username",
    "request_username_for_uuid",
    "request_uuid_for_username",
    "uuid_from_string",
    "uuid_to_compact",
]
