import uuid
from collections.abc import Iterable
from typing import Any

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from mojangid.config import Settings, settings
from mojangid.errors import InvalidArgumentError, InvalidUsernameError, ParseError
from mojangid.identity import is_valid_username, uuid_from_string, uuid_to_compact
from mojangid.schemas.profile import NameChange, Profile
from mojangid.transport import (
    aget_json,
    apost_json,
    build_async_client,
    build_client,
    get_json,
    post_json,
)

log = structlog.get_logger()

# Upper bound the profiles endpoint accepts in a single POST
MAX_NAMES_PER_REQUEST = 10

_profile_objects = TypeAdapter(list[dict[str, Any]])
_name_history = TypeAdapter(list[NameChange])


def profiles_url(config: Settings) -> str:
    return f"{config.api_base_url}/profiles/minecraft"


def name_history_url(config: Settings, player_id: uuid.UUID) -> str:
    return f"{config.api_base_url}/user/profiles/{uuid_to_compact(player_id)}/names"


def _validate_username(username: str) -> None:
    if not is_valid_username(username):
        raise InvalidUsernameError(username)


def _validate_usernames(usernames: Iterable[str]) -> list[str]:
    names = list(usernames)
    if len(names) > MAX_NAMES_PER_REQUEST:
        raise InvalidArgumentError(
            f"At most {MAX_NAMES_PER_REQUEST} usernames per request, got {len(names)}"
        )
    for name in names:
        _validate_username(name)
    return names


def _coerce_uuid(player_id: uuid.UUID | str) -> uuid.UUID:
    if isinstance(player_id, uuid.UUID):
        return player_id
    try:
        return uuid.UUID(str(player_id))
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid UUID '{player_id}'") from e


def _profile_uuid(entry: dict[str, Any], url: str) -> tuple[Profile, uuid.UUID]:
    try:
        profile = Profile.model_validate(entry)
        return profile, uuid_from_string(profile.id, has_hyphens=False)
    except (ValidationError, ValueError) as e:
        log.error("mojang_parse_error", url=url, error=str(e))
        raise ParseError(url, f"bad profile {entry!r}") from e


def decode_profiles(data: Any, url: str) -> list[dict[str, Any]]:
    """Check the profiles body is an array of objects. None (absent) yields []."""
    if data is None:
        return []
    try:
        return _profile_objects.validate_python(data)
    except ValidationError as e:
        log.error("mojang_parse_error", url=url, error=str(e))
        raise ParseError(url, "expected an array of profile objects") from e


def decode_profile_lookup(data: Any, url: str) -> uuid.UUID | None:
    """Extract the UUID from a single-name profile lookup.

    Only a one-element array whose object carries ``id`` is a hit; an empty
    array, several elements or a missing ``id`` count as a miss.
    """
    profiles = decode_profiles(data, url)
    if len(profiles) != 1 or "id" not in profiles[0]:
        return None
    _, player_id = _profile_uuid(profiles[0], url)
    return player_id


def decode_many_profiles(data: Any, url: str) -> dict[str, uuid.UUID]:
    found: dict[str, uuid.UUID] = {}
    for entry in decode_profiles(data, url):
        if "id" not in entry or entry.get("name") is None:
            continue
        profile, player_id = _profile_uuid(entry, url)
        found[profile.name] = player_id
    return found


def decode_name_history(data: Any, url: str) -> list[NameChange] | None:
    if data is None:
        return None
    try:
        return _name_history.validate_python(data)
    except ValidationError as e:
        log.error("mojang_parse_error", url=url, error=str(e))
        raise ParseError(url, "expected an array of name change records") from e


def latest_name(history: Iterable[NameChange]) -> str | None:
    """Name with the strictly greatest change time; ties keep the earlier record."""
    latest: NameChange | None = None
    for change in history:
        if latest is None or change.changed_to_at > latest.changed_to_at:
            latest = change
    return latest.name if latest is not None else None


class MojangClient:
    """Blocking Mojang identity lookups.

    Holds no per-lookup state. Without an injected ``http_client`` every
    call opens and closes its own connection, so one instance can be shared
    across threads.
    """

    def __init__(
        self,
        config: Settings | None = None,
        http_client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or settings
        self._http = http_client
        self._transport = transport

    def _get(self, url: str) -> Any:
        if self._http is not None:
            return get_json(self._http, url)
        with build_client(self._config, self._transport) as http:
            return get_json(http, url)

    def _post(self, url: str, payload: Any) -> Any:
        if self._http is not None:
            return post_json(self._http, url, payload)
        with build_client(self._config, self._transport) as http:
            return post_json(http, url, payload)

    def uuid_for_username(self, username: str) -> uuid.UUID | None:
        """UUID of the player currently using ``username``, or None if nobody does."""
        _validate_username(username)
        url = profiles_url(self._config)
        return decode_profile_lookup(self._post(url, [username]), url)

    def uuids_for_usernames(self, usernames: Iterable[str]) -> dict[str, uuid.UUID]:
        """Resolve up to ten names in one request, keyed by upstream's spelling."""
        names = _validate_usernames(usernames)
        if not names:
            return {}
        url = profiles_url(self._config)
        return decode_many_profiles(self._post(url, names), url)

    def name_history(self, player_id: uuid.UUID | str) -> list[NameChange] | None:
        url = name_history_url(self._config, _coerce_uuid(player_id))
        return decode_name_history(self._get(url), url)

    def username_for_uuid(self, player_id: uuid.UUID | str) -> str | None:
        """Latest name of the player, or None if the UUID is unknown."""
        history = self.name_history(player_id)
        if history is None:
            return None
        return latest_name(history)


class AsyncMojangClient:
    """asyncio counterpart of MojangClient with the same lookups and semantics."""

    def __init__(
        self,
        config: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or settings
        self._http = http_client
        self._transport = transport

    async def _get(self, url: str) -> Any:
        if self._http is not None:
            return await aget_json(self._http, url)
        async with build_async_client(self._config, self._transport) as http:
            return await aget_json(http, url)

    async def _post(self, url: str, payload: Any) -> Any:
        if self._http is not None:
            return await apost_json(self._http, url, payload)
        async with build_async_client(self._config, self._transport) as http:
            return await apost_json(http, url, payload)

    async def uuid_for_username(self, username: str) -> uuid.UUID | None:
        _validate_username(username)
        url = profiles_url(self._config)
        return decode_profile_lookup(await self._post(url, [username]), url)

    async def uuids_for_usernames(self, usernames: Iterable[str]) -> dict[str, uuid.UUID]:
        names = _validate_usernames(usernames)
        if not names:
            return {}
        url = profiles_url(self._config)
        return decode_many_profiles(await self._post(url, names), url)

    async def name_history(self, player_id: uuid.UUID | str) -> list[NameChange] | None:
        url = name_history_url(self._config, _coerce_uuid(player_id))
        return decode_name_history(await self._get(url), url)

    async def username_for_uuid(self, player_id: uuid.UUID | str) -> str | None:
        history = await self.name_history(player_id)
        if history is None:
            return None
        return latest_name(history)


def request_uuid_for_username(username: str) -> uuid.UUID | None:
    return MojangClient().uuid_for_username(username)


def request_username_for_uuid(player_id: uuid.UUID | str) -> str | None:
    return MojangClient().username_for_uuid(player_id)
