"""
Remote registry adapter - Implements RegistrationRepository protocol over HTTP.

Registrations are read from and posted to a JSON API exposing
`GET /users` and `POST /users`. The API may answer with a bare list or
with a `{"utilisateurs": [...]}` envelope, and its records may use a
generic user shape (`name`, `address.zipcode`, `address.city`) that is
mapped onto the registration fields.

Failure mapping:
- 400 with a JSON `message`  -> RegistrationRejected(message)
- >= 500 or transport error  -> RegistryUnavailable
- any other HTTP error       -> RegistrationError
"""

import logging
from typing import Any

import httpx

from src.domain.exceptions import RegistrationError, RegistrationRejected, RegistryUnavailable
from src.domain.registration import Registration

logger = logging.getLogger(__name__)

USERS_PATH = "/users"
DEFAULT_BIRTH_DATE = "1990-01-01"


def normalize_api_users(data: Any) -> list[Any]:
    """Extract the list of user records from an API payload."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("utilisateurs"), list):
        return data["utilisateurs"]
    return []


def _text(record: dict, *keys: str, default: str = "") -> str:
    """First non-empty string value among keys; other types count as missing."""
    for key in keys:
        value = record.get(key)
        if isinstance(value, str) and value:
            return value
    return default


def map_api_user(raw: Any) -> Registration:
    """
    Map an API user record onto a Registration.

    `name` is split on whitespace when `nom`/`prenom` are absent:
    first word is the surname, the rest the given name. Non-string
    values are ignored and fall back like missing ones.
    """
    if not isinstance(raw, dict):
        raw = {}
    address = raw.get("address") if isinstance(raw.get("address"), dict) else {}
    name_parts = _text(raw, "name").split()
    nom_from_name = name_parts[0] if name_parts else ""

    return Registration(
        nom=_text(raw, "nom", default=nom_from_name),
        prenom=_text(raw, "prenom", default=" ".join(name_parts[1:])),
        email=_text(raw, "email"),
        date_naissance=_text(raw, "dateNaissance", "date_naissance", default=DEFAULT_BIRTH_DATE),
        cp=_text(raw, "cp") or _text(address, "zipcode"),
        ville=_text(raw, "ville") or _text(address, "city"),
    )


class RemoteRegistrationRepository:
    """
    Implements RegistrationRepository protocol via httpx.

    Uses structural subtyping - no explicit inheritance from Protocol.
    The remote API owns uniqueness; add_registration never reports a
    duplicate itself.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize repository.

        Args:
            base_url: API root, e.g. https://api.example.com
            token: Optional bearer token sent on every request
            timeout: Request timeout in seconds
            client: Preconfigured client (tests inject a MockTransport)
        """
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = client or httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(timeout),
        )

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, USERS_PATH, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Remote registry unreachable: %s", e)
            raise RegistryUnavailable("Remote registry unreachable") from e

        if response.status_code >= 500:
            logger.warning("Remote registry error: HTTP %s", response.status_code)
            raise RegistryUnavailable(f"Remote registry returned {response.status_code}")
        return response

    def _fetch_users(self) -> list[Any]:
        response = self._request("GET")
        if response.is_error:
            raise RegistrationError(f"Remote registry returned {response.status_code}")
        try:
            payload = response.json()
        except ValueError:
            payload = None
        return normalize_api_users(payload)

    def list_registrations(self) -> list[Registration]:
        return [map_api_user(raw) for raw in self._fetch_users()]

    def add_registration(self, registration: Registration) -> bool:
        """POST the registration; camelCase birth date for the API."""
        body = registration.to_dict()
        body["dateNaissance"] = body.pop("date_naissance")
        response = self._request("POST", json=body)

        if response.status_code == 400:
            message = _error_message(response)
            if message:
                raise RegistrationRejected(message=message)
        if response.is_error:
            logger.warning("Remote registry refused registration: HTTP %s", response.status_code)
            raise RegistrationError("Erreur lors de l'inscription")
        return True

    def count_registrations(self) -> int:
        return len(self._fetch_users())


def _error_message(response: httpx.Response) -> str | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return None
