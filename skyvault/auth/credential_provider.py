"""
Credential resolution.

Turns an API key (from a string or an environment variable) into the auth
token and the set of endpoints the clients connect to.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import base64
import binascii
import json
import os

import jwt
from pydantic import BaseModel, ConfigDict, Field

from skyvault.client.exceptions import InvalidArgumentException

DEFAULT_API_KEY_ENV_VAR = "SKYVAULT_API_KEY"
DEFAULT_PORT = 443


class CredentialProvider(BaseModel):
    """
    Resolved credentials: bearer token plus control, cache and token endpoints.

    Example:
        ```python
        creds = CredentialProvider.from_environment_variable("SKYVAULT_API_KEY")
        local = creds.with_endpoints(cache_endpoint="localhost").with_insecure(port=9090)
        ```
    """

    model_config = ConfigDict(frozen=True)

    auth_token: str = Field(repr=False)
    control_endpoint: str
    cache_endpoint: str
    token_endpoint: str
    port: int = DEFAULT_PORT
    secure: bool = True

    @classmethod
    def from_string(cls, api_key: str, endpoint: str | None = None) -> "CredentialProvider":
        """
        Resolve credentials from an API key string.

        Args:
            api_key: API key; either a base64 encoded key carrying its endpoint or a JWT
            endpoint: Base endpoint, required for keys that do not embed one

        Returns:
            Resolved credential provider

        Raises:
            InvalidArgumentException: If the key cannot be parsed
        """
        if not api_key or not api_key.strip():
            raise InvalidArgumentException("API key must not be empty")

        api_key = api_key.strip()

        if endpoint:
            return cls._for_base_endpoint(api_key, endpoint)

        decoded = _decode_v1_key(api_key)
        if decoded is not None:
            return cls._for_base_endpoint(decoded["api_key"], decoded["endpoint"])

        try:
            claims = jwt.decode(api_key, options={"verify_signature": False})
        except jwt.PyJWTError as e:
            raise InvalidArgumentException(
                "Invalid API key; it is neither an encoded key nor a JWT"
            ) from e

        control_endpoint = claims.get("c")
        cache_endpoint = claims.get("cp")
        if not control_endpoint or not cache_endpoint:
            raise InvalidArgumentException(
                "Invalid API key; missing control or cache endpoint claims"
            )

        if cache_endpoint.startswith("cache."):
            token_endpoint = "token." + cache_endpoint[len("cache."):]
        else:
            token_endpoint = cache_endpoint

        return cls(
            auth_token=api_key,
            control_endpoint=control_endpoint,
            cache_endpoint=cache_endpoint,
            token_endpoint=token_endpoint,
        )

    @classmethod
    def from_environment_variable(
        cls,
        env_var_name: str = DEFAULT_API_KEY_ENV_VAR,
        endpoint: str | None = None,
    ) -> "CredentialProvider":
        """
        Resolve credentials from an environment variable holding the API key.

        Raises:
            InvalidArgumentException: If the variable is unset or empty
        """
        api_key = os.getenv(env_var_name)
        if not api_key:
            raise InvalidArgumentException(
                f"Missing required environment variable {env_var_name}"
            )
        return cls.from_string(api_key, endpoint=endpoint)

    @classmethod
    def _for_base_endpoint(cls, auth_token: str, endpoint: str) -> "CredentialProvider":
        return cls(
            auth_token=auth_token,
            control_endpoint=f"control.{endpoint}",
            cache_endpoint=f"cache.{endpoint}",
            token_endpoint=f"token.{endpoint}",
        )

    def with_endpoints(
        self,
        control_endpoint: str | None = None,
        cache_endpoint: str | None = None,
        token_endpoint: str | None = None,
    ) -> "CredentialProvider":
        """Return a copy with the given endpoints overridden."""
        update = {
            name: value
            for name, value in (
                ("control_endpoint", control_endpoint),
                ("cache_endpoint", cache_endpoint),
                ("token_endpoint", token_endpoint),
            )
            if value is not None
        }
        return self.model_copy(update=update)

    def with_insecure(self, port: int = DEFAULT_PORT) -> "CredentialProvider":
        """Return a copy that connects without TLS, e.g. to a local emulator."""
        return self.model_copy(update={"secure": False, "port": port})


def _decode_v1_key(api_key: str) -> dict[str, str] | None:
    """Decode a base64 ``{"endpoint", "api_key"}`` key; None if it is not one."""
    try:
        padded = api_key + "=" * (-len(api_key) % 4)
        payload = json.loads(base64.b64decode(padded, validate=True))
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None

    if not isinstance(payload, dict):
        return None
    if not payload.get("endpoint") or not payload.get("api_key"):
        return None
    return {"endpoint": payload["endpoint"], "api_key": payload["api_key"]}
