"""Access token resolution and storage."""

from __future__ import annotations

from urllib.parse import quote_plus

from .config import AuthConfig, ConfigStore

TOKEN_ENV_VAR = "BUFFER_ACCESS_TOKEN"

MISSING_TOKEN_MESSAGE = (
    "No access token found. Provide one via:\n"
    "  1. --access-token flag\n"
    f"  2. {TOKEN_ENV_VAR} environment variable\n"
    "  3. buffer auth login"
)


def resolve_token(
    store: ConfigStore,
    flag_value: str | None = None,
    env_value: str | None = None,
) -> str | None:
    """Resolve the access token: flag, then environment, then config file.

    Buffer uses OAuth2 access tokens rather than API keys. The caller passes
    the environment value (see BufferSettings.access_token).
    """
    if flag_value:
        return flag_value
    if env_value:
        return env_value
    config = store.read()
    return config.auth.oauth_token if config.auth else None


def save_token(store: ConfigStore, token: str) -> None:
    """Save an access token to the config file."""
    config = store.read()
    auth = config.auth or AuthConfig()
    config.auth = auth.model_copy(update={"oauth_token": token})
    store.write(config)


def clear_auth(store: ConfigStore) -> None:
    """Remove stored credentials."""
    config = store.read()
    config.auth = None
    store.write(config)


def mask_token(text: str, token: str) -> str:
    """Replace the token in text (e.g. a URL, where it may be percent-encoded) with asterisks."""
    if not token:
        return text
    return text.replace(quote_plus(token), "***").replace(token, "***")
