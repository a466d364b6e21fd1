from __future__ import annotations

import base64
import json
import logging
import os
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlencode

from ..config import DEFAULT_CONFIG_FILE, REDDIT_AUTH_URL
from ..errors import AuthError, ConfigError
from .transport import Request, Transport


logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def _not_zero(key: str, is_non_zero: bool) -> str:
    if is_non_zero:
        return ""
    return f"No {key} present. "


@dataclass
class Credentials:
    """
    Script credentials for a Reddit developer account.

    The JSON keys used in the credential file are kept as they always were
    (note `clientID`) so existing files keep loading.
    """

    username: str = ""  # Reddit username of the developer account
    password: str = ""  # Password for the above user
    client_id: str = ""  # Client ID of the script app
    client_secret: str = ""  # Client secret of the script app
    user_agent: str = ""  # User-Agent sent with every request

    @classmethod
    def from_env(cls) -> Optional["Credentials"]:
        """
        Load credentials from environment variables.

        Expected variables:
        - REDDIT_USERNAME
        - REDDIT_PASSWORD
        - REDDIT_CLIENT_ID
        - REDDIT_CLIENT_SECRET
        - REDDIT_USER_AGENT

        Returns None if any required variable is missing.
        """
        username = os.getenv("REDDIT_USERNAME")
        password = os.getenv("REDDIT_PASSWORD")
        client_id = os.getenv("REDDIT_CLIENT_ID")
        client_secret = os.getenv("REDDIT_CLIENT_SECRET")
        user_agent = os.getenv("REDDIT_USER_AGENT")

        if not (username and password and client_id and client_secret and user_agent):
            return None

        return cls(
            username=username,
            password=password,
            client_id=client_id,
            client_secret=client_secret,
            user_agent=user_agent,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Credentials":
        return cls(
            username=data.get("username") or "",
            password=data.get("password") or "",
            client_id=data.get("clientID") or "",
            client_secret=data.get("client_secret") or "",
            user_agent=data.get("user_agent") or "",
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "username": self.username,
            "password": self.password,
            "clientID": self.client_id,
            "client_secret": self.client_secret,
            "user_agent": self.user_agent,
        }

    def missing(self) -> str:
        """Human readable list of empty fields, "" when complete."""
        return (
            _not_zero("username", self.username != "")
            + _not_zero("password", self.password != "")
            + _not_zero("client id", self.client_id != "")
            + _not_zero("client secret", self.client_secret != "")
            + _not_zero("user agent", self.user_agent != "")
        )


@dataclass
class AuthToken:
    """An OAuth token obtained for a script app."""

    expires: int = 0  # expiry as seconds since the unix epoch
    token: str = ""
    type: str = ""  # usually "bearer"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthToken":
        return cls(
            expires=int(data.get("expires") or 0),
            token=data.get("token") or "",
            type=data.get("type") or "",
        )

    def valid_at(self, now: float) -> bool:
        return self.token != "" and self.expires > now


@dataclass
class AuthConfig:
    """
    Credentials plus the current token.

    The credentials must be provided by the user of this library; calling
    `authenticate` then fills in `auth_token`. Use `save` to keep the token
    around between runs.
    """

    credentials: Credentials = field(default_factory=Credentials)
    auth_token: AuthToken = field(default_factory=AuthToken)

    def to_dict(self) -> Dict[str, Any]:
        return {"credentials": self.credentials.to_dict(), "token": asdict(self.auth_token)}

    def authorization(self) -> str:
        """Value of the Authorization header for API requests."""
        return f"{self.auth_token.type} {self.auth_token.token}"

    def save(self, path: str = DEFAULT_CONFIG_FILE) -> None:
        """
        Save in JSON format, readable by the owner only.

        `~` is expanded. No validation is performed prior to saving.
        """
        target = Path(os.path.expanduser(path))
        try:
            fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
            # The creation mode does not apply to a file that already existed.
            os.chmod(target, 0o600)
        except OSError as exc:
            raise ConfigError(f"failed to save auth token to {target}: {exc}") from exc

    def authenticate(
        self,
        transport: Transport,
        auth_url: str = REDDIT_AUTH_URL,
        clock: Clock = time.time,
    ) -> None:
        """
        Authenticate as a script app, following
        https://github.com/reddit/reddit/wiki/OAuth2-Quick-Start-Example

        Nothing is requested while the stored token is still valid.
        """
        if self.auth_token.valid_at(clock()):
            return
        self.auth_token = request_token(self.credentials, transport, auth_url, clock)


def load_auth_config(path: str = DEFAULT_CONFIG_FILE) -> AuthConfig:
    """
    Load and validate an AuthConfig stored as JSON.

    `~` is expanded to the home directory. Every credential field must be
    non-empty; all missing fields are reported at once.
    """
    source = Path(os.path.expanduser(path))
    try:
        with source.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise ConfigError(f"failed to read contents of {source}: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(f"failed to parse contents of {source} as json: {exc}") from exc

    if (
        not isinstance(data, dict)
        or not isinstance(data.get("credentials") or {}, dict)
        or not isinstance(data.get("token") or {}, dict)
    ):
        raise ConfigError(f"unexpected layout in {source}")

    try:
        cfg = AuthConfig(
            credentials=Credentials.from_dict(data.get("credentials") or {}),
            auth_token=AuthToken.from_dict(data.get("token") or {}),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"unexpected layout in {source}: {exc}") from exc

    missing = cfg.credentials.missing()
    if missing:
        raise ConfigError(missing.strip())
    return cfg


def request_token(
    credentials: Credentials,
    transport: Transport,
    auth_url: str = REDDIT_AUTH_URL,
    clock: Clock = time.time,
) -> AuthToken:
    """POST the password grant and turn the response into an AuthToken."""
    body = urlencode(
        {
            "grant_type": "password",
            "username": credentials.username,
            "password": credentials.password,
        }
    ).encode("utf-8")
    basic = base64.b64encode(
        f"{credentials.client_id}:{credentials.client_secret}".encode("utf-8")
    ).decode("ascii")

    request = Request(
        method="POST",
        url=auth_url,
        headers={
            "User-Agent": credentials.user_agent,
            "Authorization": f"Basic {basic}",
            "Content-Type": "application/x-www-form-urlencoded",
        },
        body=body,
    )

    auth_time = clock()
    logger.debug("Requesting script token for %s", credentials.username)
    data = transport.perform(request)

    try:
        payload = json.loads(data)
    except ValueError as exc:
        raise AuthError(f"invalid token response: {exc}: {data!r}") from exc
    if not isinstance(payload, dict):
        raise AuthError(f"invalid token response: {data!r}")

    token = payload.get("access_token") or ""
    expires_in = payload.get("expires_in") or 0
    token_type = payload.get("token_type") or ""

    missing = (
        _not_zero("token", token != "")
        + _not_zero("expiration", expires_in != 0)
        + _not_zero("token type", token_type != "")
    )
    if missing:
        raise AuthError(f"incomplete token response: {missing.strip()}")
    if not isinstance(expires_in, int) or isinstance(expires_in, bool):
        raise AuthError(f"invalid token response: {data!r}")

    logger.info("Obtained %s token, expires in %ss", token_type, expires_in)
    return AuthToken(
        expires=int(auth_time) + int(expires_in),
        token=token,
        type=token_type,
    )
