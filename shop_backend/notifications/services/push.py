# notifications/services/push.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Iterable, Protocol

import requests
from django.conf import settings
from django.utils.module_loading import import_string
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

logger = logging.getLogger(__name__)

FCM_BASE = "https://fcm.googleapis.com/v1/projects"
FCM_SCOPES = ["https://www.googleapis.com/auth/firebase.messaging"]
DEFAULT_GATEWAY = "notifications.services.push.LoggingPushGateway"


@dataclass
class PushResult:
    sent: int = 0
    failed: int = 0
    errors: list = field(default_factory=list)


class PushGateway(Protocol):
    def send(self, tokens: Iterable[str], title: str, body: str, data: dict | None = None) -> PushResult:
        ...


def _clean_tokens(tokens) -> list[str]:
    seen = []
    for t in tokens or []:
        t = (t or "").strip()
        if t and t not in seen:
            seen.append(t)
    return seen


def _stringify_data(data: dict | None) -> dict[str, str]:
    # FCM data payloads only carry string values
    return {str(k): "" if v is None else str(v) for k, v in (data or {}).items()}


class LoggingPushGateway:
    """
    Dev/test gateway: records the push in the log and reports success.
    """

    def send(self, tokens, title, body, data=None) -> PushResult:
        tokens = _clean_tokens(tokens)
        for token in tokens:
            logger.info(
                "Push (logged only)",
                extra={"token_suffix": token[-6:], "title": title},
            )
        return PushResult(sent=len(tokens))


def load_fcm_credentials(cfg: dict) -> service_account.Credentials:
    """
    Service account credentials scoped for FCM, from inline JSON or a key file.
    """
    raw = (cfg.get("SERVICE_ACCOUNT_JSON") or "").strip()
    path = (cfg.get("SERVICE_ACCOUNT_FILE") or "").strip()

    try:
        if raw:
            return service_account.Credentials.from_service_account_info(json.loads(raw), scopes=FCM_SCOPES)
        if path:
            return service_account.Credentials.from_service_account_file(path, scopes=FCM_SCOPES)
    except (GoogleAuthError, ValueError, OSError) as e:
        raise RuntimeError(f"FCM service account is invalid: {e}") from e

    raise RuntimeError(
        "FCM is not configured. Expected settings.FCM['SERVICE_ACCOUNT_JSON'] or ['SERVICE_ACCOUNT_FILE']."
    )


class FcmPushGateway:
    """
    Firebase Cloud Messaging HTTP v1.

    One request per device token (v1 has no multicast). A failing token is
    recorded in the result; it does not stop the remaining sends.

    Requests go through a google-auth AuthorizedSession built from a service
    account, so the OAuth2 bearer token is minted and refreshed as it expires.

    Config: settings.FCM = {"PROJECT_ID", "SERVICE_ACCOUNT_JSON",
    "SERVICE_ACCOUNT_FILE", "TIMEOUT_SECONDS"}. PROJECT_ID defaults to the
    service account's project.
    """

    def __init__(self, *, project_id: str | None = None, session=None, timeout=None):
        cfg = getattr(settings, "FCM", {}) or {}
        self.timeout = float(timeout or cfg.get("TIMEOUT_SECONDS") or 10)

        credentials = None
        if session is None:
            credentials = load_fcm_credentials(cfg)
            session = AuthorizedSession(credentials)
        self.session = session

        self.project_id = (
            project_id
            or cfg.get("PROJECT_ID")
            or getattr(credentials, "project_id", None)
            or ""
        ).strip()
        if not self.project_id:
            raise RuntimeError("FCM is not configured. Expected settings.FCM['PROJECT_ID'].")

    @property
    def url(self) -> str:
        return f"{FCM_BASE}/{self.project_id}/messages:send"

    def _post(self, payload: dict) -> dict:
        try:
            resp = self.session.post(self.url, json=payload, timeout=self.timeout)
        except (GoogleAuthError, requests.RequestException) as e:
            raise RuntimeError(f"FCM request failed: {e}") from e

        if resp.status_code >= 400:
            raise RuntimeError(f"FCM HTTPError: {resp.status_code} {resp.text[:300]}")

        try:
            return resp.json()
        except ValueError as e:
            raise RuntimeError(f"FCM returned non-JSON: {resp.text[:300]}") from e

    def send(self, tokens, title, body, data=None) -> PushResult:
        result = PushResult()
        payload_data = _stringify_data(data)

        for token in _clean_tokens(tokens):
            message = {
                "message": {
                    "token": token,
                    "notification": {"title": title, "body": body},
                }
            }
            if payload_data:
                message["message"]["data"] = payload_data

            try:
                self._post(message)
            except RuntimeError as exc:
                result.failed += 1
                result.errors.append(str(exc))
                logger.warning(
                    "FCM send failed",
                    extra={"token_suffix": token[-6:], "error": str(exc)},
                )
                continue

            result.sent += 1

        return result


def get_push_gateway() -> PushGateway:
    path = (getattr(settings, "PUSH_GATEWAY", "") or "").strip() or DEFAULT_GATEWAY
    return import_string(path)()
