import base64
import logging
import httpx
from owncast_ntfy.config import Settings
from owncast_ntfy.errors import NotificationError
from owncast_ntfy.models import NtfyNotification

USER_AGENT = "owncast-ntfy/0.1.0"

log = logging.getLogger(__name__)


class NtfyClient:
    def __init__(
        self,
        server_url: str,
        basic_auth: str | None = None,
        allow_insecure: bool = False,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.server_url = server_url
        self.basic_auth = basic_auth
        if allow_insecure:
            log.warning("TLS certificate verification towards %s is disabled", server_url)
        self._client = httpx.AsyncClient(
            timeout=timeout, verify=not allow_insecure, transport=transport
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "NtfyClient":
        return cls(
            settings.ntfy_server_url,
            basic_auth=settings.ntfy_basic_auth,
            allow_insecure=settings.allow_insecure,
            timeout=settings.ntfy_timeout,
            **kwargs,
        )

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Markdown": "yes",
            "User-Agent": USER_AGENT,
        }
        if self.basic_auth:
            token = base64.b64encode(self.basic_auth.encode("utf-8")).decode("ascii")
            headers["Authorization"] = f"Basic {token}"
        return headers

    async def send(self, notification: NtfyNotification) -> None:
        """POST one notification; anything but a 200 reply raises NotificationError."""
        payload = notification.to_payload()
        log.info("Sending notification to ntfy topic %s", notification.topic)
        log.debug("ntfy payload: %s", payload)
        try:
            r = await self._client.post(self.server_url, headers=self._headers(), json=payload)
        except httpx.HTTPError as e:
            raise NotificationError(f"could not reach ntfy at {self.server_url}: {e}") from e
        if r.status_code != httpx.codes.OK:
            raise NotificationError(
                f"ntfy returned status code {r.status_code}", status_code=r.status_code
            )
        log.info("Notification sent to ntfy")

    async def close(self):
        await self._client.aclose()
