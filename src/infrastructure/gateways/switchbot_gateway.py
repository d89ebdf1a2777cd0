"""SwitchBot cloud gateway implementation - Infrastructure layer."""

from __future__ import annotations

import asyncio
import base64
import hashlib
import hmac
import time
import uuid
from typing import Any, Dict, List, Optional

import httpx

from src.domain.entities.device import CommandPayload, DeviceListing, Scene
from src.domain.entities.errors import (
    AuthenticationFailedError,
    ForbiddenError,
    InvalidRequestError,
    MalformedResponseError,
    ProviderApiError,
    ProviderError,
    ProviderNetworkError,
    RateLimitedError,
    RequestTimeoutError,
)
from src.domain.gateways.switchbot_gateway import ISwitchBotGateway
from src.shared import get_logger
from src.shared.consts import PROVIDER_SUCCESS_CODE, SWITCHBOT_API_URL

logger = get_logger(__name__)


def sign_request(token: str, secret: str, timestamp: str, nonce: str) -> str:
    """HMAC-SHA256 over ``token + t + nonce``, base64 encoded and upper-cased."""
    digest = hmac.new(
        secret.encode("utf-8"),
        f"{token}{timestamp}{nonce}".encode("utf-8"),
        hashlib.sha256,
    ).digest()
    return base64.b64encode(digest).decode("ascii").upper()


class SwitchBotGateway(ISwitchBotGateway):
    """HTTP client for the SwitchBot API v1.1."""

    def __init__(
        self,
        token: str,
        secret: str,
        base_url: str = SWITCHBOT_API_URL,
        timeout: float = 10.0,
    ):
        """
        Initialize the SwitchBot gateway.

        Args:
            token: Long-lived open token from the SwitchBot app
            secret: Client secret paired with the token
            base_url: API root, without trailing slash
            timeout: Per-request timeout in seconds
        """
        self.token = token
        self.secret = secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def auth_headers(self) -> Dict[str, str]:
        """Build a fresh set of signed headers. Never reuse the result."""
        timestamp = str(int(time.time() * 1000))
        nonce = str(uuid.uuid4())
        signature = sign_request(self.token, self.secret, timestamp, nonce)

        logger.debug(
            "switchbot.request.signed",
            token=self.token,
            sign=signature,
            t=timestamp,
            nonce=nonce,
        )

        return {
            "Authorization": self.token,
            "sign": signature,
            "t": timestamp,
            "nonce": nonce,
            "Content-Type": "application/json; charset=utf8",
        }

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Perform one signed call and validate both status layers.

        Args:
            method: HTTP method
            path: Path below the API root, starting with ``/``
            body: Optional JSON body

        Returns:
            The decoded provider envelope (``statusCode``, ``message``, ``body``)

        Raises:
            ProviderError: Classified failure, see ``ErrorKind``
        """
        url = f"{self.base_url}{path}"
        logger.debug("switchbot.request", method=method, url=url, body=body)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                # httpx limits each phase; the whole exchange is bounded here
                response = await asyncio.wait_for(
                    client.request(method, url, headers=self.auth_headers(), json=body),
                    timeout=self.timeout,
                )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning("switchbot.request.timeout", url=url, error=str(e))
            raise RequestTimeoutError(
                "Request timeout: SwitchBot API did not respond in time"
            ) from e
        except httpx.RequestError as e:
            logger.warning("switchbot.request.network_error", url=url, error=str(e))
            raise ProviderNetworkError(f"Network error: {str(e)}") from e

        payload = self._decode(response)

        if not response.is_success:
            raise self._status_error(response.status_code, payload, url)

        if not isinstance(payload, dict) or "statusCode" not in payload:
            logger.error(
                "switchbot.response.malformed",
                url=url,
                status_code=response.status_code,
            )
            raise MalformedResponseError(
                "SwitchBot API response has no statusCode",
                status_code=response.status_code,
            )

        if payload["statusCode"] != PROVIDER_SUCCESS_CODE:
            message = payload.get("message") or "unknown error"
            logger.error(
                "switchbot.response.logical_error",
                url=url,
                provider_status=payload["statusCode"],
                message=message,
            )
            raise ProviderApiError(
                f"API returned status code {payload['statusCode']}: {message}",
                status_code=response.status_code,
                provider_status=payload["statusCode"],
            )

        return payload

    async def get_devices(self) -> DeviceListing:
        logger.debug("switchbot.devices.request")
        body = self._body(await self.request("GET", "/devices"), "/devices")

        physical = body.get("deviceList")
        infrared = body.get("infraredRemoteList")
        if not isinstance(physical, list) or not isinstance(infrared, list):
            raise MalformedResponseError(
                "Invalid response from SwitchBot API - missing device data"
            )

        listing = DeviceListing(
            physical=tuple(item for item in physical if isinstance(item, dict)),
            infrared=tuple(item for item in infrared if isinstance(item, dict)),
        )
        logger.info(
            "switchbot.devices.response",
            physical=len(listing.physical),
            infrared=len(listing.infrared),
        )
        return listing

    async def get_device_status(self, device_id: str) -> Dict[str, Any]:
        path = f"/devices/{device_id}/status"
        logger.debug("switchbot.status.request", device_id=device_id)
        return self._body(await self.request("GET", path), path)

    async def send_command(
        self, device_id: str, payload: CommandPayload
    ) -> Dict[str, Any]:
        body = payload.to_body()
        logger.info("switchbot.command.request", device_id=device_id, body=body)
        return await self.request("POST", f"/devices/{device_id}/commands", body)

    async def get_scenes(self) -> List[Scene]:
        envelope = await self.request("GET", "/scenes")
        items = envelope.get("body")
        if not isinstance(items, list):
            raise MalformedResponseError("Invalid response from SwitchBot API - scenes")
        return [
            Scene(
                scene_id=str(item.get("sceneId", "")),
                scene_name=str(item.get("sceneName", "")),
            )
            for item in items
            if isinstance(item, dict)
        ]

    async def execute_scene(self, scene_id: str) -> Dict[str, Any]:
        logger.info("switchbot.scene.execute", scene_id=scene_id)
        return await self.request("POST", f"/scenes/{scene_id}/execute")

    def _decode(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            if response.is_success:
                raise MalformedResponseError(
                    "SwitchBot API returned a non-JSON body",
                    status_code=response.status_code,
                )
            return None

    def _body(self, envelope: Dict[str, Any], path: str) -> Dict[str, Any]:
        body = envelope.get("body")
        if body is None:
            return {}
        if not isinstance(body, dict):
            raise MalformedResponseError(
                f"Unexpected body type for {path}: {type(body).__name__}"
            )
        return body

    def _status_error(self, status_code: int, payload: Any, url: str) -> ProviderError:
        message = ""
        if isinstance(payload, dict):
            message = str(payload.get("message") or "")
        message = message or f"HTTP {status_code} error"

        logger.error(
            "switchbot.response.http_error",
            url=url,
            status_code=status_code,
            message=message,
        )

        if status_code == httpx.codes.UNAUTHORIZED:
            return AuthenticationFailedError()
        if status_code == httpx.codes.FORBIDDEN:
            return ForbiddenError()
        if status_code == httpx.codes.TOO_MANY_REQUESTS:
            return RateLimitedError()
        if status_code == httpx.codes.UNPROCESSABLE_ENTITY:
            return InvalidRequestError()
        return ProviderApiError(f"API error: {message}", status_code=status_code)
