"""APRS-IS HTTP submission client.

Sends login+packet envelopes to an APRS-IS server's HTTP port (usually
8080). Delivery is one-shot: a failed send is reported, never retried.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

import aiohttp

from gwaprs import constants
from gwaprs.config import BridgeConfig
from gwaprs.utils import print_debug, print_info


class APRSISClient:
    """Client for the APRS-IS HTTP submission interface.

    Example:
        client = APRSISClient.from_config(config)
        await client.send(envelope)
    """

    def __init__(self, host: str, port: int, timeout: int = constants.DELIVERY_TIMEOUT):
        """Initialize APRS-IS client.

        Args:
            host: APRS-IS server hostname
            port: HTTP submission port
            timeout: Request timeout in seconds (default: 10)
        """
        self.host = host
        self.port = port
        self.timeout = timeout
        self.endpoint = f"http://{host}:{port}/"
        self._last_send: Optional[datetime] = None

    @classmethod
    def from_config(cls, config: BridgeConfig) -> "APRSISClient":
        return cls(config.server_host, config.server_port)

    async def send(self, envelope: str) -> int:
        """POST an envelope to the APRS-IS server.

        Args:
            envelope: Login line and packet, newline terminated

        Returns:
            HTTP status returned by the server

        Raises:
            ConnectionError: If the server is unreachable or rejects the post
        """
        print_debug(f"APRS-IS envelope for {self.endpoint}:\n{envelope}", level=2)

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self.endpoint,
                    data=envelope.encode("utf-8"),
                    headers={"Content-Type": constants.APRS_IS_CONTENT_TYPE},
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    status = response.status
                    if not (200 <= status < 300):
                        raise ConnectionError(
                            f"APRS-IS server returned HTTP {status}"
                        )
        except aiohttp.ClientError as e:
            raise ConnectionError(f"Failed to connect to {self.endpoint}: {e}")
        except asyncio.TimeoutError:
            raise ConnectionError(
                f"Timed out after {self.timeout}s sending to {self.endpoint}"
            )

        self._last_send = datetime.now(timezone.utc)
        print_info(f"APRS: Data sent to {self.endpoint}")
        return status

    @property
    def last_send_time(self) -> Optional[datetime]:
        """Timestamp of last successful delivery."""
        return self._last_send
