"""Gateway Web Server - aiohttp-based upload listener.

Accepts Ecowitt "customized upload" posts, turns each one into an APRS
weather packet and forwards it to APRS-IS.
"""

import asyncio
from datetime import datetime, timezone
from typing import Callable, Optional

from aiohttp import web

from gwaprs import constants
from gwaprs.aprs import WeatherPacketEncoder, build_login_envelope
from gwaprs.aprs_is import APRSISClient
from gwaprs.config import BridgeConfig
from gwaprs.utils import print_debug, print_error, print_info
from gwaprs.weather_stations import EcowittDecoder, StationDecoder


class WebServer:
    """Async HTTP listener for weather station uploads."""

    def __init__(
        self,
        config: BridgeConfig,
        client: Optional[APRSISClient] = None,
        decoder: Optional[StationDecoder] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """Initialize web server.

        Args:
            config: Gateway configuration
            client: APRS-IS client (default: built from config)
            decoder: Upload decoder (default: Ecowitt)
            clock: UTC clock for the encoder's timestamp fallback
        """
        self.config = config
        self.client = client or APRSISClient.from_config(config)
        self.decoder = decoder or EcowittDecoder()
        self.encoder = WeatherPacketEncoder(config, clock=clock)
        self.app = None
        self.runner = None
        self.site = None
        self.start_time = datetime.now(timezone.utc)

        self.stats = {
            'received': 0,
            'forwarded': 0,
            'incomplete': 0,
            'failed': 0,
            'rejected': 0,
        }
        self.last_packet: Optional[str] = None
        self.last_packet_time: Optional[datetime] = None

    def build_app(self) -> web.Application:
        """Create the aiohttp application with all routes registered."""
        app = web.Application()
        app.router.add_get('/', self._handle_index)
        app.router.add_get('/api/status', self._handle_status)

        # Stations let the operator pick the upload path, so accept any
        app.router.add_post('/{tail:.*}', self._handle_report)
        app.router.add_get('/{tail:.*}', self._handle_not_found)
        return app

    async def start(self, host: str = None, port: int = None) -> bool:
        """Start the web server.

        Args:
            host: Bind address (default: config listen_host)
            port: HTTP port (default: config listen_port)

        Returns:
            True once listening

        Raises:
            OSError: If the address cannot be bound
        """
        host = host or self.config.listen_host
        port = port or self.config.listen_port

        self.app = self.build_app()
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()
        self.site = web.TCPSite(self.runner, host, port)
        await self.site.start()

        print_info(f"Starting Ecowitt to APRS Gateway on {host}:{port}")
        print_info(
            f"APRS Callsign: {self.config.callsign}, "
            f"Lat: {self.config.latitude}, Lon: {self.config.longitude}"
        )
        return True

    async def stop(self):
        """Stop the web server gracefully."""
        if self.site:
            await self.site.stop()
        if self.runner:
            await self.runner.cleanup()

    async def _handle_index(self, request: web.Request) -> web.Response:
        return web.Response(text="GET request to /. POST weather data here.\n")

    async def _handle_not_found(self, request: web.Request) -> web.Response:
        return web.Response(text="Not Found\n", status=404)

    async def _handle_status(self, request: web.Request) -> web.Response:
        """Return gateway counters and the last forwarded packet."""
        now = datetime.now(timezone.utc)
        last_send = self.client.last_send_time
        return web.json_response({
            'software': f"{self.config.software_name} {self.config.software_version}",
            'callsign': self.config.callsign,
            'relay': self.client.endpoint,
            'decoder': self.decoder.get_station_info(),
            'uptime_seconds': int((now - self.start_time).total_seconds()),
            'stats': dict(self.stats),
            'last_packet': self.last_packet,
            'last_packet_time': (
                self.last_packet_time.isoformat() if self.last_packet_time else None
            ),
            'last_send_time': (
                last_send.isoformat() if last_send else None
            ),
        })

    async def _handle_report(self, request: web.Request) -> web.Response:
        """Decode an upload and forward it if complete."""
        if request.content_type != constants.FORM_CONTENT_TYPE:
            self.stats['rejected'] += 1
            print_error(
                f"Rejected upload to {request.path} with Content-Type "
                f"'{request.content_type}'"
            )
            return web.Response(text="Unsupported Media Type\n", status=415)

        print_info(f"Received POST request to {request.path} with Content-Type: {constants.FORM_CONTENT_TYPE}")
        self.stats['received'] += 1

        form = await request.post()
        pairs = [(key, str(value)) for key, value in form.items()]
        print_debug(f"Upload fields: {pairs}", level=4)

        await self.process_report(pairs)
        return web.Response(text="Data received.\n")

    async def process_report(self, pairs) -> bool:
        """Decode, validate, encode and deliver one report.

        Args:
            pairs: Percent-decoded (key, value) pairs

        Returns:
            True if the packet reached the APRS-IS server
        """
        observation = self.decoder.decode(pairs)
        if not observation.is_valid:
            self.stats['incomplete'] += 1
            print_info("Incomplete weather data. Not sending to APRS.")
            return False

        print_info("Weather data parsed. Forwarding to APRS...")
        packet = self.encoder.encode(observation)
        envelope = build_login_envelope(self.config, packet)

        try:
            await self.client.send(envelope)
        except ConnectionError as e:
            self.stats['failed'] += 1
            print_error(f"APRS: {e}")
            return False

        self.stats['forwarded'] += 1
        self.last_packet = packet
        self.last_packet_time = datetime.now(timezone.utc)
        return True


async def serve(config: BridgeConfig, host: str = None, port: int = None):
    """Run the gateway until cancelled."""
    server = WebServer(config)
    await server.start(host, port)
    try:
        while True:
            await asyncio.sleep(3600)
    finally:
        await server.stop()


def run(config: BridgeConfig, host: str = None, port: int = None):
    """Blocking entry point used by main.py."""
    try:
        asyncio.run(serve(config, host, port))
    except KeyboardInterrupt:
        print_info("Gateway stopped")
