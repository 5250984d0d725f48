import asyncio
import json
import logging
from pathlib import Path
from ssl import SSLContext
from typing import Any, Dict, Optional, Union

import aiohttp

from farm_summary.server.ssl_context import ssl_context_for_client
from farm_summary.util.errors import MalformedResponseError, RpcConnectionError, RpcStatusError

log = logging.getLogger(__name__)


class RpcClient:
    """
    Client to Chia RPC, connects to a local service. Uses HTTP/JSON, and converts back from
    JSON into native python objects before returning. All api calls use POST requests.
    Note that this is not the same as the peer protocol, or wallet protocol (which run Chia's
    protocol on top of TCP), it's a separate protocol on top of HTTP that provides easy access
    to the daemons.
    """

    url: str
    session: aiohttp.ClientSession
    closing_task: Optional[asyncio.Task]
    ssl_context: Union[SSLContext, bool]
    service_name: Optional[str]

    @classmethod
    async def create(
        cls, self_hostname: str, port: int, crt_path: Path, key_path: Path, service_name: Optional[str] = None
    ):
        ssl_context = ssl_context_for_client(crt_path, key_path, service_name)
        return await cls.create_for_url(f"https://{self_hostname}:{port}/", ssl_context, service_name)

    @classmethod
    async def create_for_url(cls, url: str, ssl_context: Union[SSLContext, bool], service_name: Optional[str] = None):
        self = cls()
        self.url = url
        self.session = aiohttp.ClientSession()
        self.ssl_context = ssl_context
        self.service_name = service_name
        self.closing_task = None
        return self

    async def fetch(self, path: str, request_json: Dict) -> Dict[str, Any]:
        url = self.url + path
        try:
            async with self.session.post(url, json=request_json, ssl=self.ssl_context) as response:
                if response.status != 200:
                    raise RpcStatusError(
                        f"RPC server returned HTTP status {response.status}",
                        status=response.status,
                        service=self.service_name,
                        url=url,
                    )
                body = await response.read()
        except aiohttp.ClientError as e:
            raise RpcConnectionError(f"Error accessing RPC: {e!r}", service=self.service_name, url=url) from e
        except asyncio.TimeoutError as e:
            raise RpcConnectionError("Timed out accessing RPC", service=self.service_name, url=url) from e

        try:
            res_json = json.loads(body)
        except ValueError as e:
            raise MalformedResponseError("Response is not valid JSON", service=self.service_name, url=url) from e
        if not isinstance(res_json, dict):
            raise MalformedResponseError("Response is not a JSON object", service=self.service_name, url=url)
        if res_json.get("success") is False:
            raise RpcStatusError(
                f"RPC call {path} failed: {res_json.get('error', 'no error message')}",
                status=response.status,
                service=self.service_name,
                url=url,
            )
        log.debug(f"{path} response: {json.dumps(res_json, indent=2)}")
        return res_json

    def close(self):
        self.closing_task = asyncio.create_task(self.session.close())

    async def await_closed(self):
        if self.closing_task is not None:
            await self.closing_task


async def request(host: str, port: int, cert_file: Path, key_file: Path, method: str) -> Dict[str, Any]:
    """
    One-shot POST of an empty JSON body to https://host:port/method, returns the parsed response.
    """
    client = await RpcClient.create(host, port, cert_file, key_file)
    try:
        return await client.fetch(method, {})
    finally:
        client.close()
        await client.await_closed()
