from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Dict, Type, TypeVar

from farm_summary.rpc.rpc_client import RpcClient
from farm_summary.server.ssl_context import private_ssl_paths
from farm_summary.util.config import service_endpoint

_T_RpcClient = TypeVar("_T_RpcClient", bound=RpcClient)


@asynccontextmanager
async def get_rpc_client(
    client_type: Type[_T_RpcClient], service_name: str, config: Dict, root_path: Path
) -> AsyncIterator[_T_RpcClient]:
    """
    Opens a client for one service using its private cert from the ssl directory, closes it on exit.
    """
    self_hostname, rpc_port = service_endpoint(config, service_name)
    crt_path, key_path = private_ssl_paths(root_path, config[service_name])
    client = await client_type.create(self_hostname, rpc_port, crt_path, key_path, service_name)
    try:
        yield client
    finally:
        client.close()
        await client.await_closed()
