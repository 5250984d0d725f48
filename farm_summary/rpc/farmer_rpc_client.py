from typing import Dict, List

from farm_summary.rpc.rpc_client import RpcClient
from farm_summary.types.rpc_responses import ConnectionsResponse


class FarmerRpcClient(RpcClient):
    """
    Client to Chia RPC, connects to a local farmer. Uses HTTP/JSON, and converts back from
    JSON into native python objects before returning. All api calls use POST requests.
    """

    async def get_connections(self) -> List[Dict]:
        return ConnectionsResponse.from_json_dict(await self.fetch("get_connections", {})).connections
