from farm_summary.rpc.rpc_client import RpcClient
from farm_summary.types.rpc_responses import PlotsResponse


class HarvesterRpcClient(RpcClient):
    """
    Client to Chia RPC, connects to a local harvester. Uses HTTP/JSON, and converts back from
    JSON into native python objects before returning. All api calls use POST requests.
    """

    async def get_plots(self) -> PlotsResponse:
        return PlotsResponse.from_json_dict(await self.fetch("get_plots", {}))
