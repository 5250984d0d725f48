from farm_summary.rpc.rpc_client import RpcClient
from farm_summary.types.rpc_responses import FarmedAmountResponse


class WalletRpcClient(RpcClient):
    """
    Client to Chia RPC, connects to a local wallet. Uses HTTP/JSON, and converts back from
    JSON into native python objects before returning. All api calls use POST requests.
    """

    async def get_farmed_amount(self) -> FarmedAmountResponse:
        return FarmedAmountResponse.from_json_dict(await self.fetch("get_farmed_amount", {}))
