from farm_summary.rpc.rpc_client import RpcClient
from farm_summary.types.rpc_responses import BlockchainStateResponse


class FullNodeRpcClient(RpcClient):
    """
    Client to Chia RPC, connects to a local full node. Uses HTTP/JSON, and converts back from
    JSON into native python objects before returning. All api calls use POST requests.
    """

    async def get_blockchain_state(self) -> BlockchainStateResponse:
        return BlockchainStateResponse.from_json_dict(await self.fetch("get_blockchain_state", {}))
