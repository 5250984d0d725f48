import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from farm_summary.cmds.cmds_util import get_rpc_client
from farm_summary.rpc.farmer_rpc_client import FarmerRpcClient
from farm_summary.rpc.full_node_rpc_client import FullNodeRpcClient
from farm_summary.rpc.harvester_rpc_client import HarvesterRpcClient
from farm_summary.rpc.wallet_rpc_client import WalletRpcClient
from farm_summary.util.config import load_summary_config
from farm_summary.util.default_root import DEFAULT_ROOT_PATH
from farm_summary.util.misc import format_bytes, format_minutes
from farm_summary.util.units import mojo_to_chia

log = logging.getLogger(__name__)

SECONDS_PER_BLOCK = (24 * 3600) / 4608


@dataclass(frozen=True)
class FarmSummary:
    farmer_running: bool
    farmed_amount_raw: int
    farmed_amount_display: float
    plot_count: int
    total_plot_bytes: int
    network_space_bytes: int
    fee_amount: Optional[int] = None
    block_rewards: Optional[int] = None
    last_height_farmed: Optional[int] = None

    @property
    def expected_time_to_win(self) -> str:
        if self.plot_count == 0:
            return "Never (no plots)"
        minutes = expected_minutes_to_win(self.total_plot_bytes, self.network_space_bytes)
        return format_minutes(minutes if minutes is not None else -1)


def expected_minutes_to_win(total_plot_bytes: int, network_space_bytes: int) -> Optional[int]:
    if network_space_bytes <= 0 or total_plot_bytes <= 0:
        return None
    proportion = total_plot_bytes / network_space_bytes
    return int((SECONDS_PER_BLOCK / 60) / proportion)


async def is_farmer_running(farmer_client: FarmerRpcClient) -> bool:
    # A farmer without peers is reported as not running, even if the process is up
    connections = await farmer_client.get_connections()
    log.info(f"Farmer connections: {len(connections)}")
    return len(connections) > 0


async def get_farm_summary(config: Dict, root_path: Path) -> FarmSummary:
    async with get_rpc_client(FullNodeRpcClient, "full_node", config, root_path) as node_client:
        blockchain_state = await node_client.get_blockchain_state()
    async with get_rpc_client(WalletRpcClient, "wallet", config, root_path) as wallet_client:
        farmed = await wallet_client.get_farmed_amount()
    async with get_rpc_client(FarmerRpcClient, "farmer", config, root_path) as farmer_client:
        farmer_running = await is_farmer_running(farmer_client)
    async with get_rpc_client(HarvesterRpcClient, "harvester", config, root_path) as harvester_client:
        plots = await harvester_client.get_plots()

    return FarmSummary(
        farmer_running=farmer_running,
        farmed_amount_raw=farmed.farmed_amount,
        farmed_amount_display=mojo_to_chia(farmed.farmed_amount),
        plot_count=len(plots.plots),
        total_plot_bytes=plots.total_plot_size,
        network_space_bytes=blockchain_state.space,
        fee_amount=farmed.fee_amount,
        block_rewards=farmed.block_rewards,
        last_height_farmed=farmed.last_height_farmed,
    )


def print_summary(farm_summary: FarmSummary) -> None:
    print(f"Farmer running: {farm_summary.farmer_running}")
    print(f"Farmed Amount: {farm_summary.farmed_amount_raw} Mojo ({farm_summary.farmed_amount_display:f} XCH)")
    if farm_summary.fee_amount is not None:
        print(f"User transaction fees: {mojo_to_chia(farm_summary.fee_amount)}")
    if farm_summary.block_rewards is not None:
        print(f"Block rewards: {mojo_to_chia(farm_summary.block_rewards)}")
    if farm_summary.last_height_farmed is not None:
        print(f"Last height farmed: {farm_summary.last_height_farmed}")
    print(f"Number of plots: {farm_summary.plot_count}")
    print(f"Total plot size: {format_bytes(farm_summary.total_plot_bytes)}")
    print(f"Estimated network space: {format_bytes(farm_summary.network_space_bytes)}")
    print(f"Expected time to win: {farm_summary.expected_time_to_win}")


async def summary(root_path: Path = DEFAULT_ROOT_PATH, config: Optional[Dict] = None) -> None:
    """
    Queries node, wallet, farmer and harvester in turn and prints the farm summary.
    Any RpcError propagates before a single line is printed.
    """
    if config is None:
        config = load_summary_config(root_path)
    farm_summary = await get_farm_summary(config, root_path)
    print_summary(farm_summary)
