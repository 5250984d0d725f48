from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from farm_summary.util.errors import MalformedResponseError


def _required(json_dict: Dict, key: str, expected_type: Type, context: str) -> Any:
    if key not in json_dict:
        raise MalformedResponseError(f"{context} response is missing '{key}'")
    value = json_dict[key]
    # bool is an int subclass, a JSON true is never a valid byte count or amount
    if not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool)):
        raise MalformedResponseError(f"{context} response field '{key}' is not a {expected_type.__name__}")
    return value


def _optional_int(json_dict: Dict, key: str) -> Optional[int]:
    value = json_dict.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


@dataclass(frozen=True)
class BlockchainStateResponse:
    space: int

    @classmethod
    def from_json_dict(cls, json_dict: Dict) -> "BlockchainStateResponse":
        state = _required(json_dict, "blockchain_state", dict, "get_blockchain_state")
        return cls(_required(state, "space", int, "get_blockchain_state"))


@dataclass(frozen=True)
class FarmedAmountResponse:
    farmed_amount: int
    pool_reward_amount: Optional[int] = None
    farmer_reward_amount: Optional[int] = None
    fee_amount: Optional[int] = None
    last_height_farmed: Optional[int] = None

    @classmethod
    def from_json_dict(cls, json_dict: Dict) -> "FarmedAmountResponse":
        return cls(
            _required(json_dict, "farmed_amount", int, "get_farmed_amount"),
            _optional_int(json_dict, "pool_reward_amount"),
            _optional_int(json_dict, "farmer_reward_amount"),
            _optional_int(json_dict, "fee_amount"),
            _optional_int(json_dict, "last_height_farmed"),
        )

    @property
    def block_rewards(self) -> Optional[int]:
        if self.farmer_reward_amount is None or self.pool_reward_amount is None:
            return None
        return self.farmer_reward_amount + self.pool_reward_amount


@dataclass(frozen=True)
class ConnectionsResponse:
    connections: List[Dict]

    @classmethod
    def from_json_dict(cls, json_dict: Dict) -> "ConnectionsResponse":
        return cls(_required(json_dict, "connections", list, "get_connections"))


@dataclass(frozen=True)
class PlotInfo:
    file_size: int

    @classmethod
    def from_json_dict(cls, json_dict: Any) -> "PlotInfo":
        if not isinstance(json_dict, dict):
            raise MalformedResponseError("get_plots response has a plot entry that is not an object")
        return cls(_required(json_dict, "file_size", int, "get_plots"))


@dataclass(frozen=True)
class PlotsResponse:
    plots: List[PlotInfo]

    @classmethod
    def from_json_dict(cls, json_dict: Dict) -> "PlotsResponse":
        plots = _required(json_dict, "plots", list, "get_plots")
        return cls([PlotInfo.from_json_dict(plot) for plot in plots])

    @property
    def total_plot_size(self) -> int:
        return sum(plot.file_size for plot in self.plots)
