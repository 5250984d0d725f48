import logging
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml

log = logging.getLogger(__name__)

SERVICE_NAMES = ("full_node", "wallet", "farmer", "harvester")


def initial_config_file(filename: Union[str, Path]) -> str:
    return (Path(__file__).parent / f"initial-{filename}").read_text()


def config_path_for_filename(root_path: Path, filename: Union[str, Path]) -> Path:
    path_filename = Path(filename)
    if path_filename.is_absolute():
        return path_filename
    return root_path / "config" / filename


def load_config(root_path: Path, filename: Union[str, Path]) -> Dict:
    path = config_path_for_filename(root_path, filename)
    if not path.is_file():
        raise ValueError(f"Config not found: {path}")
    with open(path, "r") as f:
        return yaml.safe_load(f)


def merge_config(base: Dict, overrides: Any) -> Dict:
    """
    Copies values from overrides into base, only for keys that base already has.
    Nested dicts are merged rather than replaced. A full chia config.yaml carries
    many sections this tool never reads, those are left out.
    """
    if not isinstance(overrides, dict):
        return base
    for key, value in overrides.items():
        if key not in base:
            continue
        if isinstance(base[key], dict):
            merge_config(base[key], value)
        elif not isinstance(value, dict):
            base[key] = value
    return base


def load_summary_config(root_path: Path) -> Dict:
    """
    Packaged defaults, overridden by <root>/config/config.yaml when that file exists.
    """
    config = yaml.safe_load(initial_config_file("config.yaml"))
    try:
        overrides = load_config(root_path, "config.yaml")
    except ValueError:
        log.debug(f"No config.yaml under {root_path}, using defaults")
        return config
    return merge_config(config, overrides)


def service_endpoint(config: Dict, service_name: str) -> Tuple[str, int]:
    if service_name not in SERVICE_NAMES:
        raise ValueError(f"Unknown service {service_name}")
    return config["self_hostname"], int(config[service_name]["rpc_port"])
