import logging
import sys

import click

from farm_summary import __version__
from farm_summary.util.default_root import DEFAULT_ROOT_PATH

log = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(
    help=f"\n  Report on a local chia farm ({__version__})\n",
    epilog="Try 'farm-summary summary' or 'farm-summary --root-path ~/.chia/testnet summary'",
    context_settings=CONTEXT_SETTINGS,
)
@click.option("--root-path", default=DEFAULT_ROOT_PATH, help="Config file root", type=click.Path(), show_default=True)
@click.option("-v", "--verbose", help="Log RPC responses at debug level", is_flag=True, default=False)
@click.pass_context
def cli(ctx: click.Context, root_path: str, verbose: bool) -> None:
    from pathlib import Path

    from farm_summary.util.chia_logging import initialize_logging
    from farm_summary.util.config import load_summary_config

    ctx.ensure_object(dict)
    ctx.obj["root_path"] = Path(root_path)
    ctx.obj["config"] = load_summary_config(ctx.obj["root_path"])
    logging_config = dict(ctx.obj["config"]["farm_summary"]["logging"])
    if verbose:
        logging_config["log_level"] = "DEBUG"
    initialize_logging("farm_summary", logging_config, ctx.obj["root_path"])


@cli.command("version", short_help="Show farm-summary version")
def version_cmd() -> None:
    print(__version__)


@cli.command("summary", short_help="Summary of farming information")
@click.pass_context
def summary_cmd(ctx: click.Context) -> None:
    import asyncio

    from farm_summary.util.errors import RpcConnectionError, RpcError

    from .farm_funcs import summary

    try:
        asyncio.run(summary(ctx.obj["root_path"], ctx.obj["config"]))
    except RpcError as e:
        log.error(f"{e.service or 'rpc'}: {e}")
        if isinstance(e, RpcConnectionError):
            click.echo(f"Connection error. Check if the {e.service} rpc is running at {e.url}", err=True)
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
