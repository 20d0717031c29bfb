from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import Any, List, Optional

from rich.console import Console
from rich.table import Table

from backend.core.logging import configure_console_log

from ..chain_registry import ChainFamily
from ..pause_config import ETHEREUM_NETWORK, PauseConfig
from ..pause_errors import DerivationError, PauseSdkError, invalid_parameters
from ..pause_models import PausableQuery, UnpauseRequest, build_pause_request
from ..pause_sdk import PauseSdk

log = logging.getLogger(__name__)
console = Console()


def _chain_arg(network: str, chain: str) -> Any:
    # EVM registries are keyed by int; argv only gives us strings
    if network == ETHEREUM_NETWORK and chain.strip().isdigit():
        return int(chain)
    return chain


def _add_target_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--network", required=True, help="ethereum | near")
    p.add_argument("--chain", required=True, help="EVM chain id (1, 1313161554) or NEAR network (mainnet/testnet/local)")
    p.add_argument("--account", required=True, help="Contract address / account id")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pause_core", description="Pause / unpause contracts on NEAR and EVM chains")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("pause", help="Pause a contract")
    _add_target_args(p)
    p.add_argument("--target", help="NEAR controller contract (default: NEAR_CONTROLLER_CONTRACT)")
    p.add_argument("--method", help="NEAR pause method called by the controller")
    p.add_argument("--method-args", help="NEAR pause arguments as JSON")
    p.add_argument("--sender", help="NEAR signer account (default: implicit account of the derived key)")
    p.add_argument("--node-url", help="NEAR RPC override (sandbox/local)")
    p.add_argument("--path", help="Derivation path override")

    p = sub.add_parser("unpause", help="Unpause an EVM contract")
    _add_target_args(p)

    p = sub.add_parser("is-pausable", help="Probe whether a contract can be paused")
    _add_target_args(p)
    p.add_argument("--node-url", help="RPC override")

    p = sub.add_parser("derive", help="Show the key derived for a chain")
    p.add_argument("--network", required=True)
    p.add_argument("--chain", required=True)
    p.add_argument("--path", help="Derivation path override")
    return parser


def _print_credential(sdk: PauseSdk, network: str, chain: Any, path: Optional[str]) -> None:
    descriptor = sdk.validate(network, chain, "-")
    cred = sdk.key_deriver.derive_for_chain(descriptor, path)
    table = Table(title=f"Derived key {network}/{chain}")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_row("Path", cred.derivation_path)
    table.add_row("Public key", cred.public_key)
    if descriptor.family is ChainFamily.NEAR:
        table.add_row("Implicit account", cred.implicit_account_id or "")
    else:
        table.add_row("Address", cred.address or "")
    console.print(table)


async def _run(args: argparse.Namespace, sdk: PauseSdk) -> None:
    chain = _chain_arg(args.network, args.chain)

    if args.command == "pause":
        try:
            method_args = json.loads(args.method_args) if args.method_args else None
        except ValueError as e:
            raise invalid_parameters() from e
        request = build_pause_request(
            network_id=args.network,
            chain_id=chain,
            account_id=args.account,
            **(
                {
                    "target": args.target,
                    "method_name": args.method,
                    "method_args": method_args,
                    "sender": args.sender,
                    "node_url": args.node_url,
                    "derivation_path": args.path,
                }
                if args.network != ETHEREUM_NETWORK
                else {}
            ),
        )
        await sdk.pause(request)
        console.print(f"[green]✅ Paused[/green] {args.account} on {args.network}/{args.chain}")
    elif args.command == "unpause":
        await sdk.unpause(UnpauseRequest(args.network, chain, args.account))
        console.print(f"[green]✅ Unpaused[/green] {args.account} on {args.network}/{args.chain}")
    elif args.command == "is-pausable":
        ok = await sdk.is_pausable(PausableQuery(args.network, chain, args.account, args.node_url))
        console.print(f"{args.account}: [bold]{'pausable' if ok else 'not pausable'}[/bold]")
    elif args.command == "derive":
        _print_credential(sdk, args.network, chain, args.path)


def main(argv: Optional[List[str]] = None, sdk: Optional[PauseSdk] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_console_log(debug=args.debug)
    sdk = sdk or PauseSdk(PauseConfig.from_env())
    try:
        asyncio.run(_run(args, sdk))
    except PauseSdkError as e:
        console.print(f"[red]❌ {e.code.value}[/red] {e.message}")
        if e.reason is not None:
            console.print(f"   cause: {e.reason}", style="dim")
        return 1
    except DerivationError as e:
        console.print(f"[red]❌ Key derivation failed[/red] {e}")
        return 1
    return 0
