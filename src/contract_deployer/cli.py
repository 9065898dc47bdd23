"""Command-line entry point for contract-deployer."""

import argparse
import logging
import sys
from typing import List, Optional

from .artifacts import iter_artifacts
from .config import load_settings, parse_timeout
from .exceptions import ConfigError, DeploymentError
from .pipeline import DeploymentPipeline
from .rpc import connect
from .signer import new_authority

logger = logging.getLogger("contract_deployer")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _timeout_arg(raw: str) -> float:
    try:
        timeout = parse_timeout(raw, name="--timeout")
    except ConfigError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    if timeout is None:
        raise argparse.ArgumentTypeError("--timeout must be a number of seconds")
    return timeout


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="contract-deployer",
        description=(
            "Compile every contract in the contracts directory, deploy it, "
            "call setUint256 with UINT256_VALUE, read it back with getUint256 "
            "and write the result to output.json."
        ),
    )
    p.add_argument("--env-file", default=None, help="Path to .env (default: ./.env)")
    p.add_argument("--contracts-dir", default=None, help="Solidity sources (default: ./contracts)")
    p.add_argument(
        "--compiled-dir",
        default=None,
        help="solc output directory (default: ./compiled-contracts)",
    )
    p.add_argument("--output", default=None, help="Record file (default: ./output.json)")
    p.add_argument(
        "--timeout",
        type=_timeout_arg,
        default=None,
        help="Seconds to wait for each transaction receipt (default: RECEIPT_TIMEOUT or forever)",
    )
    p.add_argument(
        "--skip-compile",
        action="store_true",
        help="Use existing .bin/.abi files instead of running solc",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = load_settings(
            env_file=args.env_file,
            contracts_dir=args.contracts_dir,
            compiled_dir=args.compiled_dir,
            output_path=args.output,
        )
        # Credentials are checked before any connection is made
        authority = new_authority(settings.private_key, settings.chain_id)
        logger.info("deploying with %s (chainId=%d)", authority.address, authority.chain_id)

        w3 = connect(settings.rpc_url)
        pipeline = DeploymentPipeline(
            w3,
            authority,
            settings.uint256_value,
            output_path=settings.output_path,
            explorer_url=settings.explorer_url,
            receipt_timeout=args.timeout if args.timeout is not None else settings.receipt_timeout,
        )
        records = pipeline.run(
            iter_artifacts(
                settings.contracts_dir, settings.compiled_dir, compile=not args.skip_compile
            )
        )
    except DeploymentError as e:
        logger.error("error - %s", e)
        return 1

    if not records:
        logger.warning("no contracts deployed; %s not written", settings.output_path)
    else:
        logger.info("wrote %s", settings.output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
