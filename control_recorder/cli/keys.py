from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from control_recorder.config import RecorderConfig
from control_recorder.core.topology import load_topology
from control_recorder.exceptions import ConfigurationError
from control_recorder.keys import runtime_keys, select_keys
from control_recorder.logging import setup_logging

logger = logging.getLogger("control_recorder.cli.keys")


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="List recordable CSV columns of a control runtime topology",
        add_help=True,
    )
    p.add_argument("topology", type=str, help="Topology YAML file")
    p.add_argument(
        "--include",
        type=str,
        action="append",
        default=None,
        help="Glob pattern of keys to keep (repeatable), e.g. 'controller.*'",
    )
    p.add_argument(
        "--config-out",
        type=str,
        default=None,
        help="Write a recorder config YAML instead of printing keys",
    )
    p.add_argument(
        "--csv",
        type=str,
        default="recording.csv",
        help="CSV file_name stored in the written recorder config",
    )
    p.add_argument(
        "--time-format",
        type=str,
        default=None,
        help="strftime format stored in the written recorder config",
    )
    p.add_argument("--log-level", type=str, default="WARNING", help="Log level")
    return p.parse_args(argv)


def _write_config(cfg: RecorderConfig, out: Path) -> None:
    from omegaconf import OmegaConf

    data = cfg.model_dump(mode="json", exclude_none=True)
    out.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(OmegaConf.create(data), out)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    setup_logging(level=args.log_level)

    try:
        topology = load_topology(args.topology)
    except ConfigurationError as e:
        logger.error("%s", e)
        return 2

    keys = select_keys(runtime_keys(topology), args.include)
    if args.include and not keys:
        logger.warning("No keys matched %s", ", ".join(args.include))

    if args.config_out:
        try:
            cfg = RecorderConfig(
                file_name=Path(args.csv), key_list=keys, time_format=args.time_format
            )
        except ValueError as e:
            logger.error("Invalid recorder config: %s", e)
            return 2
        _write_config(cfg, Path(args.config_out))
        logger.info(
            "Wrote recorder config with %d keys to %s", len(keys), args.config_out
        )
        return 0

    for key in keys:
        sys.stdout.write(key + "\n")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
