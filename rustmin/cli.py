from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import MinifyCfg, load_config
from .errors import ConfigError, ParseError
from .pipeline import minify_source
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="rustmin",
        description="Minifies Rust code read from FILE or stdin",
        add_help=True,
    )
    p.add_argument("-v", "--verbose", action="store_true", help="log debug details to stderr")
    p.add_argument("--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--remove-docs",
        action="store_true",
        help="removes documentation and `#[{warn, deny, forbid}(missing_docs)]`",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        type=Path,
        help="YAML file with minifier options (e.g. `strip_docs: true`)",
    )
    p.add_argument("file", nargs="?", default="-", help="Rust source file, or - for stdin (default)")
    return p


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _cfg(ns: argparse.Namespace) -> MinifyCfg:
    cfg = load_config(ns.config) if ns.config else MinifyCfg()
    if ns.remove_docs:
        cfg.strip_docs = True
    return cfg


def main(argv: Optional[list[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        cfg = _cfg(ns)
        try:
            code = _read_input(ns.file)
        except (OSError, UnicodeDecodeError) as e:
            sys.stderr.write(f"could not read input: {e}\n")
            return 2

        result = minify_source(code, cfg)
        sys.stdout.write(result)
        sys.stdout.flush()
        return 0

    except ParseError as e:
        sys.stderr.write(f"could not parse the input: {e}\n")
        return 2
    except ConfigError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
