import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from src.api.main import create_app
from src.app_shell.config import (
    ConfigurationError,
    build_listen_configs,
    build_redirect_config,
    load_config,
    log_config,
)
from src.app_shell.server import RedirectorServer

logger = logging.getLogger("go-import-redirector")

EXAMPLES = """examples:
\tgo-import-redirector rsc.io/* https://github.com/rsc/*
\tgo-import-redirector 9fans.net/go https://github.com/9fans/go
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="go-import-redirector",
        description="Serve go-import meta tags and doc redirects for a custom import path.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("import_path", nargs="?", metavar="import", help="import path root")
    parser.add_argument("repo_path", nargs="?", metavar="repo", help="repository root")
    parser.add_argument("-addr", "--addr", metavar="address", help="serve http on address")
    parser.add_argument(
        "-tls", "--tls", action="store_true", default=None, help="serve https on :443"
    )
    parser.add_argument("-vcs", "--vcs", metavar="system", help="set version control system")
    parser.add_argument("-godoc", "--godoc", metavar="url", help="godoc redirect address")
    parser.add_argument("-config", "--config", type=Path, help="YAML config file")
    parser.add_argument(
        "-redirect",
        "--redirect",
        action="store_true",
        default=None,
        help="answer with a 302 to the docs instead of an HTML page",
    )
    parser.add_argument(
        "-no-cache",
        "--no-cache",
        action="store_true",
        default=None,
        help="do not send a Cache-Control header",
    )
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Turn parsed flags into config overrides; unset flags stay None."""
    return {
        "import": args.import_path,
        "repo": args.repo_path,
        "vcs": args.vcs,
        "godoc": args.godoc,
        "listen": {"addr": args.addr, "tls": args.tls},
        "response": {
            "strategy": "redirect" if args.redirect else None,
            "cache_control": False if args.no_cache else None,
        },
    }


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config is None and (args.import_path is None or args.repo_path is None):
        parser.error("import and repo are required unless -config is given")

    try:
        rules = load_config(args.config, overrides_from_args(args))
        config = build_redirect_config(rules)
        listeners = build_listen_configs(rules, config)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    log_config(config)
    RedirectorServer(app=create_app(config), listeners=listeners).run()


if __name__ == "__main__":
    main()
