"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from dlsclient import ConfigError, InstallFailedError, LaunchError, ToolchainMissingError

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 3
EXIT_TOOLCHAIN = 4
EXIT_INSTALL = 5
EXIT_LAUNCH = 6


def main(argv: list[str] | None = None) -> int:
    import dlsclient.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        cli.logging.basicConfig(level=cli.logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        if args.command == "probe":
            probe = cli._run_probe(args)
            return EXIT_OK if probe.ready else EXIT_TOOLCHAIN
        if args.command == "path":
            return EXIT_OK if cli._run_path(args) else EXIT_FAILURE
        cli.asyncio.run(cli._run_install(args))
        return EXIT_OK
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG
    except ToolchainMissingError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_TOOLCHAIN
    except InstallFailedError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INSTALL
    except LaunchError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_LAUNCH
    except Exception as exc:  # pragma: no cover - defensive fallback
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FAILURE


__all__ = ["main"]
