"""CLI entry point for flowdeck."""

import argparse
import asyncio
import logging
import sys

from flowdeck import __version__
from flowdeck.config import get_settings
from flowdeck.console import AutomationConsole, build_console
from flowdeck.models import Notification


def _print_notifications(notifications: list[Notification]) -> None:
    for n in notifications:
        print(f"[{n.level.value}] {n.text}")


def _cmd_list(console: AutomationConsole, args: argparse.Namespace) -> int:
    print(f"Automation server: {console.base_url}")
    for flow in console.registry:
        mode = "headed" if flow.request_body().headed else "headless"
        print(f"  {flow.key:<16} {flow.label:<30} {flow.path} ({mode})")
    return 0


def _cmd_health(console: AutomationConsole, args: argparse.Namespace) -> int:
    ok = asyncio.run(console.check_health())
    _print_notifications(console.notifications.recent())
    print(f"Health: {console.health_status.value}")
    return 0 if ok else 1


def _cmd_run(console: AutomationConsole, args: argparse.Namespace) -> int:
    if args.flow not in console.registry:
        print(f"Unknown flow: {args.flow} (choose from {', '.join(console.registry.keys())})", file=sys.stderr)
        return 2
    result = asyncio.run(console.run_flow(args.flow, headed=args.headed))
    _print_notifications(console.notifications.recent())
    if args.show_output and result.output:
        print(result.output)
    return 0 if result.ok else 1


def _cmd_serve(console: AutomationConsole, args: argparse.Namespace) -> int:
    import uvicorn

    from dashboard.app import app, reset_console

    reset_console(console)
    uvicorn.run(
        app,
        host=args.host or console.settings.dashboard_host,
        port=args.port or console.settings.dashboard_port,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="flowdeck: trigger automation flows on the automation server")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List registered flows")
    sub.add_parser("health", help="Check automation server health")

    run = sub.add_parser("run", help="Run one flow")
    run.add_argument("flow", help="Flow key (see 'list')")
    mode = run.add_mutually_exclusive_group()
    mode.add_argument("--headed", dest="headed", action="store_true", default=None, help="Force a visible browser")
    mode.add_argument("--headless", dest="headed", action="store_false", help="Force a headless browser")
    run.add_argument("--show-output", action="store_true", help="Print the flow output returned by the server")

    serve = sub.add_parser("serve", help="Start the dashboard")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    console = build_console(settings)
    handlers = {
        "list": _cmd_list,
        "health": _cmd_health,
        "run": _cmd_run,
        "serve": _cmd_serve,
    }
    return handlers[args.command](console, args)


if __name__ == "__main__":
    sys.exit(main())
