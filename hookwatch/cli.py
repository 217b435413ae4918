"""CLI - run the dashboard, fire webhooks by hand, edit config/settings.yaml."""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from hookwatch.config import ROOT, load_config, settings_path

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def _load_settings(root: Path = ROOT) -> dict:
    path = settings_path(root)
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _save_settings(data: dict, root: Path = ROOT) -> None:
    path = settings_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def _coerce(value: str):
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        try:
            return float(value)
        except ValueError:
            return value


def _prompt(prompt: str, default: str = "") -> str:
    p = f"{prompt} [{default}]: " if default else f"{prompt}: "
    v = input(p).strip()
    return v if v else default


def cmd_setup(root: Path = ROOT) -> None:
    """Interactive setup of webhook targets and dashboard address."""
    print("\nWebhook dashboard - Setup\n")
    settings = _load_settings(root)
    webhook = settings.setdefault("webhook", {})
    webhook["url"] = _prompt("Primary webhook URL", webhook.get("url", ""))
    webhook["method"] = _prompt("Primary webhook method (GET/POST)", webhook.get("method", "GET")).upper()
    secondary = webhook.setdefault("secondary", {})
    secondary["url"] = _prompt("Secondary webhook URL (press Enter to skip)", secondary.get("url", ""))
    if secondary["url"]:
        secondary["method"] = _prompt("Secondary webhook method (GET/POST)", secondary.get("method", "GET")).upper()
    dashboard = settings.setdefault("dashboard", {})
    dashboard["host"] = _prompt("Dashboard host", dashboard.get("host", "0.0.0.0"))
    dashboard["port"] = int(_prompt("Dashboard port", str(dashboard.get("port", 8080))))
    _save_settings(settings, root)
    print(f"\nConfiguration saved to {settings_path(root)}\n")


def cmd_run(root: Path = ROOT) -> None:
    """Start the dashboard server; the scheduler starts with it."""
    settings = load_config(root)
    setup_logging(settings.logging.level)
    import uvicorn
    logging.getLogger(__name__).info(
        "Starting dashboard on %s:%d", settings.dashboard.host, settings.dashboard.port
    )
    uvicorn.run(
        "hookwatch.dashboard.app:create_app",
        factory=True,
        host=settings.dashboard.host,
        port=settings.dashboard.port,
    )


def cmd_trigger(target: str, root: Path = ROOT) -> int:
    """Invoke one target once and print the recorded response. Returns the exit code."""
    from hookwatch.service import WebhookService
    settings = load_config(root)
    setup_logging(settings.logging.level)
    service = WebhookService(settings)
    response = asyncio.run(service.trigger(target))
    print(response.model_dump_json(by_alias=True, indent=2))
    return 0 if response.ok else 1


def cmd_schedule(root: Path = ROOT) -> None:
    """Print the configured jobs and when they fire next."""
    from hookwatch.scheduler.daily import WebhookScheduler
    from hookwatch.service import WebhookService

    service = WebhookService(load_config(root))

    async def describe() -> list[dict]:
        scheduler = WebhookScheduler(service)
        scheduler.start(paused=True)
        try:
            return scheduler.describe()
        finally:
            scheduler.stop()

    print(f"Scheduler enabled: {service.scheduler_enabled}")
    for job in asyncio.run(describe()):
        print(f"  {job['id']:<20} {job['trigger']:<40} next: {job['next_run_time']}")
    if not service.secondary.configured:
        print("  (secondary webhook URL is not configured; its job will be skipped)")


def cmd_config_get(key: str, root: Path = ROOT) -> None:
    settings = _load_settings(root)
    v = settings
    for k in key.split("."):
        if isinstance(v, dict):
            v = v.get(k, "")
        else:
            v = ""
            break
    print(v)


def cmd_config_set(key: str, value: str, root: Path = ROOT) -> None:
    settings = _load_settings(root)
    keys = key.split(".")
    d = settings
    for k in keys[:-1]:
        d = d.setdefault(k, {})
    d[keys[-1]] = _coerce(value)
    _save_settings(settings, root)
    print(f"Set {key} = {value}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="hookwatch", description="Scheduled webhook dashboard")
    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("setup", help="Interactive setup")
    sub.add_parser("run", help="Run the dashboard and scheduler")
    trg = sub.add_parser("trigger", help="Invoke a webhook once")
    trg.add_argument("target", nargs="?", default="primary", choices=["primary", "secondary"])
    sub.add_parser("schedule", help="Show scheduled jobs")
    cfg = sub.add_parser("config", help="Get/set config")
    cfg.add_argument("action", choices=["get", "set"])
    cfg.add_argument("key")
    cfg.add_argument("value", nargs="*", default=[])

    args = parser.parse_args(argv)

    try:
        if args.cmd == "setup":
            cmd_setup()
        elif args.cmd == "trigger":
            sys.exit(cmd_trigger(args.target))
        elif args.cmd == "schedule":
            cmd_schedule()
        elif args.cmd == "config":
            if args.action == "get":
                cmd_config_get(args.key)
            else:
                val = " ".join(args.value) if args.value else ""
                if not val:
                    print("config set requires a value")
                    sys.exit(1)
                cmd_config_set(args.key, val)
        else:
            cmd_run()
    except (ValidationError, yaml.YAMLError) as e:
        print(f"Invalid configuration in {settings_path()}:\n{e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
