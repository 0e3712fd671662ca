from __future__ import annotations
import argparse
from typing import Dict, List, Optional

from .catalog import get_catalog
from .command import build_command
from .form import FormState
from .settings import HOST, PORT


def _parse_assignments(pairs: List[str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Expected key=value, got '{pair}'")
        out[key] = value
    return out


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="opsrunner", description="OpsRunner script console")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_serve = sub.add_parser("serve", help="Start the web console")
    p_serve.add_argument("--host", default=HOST, help=f"Bind address (default: {HOST})")
    p_serve.add_argument("--port", type=int, default=PORT, help=f"Port (default: {PORT})")
    p_serve.add_argument("--debug", action="store_true", help="Enable Flask debug mode")

    sub.add_parser("list-scripts", help="List catalogued scripts")

    p_cmd = sub.add_parser("command", help="Print the command a script would run")
    p_cmd.add_argument("script_id")
    p_cmd.add_argument("--set", dest="assignments", action="append", default=[], metavar="KEY=VALUE",
                       help="Form value (repeatable); booleans accept true/false")
    p_cmd.add_argument("--dry-run", action="store_true")

    args = parser.parse_args(argv)

    if args.cmd == "list-scripts":
        for s in get_catalog():
            print(f"{s.id:24s} [{s.danger_level.value:6s}] {s.name}")
        return 0

    if args.cmd == "command":
        script = get_catalog().get(args.script_id)
        if script is None:
            parser.error(f"unknown script '{args.script_id}'")
        form = FormState(script)
        try:
            for key, value in _parse_assignments(args.assignments).items():
                form.set_value(key, value)
        except (argparse.ArgumentTypeError, ValueError) as e:
            parser.error(str(e))
        if not form.is_valid:
            parser.error(f"required fields missing: {', '.join(form.missing_required())}")
        print(build_command(script, form.values, args.dry_run))
        return 0

    if args.cmd == "serve":
        from .web import create_app

        app = create_app()
        print(f"🚀 OpsRunner console on http://{args.host}:{args.port}")
        app.run(host=args.host, port=args.port, debug=args.debug, threaded=True)
        return 0

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
