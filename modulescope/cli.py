from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from modulescope.core.config.loader import load_view_config
from modulescope.core.config.paths import ConfigFsPaths
from modulescope.core.errors import ModuleScopeError
from modulescope.core.logger import setup_logging
from modulescope.core.runtime.snapshot import load_snapshot
from modulescope.core.views.cli import modules_list_lines, modules_show_payload, render_json
from modulescope.core.views.presenter import views_from_snapshot


def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="modulescope", description="Inspect a module registry snapshot.")
    p.add_argument("--root", default=".", help="Directory holding config/view.json (default: .)")
    p.add_argument("--no-log-file", action="store_true", help="Log to stderr only.")
    sub = p.add_subparsers(dest="command", required=True)

    ls = sub.add_parser("list", help="List modules in display order.")
    ls.add_argument("snapshot")

    show = sub.add_parser("show", help="Show one module as JSON.")
    show.add_argument("snapshot")
    show.add_argument("module_id", type=int)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = _parser().parse_args(argv)
    fs = ConfigFsPaths(args.root)
    try:
        cfg = load_view_config(fs)
        logger = setup_logging(None if args.no_log_file else os.path.join(fs.root, cfg.log_dir))
        snapshot = load_snapshot(args.snapshot, logger=logger)
    except ModuleScopeError as e:
        print(render_json({"ok": False, "error": e.to_dict()}), file=sys.stderr)
        return 2

    views = views_from_snapshot(snapshot, config=cfg, logger=logger)
    if args.command == "list":
        for line in modules_list_lines(views):
            print(line)
        return 0

    payload = modules_show_payload(views, args.module_id, logger=logger)
    print(render_json(payload))
    return 0 if payload.get("ok") else 1


if __name__ == "__main__":
    raise SystemExit(main())
