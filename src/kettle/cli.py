from __future__ import annotations

import argparse
import json
import logging
import sys

from .codec import ABSENT, NO_VALUE, Document, serialize
from .errors import KettleError
from .project import Project


def _project(args: argparse.Namespace) -> Project:
    return Project(args.app, args.file)


def _document_as_json(doc: Document) -> dict[str, dict[str, str | None]]:
    def plain(items):
        return {k: (None if v is NO_VALUE else v) for k, v in items}

    out = {"": plain(doc.default.items())}
    for section in doc.sections():
        out[section.name] = plain(section.items())
    return out


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def show_paths(args: argparse.Namespace) -> int:
    project = _project(args)
    data = {
        "config": project.config_dir(),
        "cache": project.cache_dir(),
        "data": project.data_dir(),
        "data_local": project.data_local_dir(),
        "preference": project.preference_dir(),
        "config_file": project.config().path,
    }
    if args.as_json:
        print(json.dumps({k: str(v) for k, v in data.items()}))
    else:
        for k, v in data.items():
            print(f"{k}: {v}")
    return 0


def get_cmd(args: argparse.Namespace) -> int:
    val = _project(args).config().section_get(args.section, args.key)
    if val is ABSENT:
        return 1
    print("" if val is NO_VALUE else val)
    return 0


def set_cmd(args: argparse.Namespace) -> int:
    _project(args).config().section_set(args.section, args.key, args.value)
    return 0


def unset_cmd(args: argparse.Namespace) -> int:
    removed = _project(args).config().section_delete(args.section, args.key)
    return 0 if removed else 1


def show_cmd(args: argparse.Namespace) -> int:
    doc = _project(args).config().document
    if args.as_json:
        print(json.dumps(_document_as_json(doc)))
    else:
        sys.stdout.write(serialize(doc))
    return 0


def build_parser(prog: str = "kettle") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description="Kettle command line interface.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser, *, section: bool = True) -> None:
        p.add_argument("app", help="Application identifier")
        p.add_argument("--file", default=None, help="Config file name (default: config)")
        if section:
            p.add_argument("--section", default=None, help="Named section")

    # paths command
    p_paths = subparsers.add_parser("paths", help="Show the application's directories.")
    add_common(p_paths, section=False)
    p_paths.add_argument("--json", dest="as_json", action="store_true")
    p_paths.set_defaults(func=show_paths)

    # get command
    p_get = subparsers.add_parser("get", help="Print the value for KEY.")
    add_common(p_get)
    p_get.add_argument("key")
    p_get.set_defaults(func=get_cmd)

    # set command
    p_set = subparsers.add_parser("set", help="Set KEY to VALUE, or to no value.")
    add_common(p_set)
    p_set.add_argument("key")
    p_set.add_argument("value", nargs="?", default=None)
    p_set.set_defaults(func=set_cmd)

    # unset command
    p_unset = subparsers.add_parser("unset", help="Remove KEY.")
    add_common(p_unset)
    p_unset.add_argument("key")
    p_unset.set_defaults(func=unset_cmd)

    # show command
    p_show = subparsers.add_parser("show", help="Print a config file.")
    add_common(p_show, section=False)
    p_show.add_argument("--json", dest="as_json", action="store_true")
    p_show.set_defaults(func=show_cmd)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 1
    try:
        return int(func(args))
    except KettleError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
