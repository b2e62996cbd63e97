import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from .config import build_config, build_processor, load_defaults
from .options_schema import OPTIONS

def parse_define(text: str) -> Tuple[str, Optional[str]]:
    """Splits a -D argument: "NAME" -> (NAME, None), "NAME=VALUE" -> (NAME, VALUE)."""
    name, sep, value = text.partition("=")
    name = name.strip()
    if not name:
        raise ValueError(f"Invalid define '{text}': missing macro name")
    return name, (value if sep else None)

def _add_option_overrides(parser: argparse.ArgumentParser):
    for opt in OPTIONS:
        # defines have their own -D/-U flags
        if opt.type == "dict":
            continue
        arg_name = f"--{opt.name.replace('_', '-')}"
        if opt.type == "bool":
            parser.add_argument(arg_name, action="store_true", default=None, help=opt.help_text or opt.label)
        elif opt.type == "choice":
            parser.add_argument(arg_name, choices=opt.choices, help=opt.help_text or opt.label)
        else:
            parser.add_argument(arg_name, type=str, help=opt.help_text or opt.label)

def _add_processor_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--config", help="Path to config file")
    parser.add_argument("-D", dest="define", action="append", default=[], metavar="NAME[=VALUE]",
                        help="Add a macro definition")
    parser.add_argument("-U", dest="undef", action="append", default=[], metavar="NAME",
                        help="Remove a macro definition coming from the config")
    _add_option_overrides(parser)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="GLSL #include expander")
    subparsers = parser.add_subparsers(dest="command")

    # Expand
    expand_parser = subparsers.add_parser("expand", help="Expand a shader and its includes")
    expand_parser.add_argument("shader", help="Logical name of the shader to expand")
    _add_processor_arguments(expand_parser)
    # short alias for --output
    expand_parser.add_argument("-o", dest="output", help="Output file")

    # Serve
    serve_parser = subparsers.add_parser("serve", help="Start the HTTP preview server")
    _add_processor_arguments(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on")

    # Defaults
    subparsers.add_parser("defaults", help="Print the default configuration")

    return parser

def config_from_args(args) -> dict:
    cli_args = {}
    for opt in OPTIONS:
        if opt.type == "dict":
            continue
        val = getattr(args, opt.name, None)
        if val is not None:
            cli_args[opt.name] = val

    defines = {}
    for item in args.define:
        name, value = parse_define(item)
        defines[name] = value
    if defines:
        cli_args["defines"] = defines

    return build_config(Path(args.config) if args.config else None, cli_args)

def processor_from_args(args):
    cfg = config_from_args(args)
    processor = build_processor(cfg)
    for name in args.undef:
        processor.undef(name)
    return cfg, processor

def run_expand(args) -> int:
    cfg, processor = processor_from_args(args)

    source = processor.get_shader_source(args.shader)
    if source is None:
        print(f"Failed to expand shader '{args.shader}'", file=sys.stderr)
        return 1

    if cfg.get("output"):
        with open(cfg["output"], 'w', encoding='utf-8', newline='') as f:
            f.write(source)
    else:
        sys.stdout.write(source)
    return 0

def run_serve(args) -> int:
    import uvicorn
    from .server.app import create_app

    _, processor = processor_from_args(args)
    app = create_app(processor)

    print(f"Starting preview server at http://{args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port)
    return 0

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "defaults":
        print(yaml.dump(load_defaults(), default_flow_style=False, sort_keys=False), end="")
        return 0

    commands = {"expand": run_expand, "serve": run_serve}
    if args.command in commands:
        try:
            return commands[args.command](args)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

    parser.print_help()
    return 0

if __name__ == "__main__":
    sys.exit(main())
