import argparse
import os
from pathlib import Path

from .env import load_env, env_float, env_list

from . import __version__
from .aggregate import resolve_all
from .logger import get_logger
from .platforms import DEFAULT_PLATFORMS, load_platforms
from .probe import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, DEFAULT_VARIANTS, resolve_platform
from .schema import validate_platforms
from .storage import load_icon_map, save_icon_map, diff_icon_maps

DEFAULT_OUTPUT = "src/data/platformIcons.js"


def _probe_settings(args: argparse.Namespace) -> dict:
    """Merge CLI flags over environment over defaults."""
    base_url = args.base_url or os.getenv("ICONMAP_BASE_URL") or DEFAULT_BASE_URL
    timeout = args.timeout if args.timeout is not None else env_float("ICONMAP_TIMEOUT", DEFAULT_TIMEOUT)
    if args.variants:
        variants = [v.strip() for v in args.variants.split(",") if v.strip()]
    else:
        variants = env_list("ICONMAP_VARIANTS", list(DEFAULT_VARIANTS))
    if timeout <= 0:
        raise SystemExit("Timeout must be positive.")
    if not variants:
        raise SystemExit("At least one variant is required.")
    return {"base_url": base_url, "timeout": timeout, "variants": variants}


def _load_catalog(args: argparse.Namespace) -> list:
    if not args.platforms:
        return list(DEFAULT_PLATFORMS)
    path = Path(args.platforms)
    if not path.exists():
        raise SystemExit(f"Platforms file not found: {path}")
    return load_platforms(path)


def cmd_build(args: argparse.Namespace) -> None:
    platforms = _load_catalog(args)
    errors = validate_platforms(platforms)
    if errors:
        print("Invalid platform catalog:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)

    settings = _probe_settings(args)
    output_path = Path(args.output)
    previous = load_icon_map(output_path)

    icon_map = resolve_all(platforms, **settings)
    save_icon_map(output_path, icon_map)

    changes = diff_icon_maps(previous, icon_map)
    for platform, change in changes.items():
        print(f"[changed] {platform}: {change['old']} -> {change['new']}")
    found = sum(1 for v in icon_map.values() if v is not None)
    print(f"Done. platforms={len(icon_map)} found={found} missing={len(icon_map) - found} changed={len(changes)}")
    print(f"Icon map generated at: {output_path}")
    get_logger().log_metrics_summary()


def cmd_check(args: argparse.Namespace) -> None:
    errors = validate_platforms([args.platform])
    if errors:
        raise SystemExit(errors[0])
    settings = _probe_settings(args)
    variant = resolve_platform(args.platform, **settings)
    print(variant if variant is not None else "null")


def cmd_list(args: argparse.Namespace) -> None:
    output_path = Path(args.output)
    if not output_path.exists():
        print(f"Icon map not found: {output_path}")
        return
    icon_map = load_icon_map(output_path)
    if not icon_map:
        print("No platforms in icon map.")
        return
    print(f"Found {len(icon_map)} platforms in {output_path}:\n")
    for platform, ext in icon_map.items():
        print(f"  {platform}: {ext if ext is not None else 'null'}")


def cmd_validate(args: argparse.Namespace) -> None:
    platforms = _load_catalog(args)
    errors = validate_platforms(platforms)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print(f"Valid ({len(platforms)} platforms)")


def _add_probe_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--base-url", help=f"Icon host base URL (or set ICONMAP_BASE_URL). Default: {DEFAULT_BASE_URL}")
    p.add_argument("--timeout", type=float, help=f"Per-check timeout in seconds (or set ICONMAP_TIMEOUT). Default: {DEFAULT_TIMEOUT}")
    p.add_argument("--variants", help="Comma-separated extensions in priority order (or set ICONMAP_VARIANTS). Default: jpg,png")


def main(argv=None):
    # Load .env if present (ICONMAP_BASE_URL, ICONMAP_TIMEOUT, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="iconmap", description="Build the platform icon map from the icon host")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    bld = subparsers.add_parser("build", help="Probe every platform and write the icon map")
    bld.add_argument("--platforms", help="Text file with one platform ID per line (default: built-in catalog)")
    bld.add_argument("--output", default=DEFAULT_OUTPUT, help=f"Output JS module (default: {DEFAULT_OUTPUT})")
    _add_probe_args(bld)
    bld.set_defaults(func=cmd_build)

    chk = subparsers.add_parser("check", help="Probe a single platform and print its icon variant")
    chk.add_argument("--platform", required=True, help="Platform ID, e.g. uniswap-v3")
    _add_probe_args(chk)
    chk.set_defaults(func=cmd_check)

    lst = subparsers.add_parser("list", help="List entries of an existing icon map")
    lst.add_argument("--output", default=DEFAULT_OUTPUT, help=f"Icon map JS module (default: {DEFAULT_OUTPUT})")
    lst.set_defaults(func=cmd_list)

    val = subparsers.add_parser("validate", help="Validate a platform catalog")
    val.add_argument("--platforms", help="Text file with one platform ID per line (default: built-in catalog)")
    val.set_defaults(func=cmd_validate)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        get_logger(level=os.getenv("ICONMAP_LOG_LEVEL", "INFO"))
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
