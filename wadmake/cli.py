from __future__ import annotations

import os
import errno
import sys
import argparse
import traceback

from pathlib import Path
from typing import List, Optional

from wadmake.constants import WAD_TYPE_IWAD, WAD_TYPE_PWAD
from wadmake.directory import Directory
from wadmake.errors import WadError
from wadmake.pathutil import lump_filename
from wadmake.reader import decode
from wadmake.shell import new_environment, run_script, interact
from wadmake.wad import Wad
from wadmake.writer import save_wad


def _load(archive: str) -> Wad:
    with open(archive, "rb") as f:
        return decode(f)


def cmd_list(archive: str) -> bool:
    """List lumps as ``position<TAB>size<TAB>name``, positions 1-based.

    Args:
        archive: Path to a WAD file.
    """
    wad = _load(archive)
    for pos, lump in enumerate(wad.lumps, start=1):
        print(f"{pos}\t{len(lump.data)}\t{lump.name}")
    return True


def cmd_info(archive: str) -> bool:
    """Show container information.

    Args:
        archive: Path to a WAD file.
    """
    wad = _load(archive)
    print(f"Archive: {archive}")
    print(f"  Type: {wad.type_name.upper()}")
    print(f"  Lumps: {len(wad.lumps)}")
    print(f"  Data bytes: {sum(len(lump.data) for lump in wad.lumps)}")
    return True


def cmd_extract(archive: str, *, outdir: str = ".", names: Optional[list[str]] = None, quiet: bool = False) -> bool:
    """Extract lumps to ``<outdir>/<name>.lmp``.

    A lump whose file name was already used is written as
    ``<name>.<pos>.lmp``, so repeated names (map lumps, markers) and names
    that sanitize alike do not overwrite one another.
    """
    wad = _load(archive)
    wanted = set(names or [])
    os.makedirs(outdir, exist_ok=True)

    seen = set()
    count = 0
    for pos, lump in enumerate(wad.lumps, start=1):
        if wanted and lump.name not in wanted:
            continue
        # Distinct names can sanitize to the same file name.
        fname = lump_filename(lump.name)
        if fname in seen:
            fname = lump_filename(lump.name, ext=f".{pos}.lmp")
        seen.add(fname)

        dst = os.path.join(outdir, fname)
        with open(dst, "wb") as f:
            f.write(lump.data)
        count += 1
        if not quiet:
            print(f"  extracting: {lump.name} -> {dst}")

    if wanted and count == 0:
        print(f"Warning: no lumps named {', '.join(sorted(wanted))} in {archive}", file=sys.stderr)
    if not quiet:
        print(f"Extracted {count} lump(s)")
    return True


def cmd_pack(output: str, inputs: list[str], *, iwad: bool = False, quiet: bool = False) -> bool:
    """Pack files into a new container, one lump per file named after the
    file's stem, in argument order."""
    lumps = Directory()
    for p in inputs:
        path = Path(p)
        lumps.append(path.stem, path.read_bytes())
        if not quiet:
            print(f"  adding: {path} as {path.stem}")

    save_wad(Wad(WAD_TYPE_IWAD if iwad else WAD_TYPE_PWAD, lumps), output)
    if not quiet:
        print(f"Wrote {len(lumps)} lump(s) to {output}")
    return True


def cmd_run(script: str) -> bool:
    """Run a script with the ``wad`` API in scope. Returns False if it raised."""
    if script != "-" and not os.path.isfile(script):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), script)
    env = new_environment()
    try:
        run_script(env, script)
    except Exception:
        traceback.print_exc()
        return False
    return True


def cmd_shell() -> bool:
    interact(new_environment())
    return True


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="wadmake",
        description="Read, write, and script WAD containers",
        epilog="Without a command, an interactive shell is started.",
    )
    sub = ap.add_subparsers(dest="cmd")

    sub.add_parser("shell", help="Interactive shell with the wad API loaded")

    ap_run = sub.add_parser("run", help="Run a script with the wad API loaded")
    ap_run.add_argument("script", help="Script path, or - to read from stdin")

    ap_list = sub.add_parser("list", help="List lumps")
    ap_list.add_argument("archive", help="WAD path")

    ap_info = sub.add_parser("info", help="Show container information")
    ap_info.add_argument("archive", help="WAD path")

    ap_extract = sub.add_parser("extract", help="Extract lumps to files")
    ap_extract.add_argument("archive", help="WAD path")
    ap_extract.add_argument("names", nargs="*", help="Only extract lumps with these names")
    ap_extract.add_argument("--outdir", default=".", help="Output directory")
    ap_extract.add_argument("--quiet", help="limit outputs to summaries only", action="store_true")

    ap_pack = sub.add_parser("pack", help="Pack files into a new WAD")
    ap_pack.add_argument("output", help="Output WAD path")
    ap_pack.add_argument("inputs", nargs="+", help="Input files; each file's stem becomes its lump name")
    ap_pack.add_argument("--iwad", action="store_true", help="Write an IWAD instead of a PWAD")
    ap_pack.add_argument("--quiet", help="limit outputs to summaries only", action="store_true")

    args = ap.parse_args(argv)
    try:
        if args.cmd is None or args.cmd == "shell":
            cmd_shell()
        elif args.cmd == "run":
            success = cmd_run(args.script)
            sys.exit(0 if success else 1)
        elif args.cmd == "list":
            cmd_list(args.archive)
        elif args.cmd == "info":
            cmd_info(args.archive)
        elif args.cmd == "extract":
            cmd_extract(args.archive, outdir=args.outdir, names=args.names, quiet=args.quiet)
        elif args.cmd == "pack":
            cmd_pack(args.output, args.inputs, iwad=args.iwad, quiet=args.quiet)
        else:
            raise RuntimeError("Unknown command")
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (WadError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
