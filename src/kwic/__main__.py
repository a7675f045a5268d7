from __future__ import annotations
import argparse, sys
from . import config as CFG
from .engine import Engine
from .errors import MalformedInputError
from .render import format_table, to_json, write_index


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="kwic", description="KWIC index: all circular shifts, sorted")
    p.add_argument("paths", nargs="*", help="Input files or folders (scanned for .txt)")
    p.add_argument("--stdin", action="store_true", help="Read lines from standard input")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--numbered", action="store_true", help="Print rank, line and shift columns")
    p.add_argument("--lookup", default=None, help="Only print shifts starting with this keyword")
    p.add_argument("--prefix", action="store_true", help="Treat --lookup as a word prefix")
    p.add_argument("--repl", action="store_true", help="Interactive keyword lookup after build")
    p.add_argument("--workers", type=int, default=None, help="Threads for sorting (default: config)")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    if not args.paths and not args.stdin:
        p.error("give at least one path or --stdin")
    if args.workers is not None and args.workers < 1:
        p.error("--workers must be >= 1")

    eng = Engine(verbose=args.verbose or CFG.VERBOSE)
    try:
        try:
            if args.paths:
                eng.load(args.paths)
            if args.stdin:
                eng.load_stream(sys.stdin.buffer)
        except MalformedInputError as exc:
            print(f"kwic: {exc}", file=sys.stderr)
            return 1

        eng.build(workers=args.workers)
        index = eng.index

        def show(entries):
            if args.json:
                print(to_json(entries))
            elif args.numbered:
                print(format_table(entries))
            else:
                for e in entries:
                    print(e.text)

        if args.lookup is not None:
            show(index.lookup(args.lookup, prefix=args.prefix))
        elif not args.repl:
            if args.json or args.numbered:
                show(list(index))
            else:
                write_index(index, sys.stdout)

        if args.repl:
            print("Type a keyword (empty line to exit).")
            while True:
                try:
                    q = input("> ").strip()
                except (EOFError, KeyboardInterrupt):
                    break
                if not q:
                    break
                hits = index.lookup(q, prefix=args.prefix)
                if not hits:
                    print("(no matches)")
                    continue
                show(hits)

        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
