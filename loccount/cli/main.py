import logging
import sys
from .arguments import build_parser
from .runner import run_analysis, build_output
from loccount.analyzers.loc.errors import LocCountError

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "analyze":
        if args.verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
            for name in ("loccount.counter", "loccount.classifier"):
                logging.getLogger(name).setLevel(logging.DEBUG)
        else:
            logging.basicConfig(level=logging.WARNING, format="%(name)s: %(message)s")

        try:
            collection = run_analysis(
                args.path,
                exclude=args.exclude,
                workers=args.workers,
                max_line_length=args.max_line_length,
                debug=args.verbose,
            )
            output = build_output(
                collection,
                as_json=args.json,
                by_file=args.by_file,
                line_numbers=args.line_numbers,
                whitelist=args.whitelist,
            )
        except (FileNotFoundError, LocCountError) as exc:
            print(f"loccount: {exc}", file=sys.stderr)
            return 1

        if args.output:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(output)
        else:
            print(output)

    return 0

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
