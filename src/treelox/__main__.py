import sys

from treelox.lox import Lox


def main(argv: list[str] | None = None) -> None:
    if argv is None:
        argv = sys.argv[1:]

    if len(argv) > 1:
        print("Usage: treelox [script]")
        sys.exit(64)

    lox = Lox()

    if len(argv) == 1:
        diagnostics = lox.run_file(argv[0])
        if diagnostics.had_error:
            sys.exit(65)
        if diagnostics.had_runtime_error:
            sys.exit(70)
    else:
        lox.run_prompt()


if __name__ == "__main__":
    main()
