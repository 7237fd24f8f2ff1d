import sys

from loader import prepare
from tape import Tape
from vm import BfiError, TapeMachine


VERSION = "1.0.0"

USAGE = """Usage: bfi [--debug] [--trace] [--check] FILE

Options:
  --debug        enable the '#' tape snapshot instruction
  --trace        print every executed instruction to stderr
  --check        validate FILE without running it
  -h, --help     show this message and exit
  -V, --version  show the version and exit"""


class ErrorReporter:
    def __init__(self, stream):
        self.stream = stream
        self.color = hasattr(stream, "isatty") and stream.isatty()
        self._colorama_inited = False

    def _ensure_colorama(self):
        if self._colorama_inited:
            return
        self._colorama_inited = True
        import colorama

        colorama.just_fix_windows_console()

    def __call__(self, message):
        prefix = "error: "
        if self.color:
            self._ensure_colorama()
            prefix = "\x1b[31merror:\x1b[0m "
        print(f"{prefix}{message}", file=self.stream)
        self.stream.flush()


def parse_args(argv, out, errorf):
    # Returns (options, exit_code); exit_code is None when the caller should run.
    opts = {"path": None, "debug": False, "trace": False, "check": False}

    if not argv:
        print(USAGE, file=out)
        return opts, 1

    for arg in argv:
        if arg in ("-h", "--help"):
            print(USAGE, file=out)
            return opts, 0
        if arg in ("-V", "--version"):
            print(f"bfi {VERSION}", file=out)
            return opts, 0
        if arg == "--debug":
            opts["debug"] = True
            continue
        if arg == "--trace":
            opts["trace"] = True
            continue
        if arg == "--check":
            opts["check"] = True
            continue
        if arg.startswith("-"):
            errorf(f"Unrecognized command line option '{arg}'")
            return opts, 1
        if opts["path"] is not None:
            errorf("More than one file provided")
            return opts, 1
        opts["path"] = arg

    if opts["path"] is None:
        print(USAGE, file=out)
        return opts, 1

    return opts, None


def cmd_run(path, stdin, stdout, errorf, debug: bool = False, trace: bool = False, check: bool = False) -> int:
    try:
        with open(path, "rb") as f:
            source = f.read()
    except OSError as e:
        errorf(e.strerror or str(e))
        return 1

    program = prepare(source, path=path)
    if not program.ok:
        for diag in program.diagnostics:
            errorf(str(diag))
        return 1
    if check:
        return 0

    machine = TapeMachine(program, tape=Tape(), stdin=stdin, stdout=stdout, stderr=errorf.stream, debug=debug)
    machine.trace_enabled = trace
    try:
        machine.run()
    except BfiError as e:
        errorf(str(e))
        return 1
    return 0


def main(argv=None, stdin=None, stdout=None, stderr=None, out=None) -> int:
    # stdout is the binary program output; out takes usage and version text.
    if argv is None:
        argv = sys.argv[1:]
    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout.buffer
    stderr = stderr if stderr is not None else sys.stderr
    out = out if out is not None else sys.stdout

    errorf = ErrorReporter(stderr)
    opts, status = parse_args(argv, out, errorf)
    if status is not None:
        return status

    try:
        return cmd_run(
            opts["path"],
            stdin,
            stdout,
            errorf,
            debug=opts["debug"],
            trace=opts["trace"],
            check=opts["check"],
        )
    except MemoryError:
        errorf("Out of memory")
        return 1


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
