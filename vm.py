import sys

from tape import Tape, TapeBoundsError


class BfiError(Exception):
    pass


class BfiStructureError(BfiError):
    def __init__(self, diagnostics, path: str | None = None):
        super().__init__("unbalanced brackets")
        self.diagnostics = list(diagnostics)
        self.path = path

    def __str__(self) -> str:
        return "\n".join(str(d) for d in self.diagnostics)


class BfiRuntimeError(BfiError):
    def __init__(self, message: str, line: int | None = None, pc: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.pc = pc

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"[line {self.line}] {self.message}"


class TapeMachine:
    def __init__(self, program, tape=None, stdin=None, stdout=None, stderr=None, debug: bool = False):
        if not program.ok:
            raise BfiStructureError(program.diagnostics, path=program.path)

        self.program = program
        self.source = program.source
        self.lines = program.lines
        self.jumps = program.jumps

        self.tape = tape if tape is not None else Tape()
        self.pc = 0                 # index of the next byte to execute

        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.stderr = stderr if stderr is not None else sys.stderr

        self.debug = debug          # enables the '#' snapshot
        self.trace_enabled = False

    @property
    def finished(self) -> bool:
        return self.pc >= len(self.source)

    def snapshot(self) -> str:
        rows = []
        for i in self.tape.window():
            v = self.tape.cells[i]
            marker = ">" if i == self.tape.cursor else " "
            rows.append(f"{marker} [{i:05d}] {v:3d} 0x{v:02X}")
        return "\n".join(rows)

    def step(self) -> bool:
        if self.finished:
            return True

        pc = self.pc
        op = self.source[pc]
        tape = self.tape

        if self.trace_enabled:
            print(
                f"TRACE pc={pc:04d} line={self.lines[pc]} op={chr(op)!r} ptr={tape.cursor} cell={tape.value}",
                file=self.stderr,
            )

        if op == 0x2B:    # +
            tape.inc()
        elif op == 0x2D:  # -
            tape.dec()
        elif op == 0x3E:  # >
            tape.right()
        elif op == 0x3C:  # <
            tape.left()
        elif op == 0x5B:  # [
            if tape.value == 0:
                pc = self.jumps[pc]
        elif op == 0x5D:  # ]
            pc = self.jumps[pc] - 1
        elif op == 0x2E:  # .
            self.stdout.write(bytes((tape.value,)))
        elif op == 0x2C:  # ,
            self.stdout.flush()
            data = self.stdin.read(1)
            if data:
                tape.value = data[0]
        elif op == 0x23:  # #
            if self.debug:
                print(self.snapshot(), file=self.stderr)

        self.pc = pc + 1
        return self.finished

    def run(self):
        try:
            while not self.step():
                pass
        except TapeBoundsError as e:
            raise BfiRuntimeError(str(e), line=self.lines[self.pc], pc=self.pc)
        finally:
            self.stdout.flush()
