from program import Program
from vm import BfiStructureError


OPEN = ord("[")
CLOSE = ord("]")
NEWLINE = ord("\n")


# Walk the source once and:
#  (1) record the line number of every byte,
#  (2) pair each '[' with its ']' in the jump table,
#  (3) collect every unbalanced bracket instead of stopping at the first one.
def prepare(source: bytes, path: str | None = None) -> Program:
    program = Program(source, path=path)
    stack = []

    line = 1
    for i, byte in enumerate(program.source):
        program.lines[i] = line
        if byte == NEWLINE:
            line += 1
        if byte == OPEN:
            stack.append(i)
        elif byte == CLOSE:
            if not stack:
                program.report(i, "Unbalanced ']'")
                continue
            program.link(stack.pop(), i)

    # Leftover opens, reported in the order they appear in the source.
    for i in stack:
        program.report(i, "Unbalanced '['")

    return program


def load(source: bytes, path: str | None = None) -> Program:
    program = prepare(source, path=path)
    if not program.ok:
        raise BfiStructureError(program.diagnostics, path=path)
    return program
