class Diagnostic:
    def __init__(self, line: int, message: str, index: int | None = None):
        self.line = line        # 1-based source line
        self.message = message
        self.index = index      # byte offset of the offending instruction

    def __str__(self) -> str:
        return f"[line {self.line}] {self.message}"

    def __repr__(self):
        return f"Diagnostic({self.line}, {self.message!r})"


class Program:
    def __init__(self, source: bytes, path: str | None = None):
        self.source = bytes(source)        # raw instruction bytes, never mutated
        self.path = path                   # label used in diagnostics only
        self.lines = [0] * len(source)     # byte index -> 1-based line number
        self.jumps = [0] * len(source)     # bracket index -> partner index
        self.diagnostics = []              # list[Diagnostic]

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def link(self, open_index: int, close_index: int):
        self.jumps[open_index] = close_index
        self.jumps[close_index] = open_index

    def report(self, index: int, message: str):
        self.diagnostics.append(Diagnostic(self.lines[index], message, index=index))

