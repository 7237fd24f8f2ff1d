CELL_COUNT = 30000


class TapeBoundsError(Exception):
    def __init__(self, op: str, cursor: int):
        super().__init__(f"'{op}' causes cell out of bounds")
        self.op = op
        self.cursor = cursor


# Fixed cell array; the cursor never leaves [0, size) and cells wrap modulo 256.
class Tape:
    def __init__(self, size: int = CELL_COUNT):
        if size < 1:
            raise ValueError("tape size must be positive")
        self.size = size
        self.cells = bytearray(size)
        self.cursor = 0

    @property
    def value(self) -> int:
        return self.cells[self.cursor]

    @value.setter
    def value(self, v: int):
        self.cells[self.cursor] = v & 0xFF

    def inc(self):
        self.cells[self.cursor] = (self.cells[self.cursor] + 1) & 0xFF

    def dec(self):
        self.cells[self.cursor] = (self.cells[self.cursor] - 1) & 0xFF

    def right(self):
        if self.cursor == self.size - 1:
            raise TapeBoundsError(">", self.cursor)
        self.cursor += 1

    def left(self):
        if self.cursor == 0:
            raise TapeBoundsError("<", self.cursor)
        self.cursor -= 1

    def window(self, width: int = 10, back: int = 2) -> range:
        start = max(0, self.cursor - back)
        end = min(self.size, start + width)
        return range(start, end)
