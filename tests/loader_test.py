from loader import load, prepare
from vm import BfiStructureError


def pairs(program):
    out = []
    for i, b in enumerate(program.source):
        if b == ord("["):
            out.append((i, program.jumps[i]))
    return out


def test_balanced_program_links_both_directions():
    program = prepare(b"+[>[-]<-]")
    assert program.ok
    assert pairs(program) == [(1, 8), (3, 5)]
    for open_i, close_i in pairs(program):
        assert program.jumps[close_i] == open_i


def test_nested_pairs_do_not_straddle():
    program = prepare(b"[[][[]]]")
    assert program.ok
    spans = pairs(program)
    for a_open, a_close in spans:
        for b_open, b_close in spans:
            if a_open < b_open < a_close:
                assert b_close < a_close


def test_line_table_counts_newline_on_its_own_line():
    program = prepare(b"+\n-\n\n.")
    assert program.lines == [1, 1, 2, 2, 3, 4]


def test_lone_close():
    program = prepare(b"]")
    assert not program.ok
    assert [str(d) for d in program.diagnostics] == ["[line 1] Unbalanced ']'"]


def test_lone_open():
    program = prepare(b"[")
    assert not program.ok
    assert [str(d) for d in program.diagnostics] == ["[line 1] Unbalanced '['"]


def test_outer_open_left_unmatched():
    program = prepare(b"[[]")
    assert [str(d) for d in program.diagnostics] == ["[line 1] Unbalanced '['"]
    assert program.diagnostics[0].index == 0
    assert program.jumps[1] == 2 and program.jumps[2] == 1


def test_all_imbalances_are_collected_in_order():
    program = prepare(b"]\n[\n]]\n[\n[")
    messages = [str(d) for d in program.diagnostics]
    assert messages == [
        "[line 1] Unbalanced ']'",
        "[line 3] Unbalanced ']'",
        "[line 4] Unbalanced '['",
        "[line 5] Unbalanced '['",
    ]


def test_close_reports_its_own_line():
    program = prepare(b"+\n+\n]")
    assert program.diagnostics[0].line == 3


def test_comments_are_ignored():
    program = prepare(b"hello world, no brackets here.")
    assert program.ok


def test_empty_source():
    program = prepare(b"")
    assert program.ok
    assert program.lines == [] and program.jumps == []


def test_load_raises_with_every_diagnostic():
    try:
        load(b"][", path="bad.bf")
    except BfiStructureError as e:
        assert e.path == "bad.bf"
        assert len(e.diagnostics) == 2
        assert str(e) == "[line 1] Unbalanced ']'\n[line 1] Unbalanced '['"
    else:
        raise AssertionError("expected BfiStructureError")


def test_load_returns_valid_program():
    program = load(b"[]", path="ok.bf")
    assert program.path == "ok.bf"
    assert program.jumps == [1, 0]


if __name__ == "__main__":
    for name, fn in list(globals().items()):
        if name.startswith("test_"):
            fn()
    print("ok")
