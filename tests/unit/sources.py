"""Sample sources shared by the layout and emitter tests."""

# Line 3 is "let loop = 1;" starting at byte 11, so "loop" is bytes 15..19.
FIVE_LINES = "alpha\nbeta\nlet loop = 1;\ngamma\ndelta\n"

# Line starts: 0, 6, 16, 21, 28.
CALL_SOURCE = "start\ncall(one,\ntwo,\nthree)\nend\n"

# Line 2 is "let x = foo(bar);" starting at byte 12: "foo" is 20..23 and "bar" is 24..27.
SAME_LINE_SOURCE = "fn main() {\nlet x = foo(bar);\n}\n"

# Eight lines; a span from line 1 to line 8 has six interior lines.
LONG_BLOCK = "".join(f"line {n}\n" for n in range(1, 9))
