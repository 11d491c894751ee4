#!/usr/bin/python3
"""Unit tests for line range parsing and selection.

"""

import contextlib
import io
import unittest

import linerange as lr
import script_utils as u

MAX = lr.MAX_LINE

LETTERS = "a\nb\nc\nd\ne\nf\ng\n"


def pick(expr, text=LETTERS):
  """Apply range 'expr' to 'text', returning the output as a string."""
  outf = io.StringIO()
  lr.emit_lines(lr.parse_range(expr), io.StringIO(text), outf)
  return outf.getvalue()


class CountingLines:
  """Line iterator that records how many lines were pulled."""

  def __init__(self, n):
    self.n = n
    self.pulled = 0

  def __iter__(self):
    return self

  def __next__(self):
    if self.pulled >= self.n:
      raise StopIteration
    self.pulled += 1
    return "line %d\n" % self.pulled


class FailingLines:
  """Line iterator that raises an I/O error after 'good' lines."""

  def __init__(self, good):
    self.good = good
    self.pulled = 0

  def __iter__(self):
    return self

  def __next__(self):
    if self.pulled >= self.good:
      raise OSError(5, "Input/output error")
    self.pulled += 1
    return "ok %d\n" % self.pulled


class TestParseRange(unittest.TestCase):

  def test_single(self):
    self.assertEqual(lr.parse_range("3"), (2, 3))
    self.assertEqual(lr.parse_range("1"), (0, 1))

  def test_exclusive(self):
    self.assertEqual(lr.parse_range("2..6"), (1, 5))
    self.assertEqual(lr.parse_range("3.."), (2, MAX))
    self.assertEqual(lr.parse_range("..4"), (0, 3))

  def test_inclusive(self):
    self.assertEqual(lr.parse_range("2...6"), (1, 6))
    self.assertEqual(lr.parse_range("3..."), (2, MAX))
    self.assertEqual(lr.parse_range("...4"), (0, 4))

  def test_open(self):
    self.assertEqual(lr.parse_range(""), (0, MAX))
    self.assertEqual(lr.parse_range("..."), (0, MAX))
    self.assertEqual(lr.parse_range(".."), (0, MAX))

  def test_empty_but_ordered(self):
    self.assertEqual(lr.parse_range("5..5"), (4, 4))
    self.assertEqual(lr.parse_range("..1"), (0, 0))

  def test_exclusive_matches_inclusive_minus_one(self):
    for a in range(1, 6):
      for b in range(a + 1, 9):
        self.assertEqual(lr.parse_range("%d..%d" % (a, b)),
                         lr.parse_range("%d...%d" % (a, b - 1)))

  def test_bad_numbers(self):
    for expr in ["abc", "2.6", " 3", "3 ", "+3", "-1", "1..x", "x...2",
                 "0", "0..3", "0...0", "..0", "3..0", "2....5", "1...2...3",
                 "²"]:
      with self.assertRaises(lr.InvalidNumberError):
        lr.parse_range(expr)

  def test_zero_inclusive_end(self):
    self.assertEqual(lr.parse_range("...0"), (0, 0))
    self.assertEqual(lr.parse_range("1...0"), (0, 0))
    self.assertEqual(pick("...0"), "")
    with self.assertRaises(lr.RangeSyntaxError):
      lr.parse_range("2...0")

  def test_invalid_number_is_syntax_error(self):
    with self.assertRaises(lr.RangeSyntaxError):
      lr.parse_range("2.6")
    with self.assertRaises(ValueError):
      lr.parse_range("abc")

  def test_overflow(self):
    big = str(MAX + 1)
    with self.assertRaises(lr.InvalidNumberError) as cm:
      lr.parse_range(big)
    self.assertIn("out of range", str(cm.exception))
    self.assertEqual(lr.parse_range("%d..." % MAX), (MAX - 1, MAX))

  def test_backwards(self):
    with self.assertRaises(lr.RangeSyntaxError) as cm:
      lr.parse_range("5...2")
    self.assertFalse(isinstance(cm.exception, lr.InvalidNumberError))
    with self.assertRaises(lr.RangeSyntaxError):
      lr.parse_range("6..5")

  def test_error_mentions_expr(self):
    with self.assertRaises(lr.RangeSyntaxError) as cm:
      lr.parse_range("1..zz")
    self.assertEqual(cm.exception.expr, "1..zz")
    self.assertIn("'zz'", str(cm.exception))


class TestSelectLines(unittest.TestCase):

  def test_scenarios(self):
    self.assertEqual(pick("2...5"), "b\nc\nd\ne\n")
    self.assertEqual(pick("2..5"), "b\nc\nd\n")
    self.assertEqual(pick("4"), "d\n")
    self.assertEqual(pick("3.."), "c\nd\ne\nf\ng\n")
    self.assertEqual(pick("..4"), "a\nb\nc\n")
    self.assertEqual(pick(""), LETTERS)

  def test_past_end(self):
    self.assertEqual(pick("9"), "")
    self.assertEqual(pick("8.."), "")
    self.assertEqual(pick("6...20"), "f\ng\n")

  def test_reselect_is_identity(self):
    first = pick("2...5")
    self.assertEqual(pick("1...4", first), first)

  def test_missing_final_newline(self):
    self.assertEqual(pick("2..", "x\ny\nz"), "y\nz\n")

  def test_crlf(self):
    self.assertEqual(pick("1...2", "x\r\ny\r\nz\r\n"), "x\ny\n")

  def test_blank_lines_kept(self):
    self.assertEqual(pick("2...3", "x\n\n\ny\n"), "\n\n")

  def test_stops_early(self):
    src = CountingLines(1000)
    got = list(lr.select_lines(lr.parse_range("3...5"), src))
    self.assertEqual(got, ["line 3", "line 4", "line 5"])
    self.assertEqual(src.pulled, 5)

  def test_open_end_reads_all(self):
    src = CountingLines(50)
    got = list(lr.select_lines(lr.parse_range("48.."), src))
    self.assertEqual(got, ["line 48", "line 49", "line 50"])
    self.assertEqual(src.pulled, 50)

  def test_reversed_interval_is_empty(self):
    src = CountingLines(10)
    self.assertEqual(list(lr.select_lines((5, 2), src)), [])
    self.assertEqual(list(lr.select_lines((3, 3), src)), [])
    self.assertEqual(src.pulled, 0)

  def test_read_error_keeps_earlier_output(self):
    outf = io.StringIO()
    with self.assertRaises(OSError):
      lr.emit_lines((0, MAX), FailingLines(2), outf)
    self.assertEqual(outf.getvalue(), "ok 1\nok 2\n")

  def test_count(self):
    outf = io.StringIO()
    n = lr.emit_lines(lr.parse_range("2..5"), io.StringIO(LETTERS), outf)
    self.assertEqual(n, 3)

  def test_decode_stops_before_bad_line(self):
    raw = io.BytesIO(b"ok\n\xff\xfe\nnever\n")
    outf = io.StringIO()
    n = lr.emit_lines(lr.parse_range("1"), lr.decode_lines(raw), outf)
    self.assertEqual(n, 1)
    self.assertEqual(outf.getvalue(), "ok\n")

  def test_decode_error_keeps_earlier_output(self):
    raw = io.BytesIO(b"ok\n\xff\xfe\nnever\n")
    outf = io.StringIO()
    with self.assertRaises(UnicodeDecodeError):
      lr.emit_lines(lr.parse_range("1..."), lr.decode_lines(raw), outf)
    self.assertEqual(outf.getvalue(), "ok\n")

  def test_lone_cr_is_not_a_line_break(self):
    raw = io.BytesIO(b"x\ry\nz\r\n")
    got = list(lr.select_lines(lr.parse_range("1..."), lr.decode_lines(raw)))
    self.assertEqual(got, ["x\ry", "z"])

  def test_verbose_trace(self):
    u.increment_verbosity()
    u.increment_verbosity()
    u.increment_verbosity()
    errf = io.StringIO()
    try:
      with contextlib.redirect_stderr(errf):
        self.assertEqual(pick("7"), "g\n")
    finally:
      u.reset_verbosity()
    self.assertIn("range '7' -> [6, 7)", errf.getvalue())
    self.assertIn("selected line 7\n", errf.getvalue())
    self.assertIn("emitted 1 lines", errf.getvalue())


if __name__ == "__main__":
  unittest.main()
