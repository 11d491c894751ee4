#!/usr/bin/python3
"""Parse line range expressions and select the matching input lines.

A range expression names a run of 1-based line numbers:

  3        line 3 only
  2..6     lines 2 through 5 (upper bound excluded)
  2...6    lines 2 through 6 (upper bound included)
  3..      line 3 onwards
  ..4      lines 1 through 3
  ...4     lines 1 through 4

Either bound may be left off; an empty expression selects everything.
Expressions are parsed into a half-open (start, end) pair of 0-based
line indexes, and the selector below consumes lines lazily, so input
past the end of the range is never read.

"""

import itertools
import re
import sys

import script_utils as u

# Open upper bound; also the largest line number accepted.
MAX_LINE = sys.maxsize

INCLUSIVE_SEP = "..."
EXCLUSIVE_SEP = ".."

digitsre = re.compile(r"[0-9]+")


class RangeSyntaxError(ValueError):
  """Range expression does not describe a valid line range."""

  def __init__(self, expr, reason):
    ValueError.__init__(self, "bad range expression '%s': %s" % (expr, reason))
    self.expr = expr
    self.reason = reason


class InvalidNumberError(RangeSyntaxError):
  """A bound in the range expression is not a usable line number."""

  def __init__(self, expr, text):
    if not digitsre.fullmatch(text):
      reason = "'%s' is not a line number" % text
    else:
      reason = "line number '%s' out of range" % text
    RangeSyntaxError.__init__(self, expr, reason)
    self.text = text


def parse_line_number(expr, text):
  """Convert an unsigned line number, or None for an empty (open) bound."""
  if not text:
    return None
  if not digitsre.fullmatch(text):
    raise InvalidNumberError(expr, text)
  val = int(text)
  if val > MAX_LINE:
    raise InvalidNumberError(expr, text)
  return val


def normalize_bounds(first, last, inclusive):
  """Map 1-based user bounds onto a 0-based half-open (start, end) pair.

  'first' and 'last' are line numbers or None when open. With an
  inclusive upper bound, line 'last' is the final line selected, which
  as an exclusive 0-based index is 'last' itself; otherwise the range
  stops one line earlier.
  """
  start = 0
  end = MAX_LINE
  if first is not None:
    start = first - 1
  if last is not None:
    end = last if inclusive else last - 1
  return (start, end)


def parse_range(expr):
  """Parse range expression 'expr', returning (start, end) indexes."""
  if INCLUSIVE_SEP in expr:
    lo, hi = expr.split(INCLUSIVE_SEP, 1)
    inclusive = True
  elif EXCLUSIVE_SEP in expr:
    lo, hi = expr.split(EXCLUSIVE_SEP, 1)
    inclusive = False
  elif not expr:
    lo = hi = ""
    inclusive = True
  else:
    # Single line N is just N...N
    lo = hi = expr
    inclusive = True
  first = parse_line_number(expr, lo)
  last = parse_line_number(expr, hi)
  # Line 0 doesn't exist; only an inclusive "up to 0" makes sense.
  if first == 0:
    raise InvalidNumberError(expr, lo)
  if last == 0 and not inclusive:
    raise InvalidNumberError(expr, hi)
  start, end = normalize_bounds(first, last, inclusive)
  if start > end:
    raise RangeSyntaxError(expr, "range starts after it ends")
  u.verbose(1, "range '%s' -> [%d, %d)" % (expr, start, end))
  return (start, end)


def chomp(line):
  """Strip a trailing line terminator."""
  if line.endswith("\n"):
    line = line[:-1]
    if line.endswith("\r"):
      line = line[:-1]
  return line


def decode_lines(rawlines, encoding="utf-8"):
  """Decode byte lines one at a time as they are pulled.

  A bad byte sequence raises UnicodeDecodeError only when the line
  holding it is reached.
  """
  for raw in rawlines:
    yield raw.decode(encoding)


def select_lines(interval, lines):
  """Yield lines whose 0-based position falls within 'interval'.

  Nothing is read from 'lines' once the end of the interval has
  been reached.
  """
  start, end = interval
  if end <= start:
    return
  # islice() wants a bound it can index with; MAX_LINE is one.
  for idx, line in enumerate(itertools.islice(lines, start, min(end, MAX_LINE)),
                             start):
    u.verbose(3, "selected line %d" % (idx + 1))
    yield chomp(line)


def emit_lines(interval, lines, outf):
  """Write selected lines to 'outf', one per line; return line count.

  Read errors from 'lines' propagate after any lines already
  selected have been written.
  """
  count = 0
  for line in select_lines(interval, lines):
    outf.write("%s\n" % line)
    count += 1
  u.verbose(1, "emitted %d lines" % count)
  return count
