#!/usr/bin/python3
"""Utility functions shared by the line filter scripts.

This module contains common utilities such as wrappers for
error/warning reporting, debug tracing and input selection. These
functions are shared by the command line front ends.

"""

import sys

# Debugging verbosity level (0 -> no output)
flag_debug = 0

# Unit testing mode. If set to 1, throw exception instead of calling exit()
flag_unittest = 0


class FatalError(Exception):
  """Raised by error() in place of exiting when unit testing."""
  pass


def verbose(level, msg):
  """Print debug trace output if verbosity level is >= value in 'level'."""
  if level <= flag_debug:
    sys.stderr.write(msg + "\n")


def verbosity_level():
  """Return debug trace level."""
  return flag_debug


def increment_verbosity():
  """Increment debug trace level by 1."""
  global flag_debug
  flag_debug += 1


def reset_verbosity():
  """Turn debug tracing back off."""
  global flag_debug
  flag_debug = 0


def unit_test_enable():
  """Set unit testing mode."""
  global flag_unittest
  sys.stderr.write("+++ unit testing mode enabled +++\n")
  flag_unittest = 1


def warning(msg):
  """Issue a warning to stderr."""
  sys.stderr.write("warning: " + msg + "\n")


def error(msg):
  """Issue an error to stderr, then exit."""
  errm = "error: " + msg + "\n"
  sys.stderr.write(errm)
  if flag_unittest:
    raise FatalError(errm)
  sys.exit(1)


def open_input(path):
  """Open 'path' for binary line reading, or hand back stdin's byte stream.

  Lines are split on '\\n' only and decoding is left to the caller, so
  file and stdin input number their lines the same way. Issues a fatal
  error if the file can't be opened.
  """
  if not path:
    verbose(1, "reading from stdin")
    return sys.stdin.buffer
  verbose(1, "reading from %s" % path)
  try:
    return open(path, "rb")
  except OSError as e:
    error("unable to open input file %s: %s" % (path, e.strerror))
