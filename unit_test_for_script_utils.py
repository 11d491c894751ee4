#!/usr/bin/python3
"""Unit tests for script utils.

"""

import contextlib
import io
import os
import sys
import tempfile
import unittest

import script_utils as u


class TestScriptUtilsMethods(unittest.TestCase):

  @classmethod
  def setUpClass(cls):
    u.unit_test_enable()

  def tearDown(self):
    u.reset_verbosity()

  def test_error_raises_in_unittest_mode(self):
    errf = io.StringIO()
    with contextlib.redirect_stderr(errf):
      with self.assertRaises(u.FatalError):
        u.error("flarpish")
    self.assertEqual(errf.getvalue(), "error: flarpish\n")

  def test_warning(self):
    errf = io.StringIO()
    with contextlib.redirect_stderr(errf):
      u.warning("glom")
    self.assertEqual(errf.getvalue(), "warning: glom\n")

  def test_verbose_levels(self):
    errf = io.StringIO()
    with contextlib.redirect_stderr(errf):
      u.verbose(1, "hidden")
      u.increment_verbosity()
      self.assertEqual(u.verbosity_level(), 1)
      u.verbose(1, "shown")
      u.verbose(2, "also hidden")
    self.assertEqual(errf.getvalue(), "shown\n")

  def test_open_input_stdin(self):
    saved = sys.stdin
    sys.stdin = io.TextIOWrapper(io.BytesIO(b"x\ry\n"))
    try:
      inf = u.open_input(None)
      self.assertTrue(inf is sys.stdin.buffer)
      self.assertEqual(inf.readlines(), [b"x\ry\n"])
    finally:
      sys.stdin = saved

  def test_open_input_file(self):
    with tempfile.NamedTemporaryFile(mode="w", suffix=".txt") as outf:
      outf.write("foo\nbar\n")
      outf.flush()
      inf = u.open_input(outf.name)
      try:
        self.assertEqual(inf.readlines(), [b"foo\n", b"bar\n"])
      finally:
        inf.close()

  def test_open_input_missing(self):
    tdir = tempfile.mkdtemp()
    try:
      with self.assertRaises(u.FatalError):
        u.open_input(os.path.join(tdir, "nope"))
    finally:
      os.rmdir(tdir)


if __name__ == "__main__":
  unittest.main()
