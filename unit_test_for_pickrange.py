#!/usr/bin/python3
"""Unit tests for the pickrange filter script.

"""

import os
import subprocess
import sys
import tempfile
import unittest

import pickrange
import script_utils as u

here = os.path.dirname(os.path.abspath(__file__))
script = os.path.join(here, "pickrange.py")

LETTERS = "a\nb\nc\nd\ne\nf\ng\n"


def run_filter(args, instring=""):
  """Run pickrange.py with 'args', returning (rc, stdout, stderr)."""
  env = dict(os.environ)
  env["PYTHONUTF8"] = "1"
  res = subprocess.run([sys.executable, script] + args,
                       input=instring if isinstance(instring, bytes)
                       else instring.encode("utf-8"),
                       stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                       env=env)
  return (res.returncode, res.stdout.decode("utf-8"),
          res.stderr.decode("utf-8"))


class TestPickRangeScript(unittest.TestCase):

  def test_stdin_inclusive(self):
    rc, out, _ = run_filter(["2...5"], LETTERS)
    self.assertEqual(rc, 0)
    self.assertEqual(out, "b\nc\nd\ne\n")

  def test_stdin_exclusive(self):
    rc, out, _ = run_filter(["..4"], LETTERS)
    self.assertEqual(rc, 0)
    self.assertEqual(out, "a\nb\nc\n")

  def test_infile(self):
    with tempfile.NamedTemporaryFile(mode="w", suffix=".txt") as inf:
      inf.write(LETTERS)
      inf.flush()
      rc, out, _ = run_filter(["-i", inf.name, "3.."])
    self.assertEqual(rc, 0)
    self.assertEqual(out, "c\nd\ne\nf\ng\n")

  def test_beyond_end(self):
    rc, out, err = run_filter(["12"], LETTERS)
    self.assertEqual(rc, 0)
    self.assertEqual(out, "")
    self.assertEqual(err, "")

  def test_bad_range(self):
    rc, out, err = run_filter(["2.6"], LETTERS)
    self.assertEqual(rc, 1)
    self.assertEqual(out, "")
    self.assertTrue(err.startswith("error: bad range expression '2.6'"))

  def test_backwards_range(self):
    rc, _, err = run_filter(["5...2"], LETTERS)
    self.assertEqual(rc, 1)
    self.assertIn("starts after it ends", err)

  def test_missing_file(self):
    missing = os.path.join(here, "no-such-input-file.txt")
    rc, out, err = run_filter(["-i", missing, "1"])
    self.assertEqual(rc, 1)
    self.assertEqual(out, "")
    self.assertIn("unable to open input file", err)

  def test_read_failure(self):
    with tempfile.NamedTemporaryFile(mode="wb", suffix=".txt") as inf:
      inf.write(b"ok\n\xff\xfe\xfd\n")
      inf.flush()
      rc, out, err = run_filter(["-i", inf.name, "1..."])
    self.assertEqual(rc, 1)
    self.assertEqual(out, "ok\n")
    self.assertIn("I/O error while reading", err)

  def test_bad_bytes_past_end_not_read(self):
    bad = b"ok\n\xff\n"
    with tempfile.NamedTemporaryFile(mode="wb", suffix=".txt") as inf:
      inf.write(bad)
      inf.flush()
      rc, out, err = run_filter(["-i", inf.name, "1"])
    self.assertEqual((rc, out, err), (0, "ok\n", ""))
    rc, out, err = run_filter(["1"], bad)
    self.assertEqual((rc, out, err), (0, "ok\n", ""))

  def test_lone_cr_same_for_file_and_stdin(self):
    data = b"x\ry\nz\n"
    with tempfile.NamedTemporaryFile(mode="wb", suffix=".txt") as inf:
      inf.write(data)
      inf.flush()
      rc, out, _ = run_filter(["-i", inf.name, "2"])
    self.assertEqual((rc, out), (0, "z\n"))
    rc, out, _ = run_filter(["2"], data)
    self.assertEqual((rc, out), (0, "z\n"))

  def test_usage(self):
    rc, out, err = run_filter([], LETTERS)
    self.assertEqual(rc, 1)
    self.assertEqual(out, "")
    self.assertIn("supply exactly one range expression", err)
    self.assertIn("usage:", err)
    rc, _, err = run_filter(["-q", "3"], LETTERS)
    self.assertEqual(rc, 1)
    self.assertIn("option -q not recognized", err)

  def test_debug_goes_to_stderr(self):
    rc, out, err = run_filter(["-d", "4"], LETTERS)
    self.assertEqual(rc, 0)
    self.assertEqual(out, "d\n")
    self.assertIn("range '4' -> [3, 4)", err)
    self.assertIn("emitted 1 lines", err)


class TestPickRangePerform(unittest.TestCase):

  @classmethod
  def setUpClass(cls):
    u.unit_test_enable()

  def tearDown(self):
    pickrange.flag_infile = None
    pickrange.flag_range = None

  def test_perform_bad_range(self):
    pickrange.flag_range = "abc"
    with self.assertRaises(u.FatalError):
      pickrange.perform()

  def test_perform_missing_file(self):
    pickrange.flag_range = "1"
    pickrange.flag_infile = os.path.join(here, "no-such-input-file.txt")
    with self.assertRaises(u.FatalError):
      pickrange.perform()


if __name__ == "__main__":
  unittest.main()
