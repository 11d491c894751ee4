#!/usr/bin/python3
"""Filter to select a range of lines from a file or stdin.

Reads stdin (or the file given with -i) and emits only the lines
named by the range expression, in their original order. Input past
the end of the range is not read.

"""

import getopt
import os
import sys

import linerange
import script_utils as u

# Input file (if not specified, defaults to stdin)
flag_infile = None

# Range expression to apply
flag_range = None


def perform():
  """Main driver routine."""
  try:
    interval = linerange.parse_range(flag_range)
  except linerange.RangeSyntaxError as e:
    u.error(str(e))
  inf = u.open_input(flag_infile)
  try:
    linerange.emit_lines(interval, linerange.decode_lines(inf), sys.stdout)
  except (OSError, UnicodeDecodeError) as e:
    u.error("I/O error while reading %s: %s" % (flag_infile or "stdin", e))
  finally:
    if flag_infile:
      inf.close()


def usage(msgarg):
  """Print usage and exit."""
  me = os.path.basename(sys.argv[0])
  if msgarg:
    sys.stderr.write("error: %s\n" % msgarg)
  sys.stderr.write("""\
    usage:  %s [options] RANGE < input > output

    options:
    -d    increase debug msg verbosity level
    -i F  read from input file F

    examples of RANGE:
    '3'      line 3 only
    '2..6'   lines 2 to 6 exclusive
    '2...6'  lines 2 to 6 inclusive
    '3..'    lines 3 onwards
    '..4'    lines 1 to 4 exclusive

    """ % me)
  sys.exit(1)


def parse_args():
  """Command line argument parsing."""
  global flag_infile, flag_range

  try:
    optlist, args = getopt.getopt(sys.argv[1:], "dhi:")
  except getopt.GetoptError as err:
    # unrecognized option
    usage(str(err))

  for opt, arg in optlist:
    if opt == "-d":
      u.increment_verbosity()
    elif opt == "-h":
      usage(None)
    elif opt == "-i":
      flag_infile = arg
  if len(args) != 1:
    usage("supply exactly one range expression")
  flag_range = args[0]


def main():
  parse_args()
  perform()


if __name__ == "__main__":
  main()
