import sys
from typing import NoReturn

import colorama

import nostrkey
from nostrkey.cli import main_conv, main_gen, main_pub, main_sign, main_verify
from nostrkey.exceptions import CliArgError

hdrhelp = """\
Usage:
  nostrkey gen [-o keyfile | --save] [-A]
  nostrkey pub [-i SKEY] [-A]
  nostrkey conv KEY...
  nostrkey sign [-i SKEY] [-k KIND] [-t name:value]... [content]
  nostrkey verify [event.json]

Note: sign reads content from stdin and verify reads the event from stdin if
not given as arguments. Secret keys default to the identity saved by gen --save.
"""

genhelp = """\
  -o FILENAME       Write the new nsec to a file instead of printing it
  --save            Write the new nsec to the default identity file
"""

signhelp = """\
  -i SKEY           Secret key (nsec, hex or key file)
  -k KIND           Event kind number (default 1, a text note)
  -t NAME:VALUE     Add a tag to the event
  -A                Auto copy: output is copied to clipboard
"""

cmdhelp = f"""\
Nostrkey {nostrkey.__version__} - secp256k1 keys and signatures for Nostr

{hdrhelp}
{genhelp}
{signhelp}
"""


class Args:

  def __init__(self):
    self.mode = None
    self.files = []
    self.outfile = []
    self.identities = []
    self.tags = []
    self.kind = "1"
    self.save = None
    self.paste = None
    self.debug = None


genargs = dict(
  outfile='-o --out --output'.split(),
  save='--save'.split(),
  paste='-A'.split(),
  debug='--debug'.split(),
)

pubargs = dict(
  identities='-i --identity'.split(),
  paste='-A'.split(),
  debug='--debug'.split(),
)

convargs = dict(
  paste='-A'.split(),
  debug='--debug'.split(),
)

signargs = dict(
  identities='-i --identity'.split(),
  kind='-k --kind'.split(),
  tags='-t --tag'.split(),
  paste='-A'.split(),
  debug='--debug'.split(),
)

verifyargs = dict(debug='--debug'.split(),)

modes = {
  "gen": main_gen,
  "pub": main_pub,
  "conv": main_conv,
  "sign": main_sign,
  "verify": main_verify,
}

modeargs = {
  "gen": genargs,
  "pub": pubargs,
  "conv": convargs,
  "sign": signargs,
  "verify": verifyargs,
}

aliases = {
  "generate": "gen",
  "keygen": "gen",
  "pubkey": "pub",
  "convert": "conv",
}


def argparse():
  # Custom parsing due to argparse module's limitations
  av = sys.argv[1:]
  if not av or any(a.lower() in ('-h', '--help') for a in av):
    first, rest = cmdhelp.rstrip().split('\n', 1)
    if sys.stdout.isatty():
      print(f'\x1B[1;44m{first:78}\x1B[0m\n{rest}')
    else:
      print(f'{first}\n{rest}')
    sys.exit(0)
  if any(a.lower() in ('-v', '--version') for a in av):
    print(cmdhelp.split('\n')[0])
    sys.exit(0)
  args = Args()
  mode = aliases.get(av[0], av[0])
  if mode not in modes:
    sys.stderr.write(' 💣  Invalid or missing command (gen/pub/conv/sign/verify).\n')
    sys.exit(1)
  args.mode, ad = mode, modeargs[mode]

  aiter = iter(av[1:])
  shortargs = [flag[1:] for switches in ad.values() for flag in switches if not flag.startswith("--")]
  for a in aiter:
    aprint = a
    if not a.startswith('-'):
      args.files.append(a)
      continue
    if a == '--':
      args.files += aiter
      break
    if a.startswith('--'):
      a = a.lower()
    if not a.startswith('--') and len(a) > 2:
      falseargs = [arg for arg in a[1:] if arg not in shortargs]
      if falseargs:
        sys.stderr.write(f' 💣  {falseargs} is not an argument: nostrkey {args.mode} {a}\n')
        sys.exit(1)
      a = [f'-{shortarg}' for shortarg in a[1:]]
    if isinstance(a, str):
      a = [a]
    for flag in a:
      argvar = next((k for k, v in ad.items() if flag in v), None)
      if argvar is None:
        sys.stderr.write(f'{hdrhelp}\n 💣  Unknown argument: nostrkey {args.mode} {aprint}\n')
        sys.exit(1)
      try:
        var = getattr(args, argvar)
        if isinstance(var, list):
          var.append(next(aiter))
        elif isinstance(var, str):
          setattr(args, argvar, next(aiter))
        else:
          setattr(args, argvar, True)
      except StopIteration:
        sys.stderr.write(f'{hdrhelp}\n 💣  Argument parameter missing: nostrkey {args.mode} {aprint} …\n')
        sys.exit(1)

  return args


def main() -> NoReturn:
  """
  The main CLI entry point.

  Consider calling nostrkey.secp256k1, nostrkey.bech or nostrkey.event directly if you use from Python code.

  System exit codes:
  * 0 The requested function was completed successfully
  * 1 CLI argument error
  * 2 Interrupted
  * 3 I/O error (broken pipe)
  * 10 Invalid key, signature or other data

  :raises SystemExit: on normal exit or any expected error, including KeyboardInterrupt
  :raises Exception: on unexpected error (report a bug), or on any error with `--debug`
  """
  colorama.init()
  # CLI argument processing
  args = argparse()
  if len(args.outfile) > 1:
    sys.stderr.write(' 💣  Only one output file may be specified\n')
    sys.exit(1)
  args.outfile = args.outfile[0] if args.outfile else None

  # Run the mode-specific main function
  if args.debug:
    modes[args.mode](args)  # --debug makes us not catch errors
    sys.exit(0)
  try:
    modes[args.mode](args)  # Normal run
  except CliArgError as e:
    sys.stderr.write(f" 💣  {e}\n")
    sys.exit(1)
  except ValueError as e:
    sys.stderr.write(f"Error: {e}\n")
    sys.exit(10)
  except BrokenPipeError:
    sys.stderr.write('I/O error (broken pipe)\n')
    sys.exit(3)
  except KeyboardInterrupt:
    sys.stderr.write("Interrupted.\n")
    sys.exit(2)
  sys.exit(0)

if __name__ == "__main__":
  main()
