import json
import sys

import pyperclip

from nostrkey import bech, event, path, pubkey
from nostrkey.exceptions import CliArgError, MalformedKeyError


def output(args, data):
  """Print the result, or put it on clipboard with -A."""
  if args.paste:
    pyperclip.copy(data)
    sys.stderr.write(" 📋 copied\n")
    return
  sys.stdout.write(f"{data}\n")
  sys.stdout.flush()


def load_identity(args):
  if len(args.identities) > 1:
    raise CliArgError("Only one secret key may be specified")
  keystr = args.identities[0] if args.identities else str(path.keyfile)
  if not args.identities and not path.keyfile.exists():
    raise CliArgError(f"No secret key given and {path.keyfile} does not exist. Use -i or nostrkey gen --save")
  keys = pubkey.read_sk_any(keystr)
  if len(keys) > 1:
    raise CliArgError(f"{keystr} holds {len(keys)} keys, pick one with -i")
  return keys[0]


def main_gen(args):
  if args.files:
    raise CliArgError("No arguments are accepted by gen")
  if args.save and args.outfile:
    raise CliArgError("Use either --save or -o, not both")
  key = pubkey.Key()
  outfile = args.outfile
  if args.save:
    path.create_datadir()
    outfile = path.keyfile
  if outfile:
    try:
      pubkey.write_sk_file(outfile, key)
    except FileExistsError:
      raise ValueError(f"{outfile} already exists, not overwriting")
    sys.stderr.write(f" 💾 {outfile}\n")
  sys.stderr.write(f"\x1B[1m 🔑 {key.npub}\x1B[0m\n")
  if not outfile:
    output(args, key.nsec)


def main_pub(args):
  if args.files:
    raise CliArgError("Use -i to give the secret key")
  key = load_identity(args)
  sys.stderr.write(f" 🔷 {key.pk}\n")
  output(args, key.npub)


def conv(keystr: str) -> str:
  """Convert a key between bech32 and hex forms."""
  lower = keystr.lower()
  if lower.startswith(bech.NSEC + "1"):
    return bech.decode_nsec(keystr)
  if lower.startswith(bech.NPUB + "1"):
    return bech.decode_npub(keystr)
  if len(keystr) == 64:
    return bech.encode_nsec(keystr)
  if len(keystr) == 66:
    return bech.encode_npub(keystr)
  raise MalformedKeyError(f"Unrecognized key {keystr!r}")


def main_conv(args):
  if not args.files:
    raise CliArgError("Give one or more keys to convert")
  output(args, "\n".join(conv(k) for k in args.files))


def main_sign(args):
  key = load_identity(args)
  kind = int(args.kind) if args.kind.isdecimal() else None
  if kind is None:
    raise CliArgError(f"Event kind must be a number, not {args.kind!r}")
  content = " ".join(args.files) if args.files else sys.stdin.read()
  ev = event.create_event(kind, content, event.parse_tags(args.tags), key.sk)
  sys.stderr.write(f"\x1B[1m 🖋️ {ev['id']}\x1B[0m\n")
  output(args, json.dumps(ev, ensure_ascii=False))


def main_verify(args):
  if len(args.files) > 1:
    raise CliArgError("Only one event file may be verified at a time")
  if args.files:
    with open(args.files[0], encoding="utf-8") as f:
      data = f.read()
  else:
    data = sys.stdin.read()
  try:
    ev = json.loads(data)
  except json.JSONDecodeError as e:
    raise ValueError(f"Event is not valid JSON: {e}")
  if not isinstance(ev, dict):
    raise ValueError("Event should be a JSON object")
  event.verify_event(ev)
  key = pubkey.decode_pk(ev["pubkey"])
  sys.stderr.write(f" ✅ Signed by {key.npub}\n")
