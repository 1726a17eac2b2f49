import os
from typing import Optional

from nostrkey import bech, secp256k1
from nostrkey.exceptions import MalformedKeyError
from nostrkey.secp256k1 import Point
from nostrkey.util import fromhex, tohex


class Key:

  def __init__(self, *, keystr="", sk: Optional[str] = None, pk: Optional[str] = None):
    self.keystr = keystr
    # Create a new keypair if no parameters were given
    if sk is None and pk is None:
      sk = secp256k1.generate_private_key()
    self.sk = None if sk is None else tohex(fromhex(sk, 32))
    self.pk = None if pk is None else tohex(fromhex(pk, 33))
    self._generate_public()
    self._validate()

  def __eq__(self, other):
    # If pk matches, everything else matches too
    return self.pk == other.pk

  def __hash__(self):
    return hash(self.pk)

  def __repr__(self):
    return f"Key[{self.pk[:10]}:{'SK' if self.sk else 'PK'}]"

  @property
  def npub(self) -> str:
    return bech.encode_npub(self.pk)

  @property
  def nsec(self) -> str:
    if not self.sk: raise ValueError(f"No secret key available for {self!r}")
    return bech.encode_nsec(self.sk)

  def _generate_public(self):
    """Convert secret key to public"""
    if self.sk:
      pk_conv = secp256k1.get_public_key(self.sk)
      if self.pk and self.pk != pk_conv:
        raise ValueError("Secret and public key mismatch")
      self.pk = pk_conv

  def _validate(self):
    """Test that the public key is a curve point and, with a secret key, that signing works"""
    try:
      Point.from_bytes(fromhex(self.pk))
    except ValueError:
      raise MalformedKeyError(f"Invalid secp256k1 public key {self.pk}")
    if self.sk:
      msghash = secp256k1.shabytes(b"Message")
      secp256k1.verify(self.pk, msghash, secp256k1.sign(self.sk, msghash))


def read_sk_any(keystr):
  """Key from a secret key string, or a list of keys from a key file."""
  try:
    return [decode_sk(keystr)]
  except ValueError:
    if not os.path.isfile(keystr):
      raise
  return read_sk_file(keystr)


def read_sk_file(keystr):
  if not os.path.isfile(keystr):
    raise ValueError(f"Secret key file {keystr} not found")
  with open(keystr, "rb") as f:
    try:
      lines = f.read().decode().replace('\r\n', '\n').rstrip().split('\n')
    except ValueError:
      raise ValueError(f"Keyfile {keystr} could not be decoded. Only UTF-8 text is supported.")
  # A key token per line, except skip comments and empty lines
  keys = [decode_sk(l.strip()) for l in lines if l.strip() and not l.startswith('#')]
  if not keys:
    raise ValueError(f'No secret keys found in {keystr}')
  for i, k in enumerate(keys, 1):
    k.keystr = f"{keystr}:{i}" if len(keys) > 1 else keystr
  return keys


def write_sk_file(filename, key):
  """Store an nsec into a new file only readable by the owner."""
  fd = os.open(filename, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
  with open(fd, "w") as f:
    f.write(f"# {key.npub}\n{key.nsec}\n")


def xonly_lift(pkhex: str) -> str:
  """Relays publish 32-byte x-only keys, which denote the point with even y."""
  return f"02{pkhex}" if len(pkhex) == 64 else pkhex


def decode_pk(keystr):
  # Nostr public keys use Bech32 encoding
  if keystr.lower().startswith(bech.NPUB + "1"):
    return Key(keystr=keystr, pk=xonly_lift(bech.decode_npub(keystr)))
  # Compressed point as hex
  if len(keystr) in (64, 66):
    return Key(keystr=keystr, pk=xonly_lift(keystr.lower()))
  raise MalformedKeyError(f"Unrecognized public key {keystr!r}")


def decode_sk(keystr):
  # Nostr secret keys in Bech32 encoding
  if keystr.lower().startswith(bech.NSEC + "1"):
    return Key(keystr=keystr, sk=bech.decode_nsec(keystr))
  # Plain 32-byte key as hex
  if len(keystr) == 64:
    return Key(keystr=keystr, sk=keystr.lower())
  raise MalformedKeyError(f"Unable to parse secret key {keystr!r}")
