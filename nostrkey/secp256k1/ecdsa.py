from typing import Union

from nostrkey.exceptions import MalformedKeyError, SignatureError
from nostrkey.util import fromhex, tohex

from .curve import G, Point, point_multiply
from .keys import secret_scalar
from .scalar import N, sc
from .util import sha, toint

# Plain ECDSA over secp256k1 with a simplified deterministic nonce.

# This is not the BIP-340 Schnorr scheme that Nostr relays verify, and the
# nonce is neither RFC 6979 nor domain separated: it is a single SHA-256 over
# the unpadded hex digits of the key and the digest. Signatures are thus only
# verifiable by ECDSA verifiers and are not bit-compatible with other tooling.


def digest_int(msghash: Union[str, bytes]) -> int:
  """Message digest as an integer, from 32 bytes or 64 hex characters."""
  if isinstance(msghash, str): msghash = fromhex(msghash, 32)
  try:
    return toint(bytes(msghash))
  except ValueError:
    raise MalformedKeyError("Message digest should be exactly 32 bytes")


def generate_k(d: int, z: int) -> int:
  """Deterministic signing nonce from private scalar d and digest z."""
  k = sha(f"{d:x}{z:x}") % N
  return k or 1


def sign(sk: Union[str, bytes, int], msghash: Union[str, bytes]) -> str:
  """ECDSA signature r || s as 128 hex characters"""
  d = secret_scalar(sk)
  z = digest_int(msghash)
  k = generate_k(d, z)
  R = point_multiply(k)
  r = sc(R.x.val)
  if r == sc(0): raise SignatureError("Invalid r, retry with a different message")
  s = sc(k).inv * (sc(z) + r * sc(d))
  if s == sc(0): raise SignatureError("Invalid s, retry with a different message")
  return tohex(bytes(r) + bytes(s))


def verify(pk: Union[str, bytes, Point], msghash: Union[str, bytes], signature: Union[str, bytes]) -> None:
  """ECDSA signature verification, raises SignatureError on failure"""
  if not isinstance(signature, (str, bytes)):
    raise SignatureError("Invalid signature")
  if isinstance(signature, str): signature = fromhex(signature)
  if len(signature) != 64:
    raise SignatureError("Invalid signature length")
  if not isinstance(pk, Point):
    try:
      pk = Point.from_bytes(fromhex(pk, 33) if isinstance(pk, str) else pk)
    except ValueError:
      raise MalformedKeyError("Invalid public key provided")
  r, s = toint(signature[:32]), toint(signature[32:])
  if not 0 < r < N or not 0 < s < N:
    raise SignatureError("Invalid r or s value on signature")
  z = digest_int(msghash)
  w = sc(s).inv
  u1, u2 = (sc(z) * w).val, (sc(r) * w).val
  R = u1 * G + u2 * pk
  if R.is_infinity or sc(R.x.val) != sc(r):
    raise SignatureError("Signature mismatch")
