from secrets import token_bytes
from typing import Union

from nostrkey.exceptions import MalformedKeyError, OutOfRangeError
from nostrkey.util import fromhex, tohex

from .curve import encode_point, point_multiply
from .scalar import N
from .util import tobytes


def secret_scalar(sk: Union[str, bytes, int]) -> int:
  """
  Converts a private key in hex, bytes or integer form to its scalar.

  Raises OutOfRangeError unless the scalar is within 1..N-1.
  """
  if isinstance(sk, int):
    k = sk
  elif isinstance(sk, str):
    if len(sk) > 64: raise MalformedKeyError(f"Private key hex too long ({len(sk)} characters)")
    k = int.from_bytes(fromhex(sk.zfill(len(sk) + len(sk) % 2)), "big")
  else:
    if len(sk) != 32: raise MalformedKeyError("Private key should be exactly 32 bytes")
    k = int.from_bytes(sk, "big")
  if not 0 < k < N:
    raise OutOfRangeError("Private key scalar must be between 1 and N-1")
  return k


def generate_private_key() -> str:
  """Uniformly random private key as 64 hex characters."""
  # Rejection sampling, the chance of a redraw is about 2^-128
  while True:
    k = int.from_bytes(token_bytes(32), "big")
    if 0 < k < N:
      return tohex(tobytes(k))


def get_public_key(sk: Union[str, bytes, int]) -> str:
  """The compressed public key (66 hex characters) of a private key."""
  return tohex(encode_point(point_multiply(secret_scalar(sk))))
