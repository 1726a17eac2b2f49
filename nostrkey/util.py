import re
from typing import Optional

from nostrkey.exceptions import MalformedKeyError

HEXCHARS = re.compile("^[0-9a-fA-F]*$")


def fromhex(s: str, length: Optional[int] = None) -> bytes:
  """Decode hex, optionally requiring an exact number of bytes."""
  if not isinstance(s, str) or not HEXCHARS.match(s):
    raise MalformedKeyError(f"Invalid hex string {s!r}")
  if len(s) % 2:
    raise MalformedKeyError(f"Hex string of odd length {len(s)}")
  if length is not None and len(s) != 2 * length:
    raise MalformedKeyError(f"Expected {2 * length} hex characters but got {len(s)}")
  return bytes.fromhex(s)


def tohex(data) -> str:
  """Lowercase hex of bytes or of a list of byte values."""
  return bytes(data).hex()
