import hashlib


def toint(x) -> int:
  if isinstance(x, int): return x
  if len(x) != 32: raise ValueError("Should be exactly 32 bytes")
  return int.from_bytes(x, "big")

def tobytes(x: int) -> bytes:
  return x.to_bytes(32, "big")

def sha(s) -> int:
  """Return SHA-256 as 256 bit big-endian integer"""
  return int.from_bytes(shabytes(s), "big")

def shabytes(s) -> bytes:
  if isinstance(s, str): s = s.encode()
  return hashlib.sha256(s).digest()
