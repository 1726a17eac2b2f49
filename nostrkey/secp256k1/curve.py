from __future__ import annotations

from typing import Optional

from .scalar import P, fe

# Short Weierstrass curve: y2 = x3 + 7
b = fe(7)

# Points use affine coordinates. The point at infinity (INF) is the only
# instance with no coordinates and is the neutral element of addition.

class Point:
  __slots__ = ("x", "y")

  def __init__(self, x: Optional[fe], y: Optional[fe]):
    if x is not None and y * y != x**3 + b:
      raise ValueError("Not a curve point on secp256k1")
    self.x = x
    self.y = y

  @staticmethod
  def from_bytes(data) -> Point:
    """Decompress a 33-byte SEC1 encoded point"""
    data = bytes(data)
    if len(data) != 33: raise ValueError("Compressed point should be exactly 33 bytes")
    if data[0] not in (2, 3): raise ValueError(f"Invalid point prefix {data[0]:#04x}")
    xval = int.from_bytes(data[1:], "big")
    if xval >= P: raise ValueError("Point x coordinate out of range")
    x = fe(xval)
    y = (x**3 + b).sqrt  # Raises ValueError if x is not on the curve
    if y.bit(0) != (data[0] == 3): y = -y
    return Point(x, y)

  @property
  def is_infinity(self) -> bool: return self.x is None

  def __repr__(self): return point_name(self)
  def __str__(self): return bytes(self).hex()
  def __bytes__(self): return encode_point(self)
  def __hash__(self): return hash((self.x, self.y))

  def __eq__(self, othr):
    if not isinstance(othr, Point): raise TypeError(f"Points cannot be compared with {type(othr)}")
    if self.is_infinity or othr.is_infinity: return self.is_infinity and othr.is_infinity
    return self.x == othr.x and self.y == othr.y

  def __add__(self, othr: Point) -> Point:
    if not isinstance(othr, Point): return NotImplemented
    return point_add(self, othr)

  def __sub__(self, othr: Point) -> Point:
    return self + -othr

  def __neg__(self) -> Point:
    return self if self.is_infinity else Point(self.x, -self.y)

  def __mul__(self, k: int) -> Point:
    if not isinstance(k, int): return NotImplemented
    return point_multiply(k, self)

  def __rmul__(self, k: int) -> Point:
    return self * k


def point_add(p1: Point, p2: Point) -> Point:
  if p1.is_infinity: return p2
  if p2.is_infinity: return p1
  x1, y1, x2, y2 = p1.x, p1.y, p2.x, p2.y
  if x1 == x2:
    # Inverse points sum to infinity (no point of order two exists on this curve)
    if y1 != y2: return INF
    s = fe(3) * x1 * x1 / (fe(2) * y1)  # Tangent
  else:
    s = (y2 - y1) / (x2 - x1)  # Chord
  x3 = s * s - x1 - x2
  y3 = s * (x1 - x3) - y1
  return Point(x3, y3)


def point_multiply(k: int, p: Optional[Point] = None) -> Point:
  """Multiply the point (by default G) by scalar k using double-and-add."""
  if k < 0: raise ValueError("Negative scalar")
  result = INF
  addend = G if p is None else p
  while k > 0:
    if k & 1: result += addend
    addend += addend
    k >>= 1
  return result


def encode_point(p: Point) -> bytes:
  """Compressed SEC1 form, 33 zero bytes for infinity (never a valid key)."""
  if p.is_infinity: return bytes(33)
  return bytes([3 if p.y.bit(0) else 2]) + bytes(p.x)


# Neutral element
INF = Point(None, None)

# Base point (generator of the prime order group)
G = Point(
  fe(0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798),
  fe(0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8),
)


def point_name(p: Point) -> str:
  """Return variable names rather than xy coordinates for any constants defined here"""
  for name, val in globals().items():
    if isinstance(val, Point) and p == val:
      return name
  return f"Point({p.x.val:#x}, {p.y.val:#x})"
