from __future__ import annotations

from functools import cached_property

# Field prime
P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F

# Group order of the base point
N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# P = 3 mod 4, so square roots are a single exponentiation
P14 = (P + 1) // 4


def mod(a: int, m: int) -> int:
  """Mathematical modulo, always in [0, m) even for negative a."""
  # Python's % takes the sign of the divisor, unlike a truncating remainder
  return a % m


def powmod(base: int, exp: int, m: int) -> int:
  """Modular exponentiation by repeated squaring."""
  if exp < 0: raise ValueError("Negative exponent, use modinv instead")
  if m == 1: return 0
  result = 1
  base = mod(base, m)
  while exp > 0:
    if exp & 1:
      result = result * base % m
    exp >>= 1
    base = base * base % m
  return result


def modinv(a: int, m: int) -> int:
  """Multiplicative inverse by the extended Euclidean algorithm, 0 for a = 0 mod m."""
  a = mod(a, m)
  if a == 0: return 0
  lm, hm = 1, 0
  low, high = a, m
  while low > 1:
    r = high // low
    lm, hm = hm - lm * r, lm
    low, high = high - low * r, low
  return mod(lm, m)


class residue:
  """An integer modulo a fixed prime. Subclasses set the modulus."""
  m = 0

  def __init__(self, x: int): self.val = mod(x, self.m)
  def __hash__(self): return self.val
  def __repr__(self): return f"{type(self).__name__}({self.val})"
  def __str__(self): return bytes(self).hex()
  def __bytes__(self): return self.val.to_bytes(32, "big")
  def __int__(self): return self.val
  def bit(self, n: int): return bool(self.val & 1 << n)

  def _check(self, o):
    # fe and sc are separate rings, never mix them
    if type(o) is not type(self):
      raise TypeError(f"Cannot combine {type(self).__name__} with {o!r}")
    return o.val

  def __eq__(self, other): return self.val == self._check(other)
  def __neg__(self): return type(self)(-self.val)
  def __add__(self, o): return type(self)(self.val + self._check(o))
  def __sub__(self, o): return type(self)(self.val - self._check(o))
  def __mul__(self, o): return type(self)(self.val * self._check(o))

  def __truediv__(self, o):
    """Division by multiplying with the modular inverse"""
    self._check(o)
    return self * o.inv

  def __pow__(self, e: int):
    return type(self)(powmod(self.val, e, self.m) if e >= 0 else powmod(modinv(self.val, self.m), -e, self.m))

  @cached_property
  def inv(self):
    return type(self)(modinv(self.val, self.m))


class fe(residue):
  """A field element modulo P, used for point coordinates"""
  m = P

  @cached_property
  def sqrt(self) -> fe:
    """A square root. Raises ValueError if there is none."""
    root = self**P14
    if root * root != self: raise ValueError("Not a square!")
    return root


class sc(residue):
  """A scalar modulo the group order N, used for keys and signatures"""
  m = N
