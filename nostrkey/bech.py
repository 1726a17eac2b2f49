from nostrkey.exceptions import Bech32Error
from nostrkey.util import fromhex, tohex

CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"

# Human-readable prefixes of Nostr keys
NPUB = "npub"
NSEC = "nsec"


def bech32_polymod(values):
  """Internal function that computes the Bech32 checksum."""
  generator = [0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3]
  chk = 1
  for value in values:
    top = chk >> 25
    chk = (chk & 0x1FFFFFF) << 5 ^ value
    for i in range(5):
      chk ^= generator[i] if ((top >> i) & 1) else 0
  return chk


def bech32_hrp_expand(hrp):
  """Expand the HRP into values for checksum computation."""
  return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def bech32_verify_checksum(hrp, data):
  """Verify a checksum given HRP and converted data characters."""
  return bech32_polymod(bech32_hrp_expand(hrp) + data) == 1


def bech32_create_checksum(hrp, data):
  """Compute the checksum values given HRP and data."""
  values = bech32_hrp_expand(hrp) + data
  polymod = bech32_polymod(values + [0, 0, 0, 0, 0, 0]) ^ 1
  return [(polymod >> 5 * (5-i)) & 31 for i in range(6)]


def bech32_encode(hrp, data):
  """Compute a Bech32 string given HRP and data values."""
  combined = data + bech32_create_checksum(hrp, data)
  return hrp + "1" + "".join([CHARSET[d] for d in combined])


def bech32_decode(bech):
  """Validate a Bech32 string, and determine HRP and data."""
  if any(ord(x) < 33 or ord(x) > 126 for x in bech):
    raise Bech32Error("Invalid character in bech32 string")
  if bech.lower() != bech and bech.upper() != bech:
    raise Bech32Error("Mixed case bech32 string")
  bech = bech.lower()
  pos = bech.rfind("1")
  if pos < 1 or pos + 7 > len(bech):
    raise Bech32Error("Invalid bech32 string, separator misplaced or missing")
  bad = [x for x in bech[pos + 1:] if x not in CHARSET]
  if bad:
    raise Bech32Error(f"Invalid bech32 character {bad[0]!r}")
  hrp = bech[:pos]
  data = [CHARSET.find(x) for x in bech[pos + 1:]]
  if not bech32_verify_checksum(hrp, data):
    raise Bech32Error("Invalid bech32 checksum")
  return hrp, data[:-6]


def convertbits(data, frombits, tobits, pad=True):
  """General power-of-2 base conversion (e.g. bytes to 5-bit symbols)."""
  acc = 0
  bits = 0
  ret = []
  maxv = (1 << tobits) - 1
  for value in data:
    if value < 0 or value >> frombits:
      raise Bech32Error(f"Invalid {frombits}-bit value {value}")
    acc = (acc << frombits | value) & ((1 << frombits + tobits) - 1)
    bits += frombits
    while bits >= tobits:
      bits -= tobits
      ret.append((acc >> bits) & maxv)
  if pad:
    if bits:
      ret.append((acc << (tobits - bits)) & maxv)
  elif bits >= frombits or ((acc << (tobits - bits)) & maxv):
    # Leftover bits would be silently dropped
    raise Bech32Error("Invalid padding in bech32 data")
  return ret


def decode(hrp, bech):
  hrpgot, data = bech32_decode(bech)
  if hrpgot != hrp:
    raise Bech32Error(f"Bech32 HRP mismatch, wanted {hrp} but got {hrpgot}")
  return bytes(convertbits(data, 5, 8, False))


def encode(hrp, databytes):
  return bech32_encode(hrp, convertbits(databytes, 8, 5))


def encode_npub(pkhex: str) -> str:
  """Compressed public key (33 bytes hex) as npub."""
  return encode(NPUB, fromhex(pkhex, 33))

def encode_nsec(skhex: str) -> str:
  return encode(NSEC, fromhex(skhex, 32))

def decode_npub(npub: str) -> str:
  return tohex(decode(NPUB, npub))

def decode_nsec(nsec: str) -> str:
  return tohex(decode(NSEC, nsec))
