# A plain Python submodule for secp256k1 math, keys and ECDSA signatures.

# Not constant time and not zeroing buffers after use. Scalars are Python
# integers at the function boundaries; fe and sc tag values modulo the field
# prime P and the group order N so that the two are never mixed up.

# Public symbols are imported here. Lower case constants are scalars (int, fe
# or sc), upper case are Points.

from .curve import INF, G, Point, encode_point, point_add, point_multiply
from .ecdsa import generate_k, sign, verify
from .keys import generate_private_key, get_public_key, secret_scalar
from .scalar import N, P, fe, mod, modinv, powmod, sc
from .util import sha, shabytes, tobytes, toint
