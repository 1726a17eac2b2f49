class MalformedKeyError(ValueError):
  """Key string is malformed, has invalid hex or the wrong length"""

class Bech32Error(MalformedKeyError):
  """Bech32 string is malformed or its checksum does not match"""

class OutOfRangeError(ValueError):
  """Scalar is not a valid private key (zero or not below the group order)"""

class SignatureError(ValueError):
  """Signing produced a degenerate value or a signature did not verify"""

class CliArgError(ValueError):
  """Invalid CLI argument"""
