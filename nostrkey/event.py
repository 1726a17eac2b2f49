import json
import time
from typing import Optional

from nostrkey import secp256k1
from nostrkey.exceptions import SignatureError
from nostrkey.util import tohex

# Event fields in the order they are published
FIELDS = ("id", "pubkey", "created_at", "kind", "tags", "content", "sig")
FIELD_TYPES = dict(id=str, pubkey=str, created_at=int, kind=int, tags=list, content=str, sig=str)


def serialize_event(pubkey: str, created_at: int, kind: int, tags: list, content: str) -> str:
  """The canonical form that the event id is a hash of."""
  return json.dumps([0, pubkey, created_at, kind, tags, content], separators=(",", ":"), ensure_ascii=False)


def event_id(pubkey: str, created_at: int, kind: int, tags: list, content: str) -> str:
  return tohex(secp256k1.shabytes(serialize_event(pubkey, created_at, kind, tags, content)))


def create_event(kind: int, content: str, tags: Optional[list] = None, sk=None, created_at: Optional[int] = None) -> dict:
  """Build an event and sign its id with the secret key (hex)."""
  if sk is None: raise ValueError("A secret key is required to create an event")
  tags = [] if tags is None else tags
  created_at = int(time.time()) if created_at is None else created_at
  event = dict(kind=kind, created_at=created_at, tags=tags, content=content, pubkey=secp256k1.get_public_key(sk))
  event["id"] = event_id(event["pubkey"], created_at, kind, tags, content)
  event["sig"] = secp256k1.sign(sk, event["id"])
  return event


def verify_event(event: dict) -> None:
  """Check the id and the signature of an event, raises ValueError if either is bad."""
  missing = [f for f in FIELDS if f not in event]
  if missing:
    raise ValueError(f"Event is missing fields {', '.join(missing)}")
  for f, t in FIELD_TYPES.items():
    # bool is a subclass of int but not a valid number in an event
    if not isinstance(event[f], t) or isinstance(event[f], bool):
      raise ValueError(f"Event field {f} should be {t.__name__}, not {type(event[f]).__name__}")
  eid = event_id(event["pubkey"], event["created_at"], event["kind"], event["tags"], event["content"])
  if eid != event["id"]:
    raise SignatureError("Event id does not match its content")
  secp256k1.verify(event["pubkey"], eid, event["sig"])


def parse_tags(tagstrs) -> list:
  """Tags from command line form name:value into lists."""
  tags = []
  for t in tagstrs:
    parts = t.split(":", 1)
    if len(parts) < 2 or not parts[0]:
      raise ValueError(f"Invalid tag {t!r}, expected name:value")
    tags.append(parts)
  return tags
