import json
import sys
from io import BytesIO, TextIOWrapper

import pytest

from nostrkey import bech, path, pubkey
from nostrkey.__main__ import argparse, main
from nostrkey.cli import conv

SK1 = 63 * "0" + "1"
PK1 = "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"


def test_argparser(capsys):
  # Correct but complex arguments
  sys.argv = "nostrkey sign -i key1 -k 7 --tag e:abc -At p:def hello world".split()
  a = argparse()
  assert a.mode == "sign"
  assert a.identities == ["key1"]
  assert a.kind == "7"
  assert a.tags == ["e:abc", "p:def"]
  assert a.paste is True
  assert a.files == ["hello", "world"]
  # Should produce no output
  cap = capsys.readouterr()
  assert not cap.out
  assert not cap.err

  # Aliases
  sys.argv = "nostrkey keygen --save".split()
  a = argparse()
  assert a.mode == "gen"
  assert a.save is True

  # Missing argument parameter
  sys.argv = "nostrkey sign -Ai".split()
  with pytest.raises(SystemExit):
    argparse()
  cap = capsys.readouterr()
  assert not cap.out
  assert "Argument parameter missing: nostrkey sign -Ai …" in cap.err

  # Flags of other modes are not accepted
  sys.argv = "nostrkey gen -i key1".split()
  with pytest.raises(SystemExit):
    argparse()
  cap = capsys.readouterr()
  assert "Unknown argument: nostrkey gen -i" in cap.err

  sys.argv = "nostrkey conv -Ax".split()
  with pytest.raises(SystemExit):
    argparse()
  cap = capsys.readouterr()
  assert "['x'] is not an argument" in cap.err

  # For double-hyphen separator (to not parse anything after as args)
  sys.argv = "nostrkey sign -- -k --tag -A".split()
  args = argparse()
  assert args.files == ["-k", "--tag", "-A"]
  assert not args.paste

  # Unknown mode
  sys.argv = "nostrkey encrypt".split()
  with pytest.raises(SystemExit):
    argparse()
  cap = capsys.readouterr()
  assert "Invalid or missing command" in cap.err


def test_conv():
  nsec = bech.encode_nsec(SK1)
  npub = bech.encode_npub(PK1)
  assert conv(SK1) == nsec
  assert conv(PK1) == npub
  assert conv(nsec) == SK1
  assert conv(npub.upper()) == PK1
  with pytest.raises(ValueError):
    conv("abcd")


## End-to-End testing: Running nostrkey as if it was ran from command line

# A fixture to run nostrkey more easily, checks exitcode and returns its output
@pytest.fixture
def nostrkey(monkeypatch, capsys, tmp_path):
  monkeypatch.setattr(path, "datadir", tmp_path / "data")
  monkeypatch.setattr(path, "keyfile", tmp_path / "data" / "identity.nsec")
  def run_main(*args, stdin="", exitcode=0):
    sys.argv = [str(arg) for arg in ("nostrkey", *args)]
    monkeypatch.setattr("sys.stdin", TextIOWrapper(BytesIO(stdin.encode())))  # Inject stdin
    with pytest.raises(SystemExit) as exc:
      main()
    assert exc.value.code == exitcode, f"Was expecting {exitcode=} but nostrkey did sys.exit({exc.value.code})"
    return capsys.readouterr()
  return run_main


def test_help_and_version(nostrkey):
  cap = nostrkey()
  assert "Usage:" in cap.out
  cap = nostrkey("--version")
  assert cap.out.startswith("Nostrkey ")


def test_end_to_end(nostrkey, tmp_path):
  # No identity yet
  cap = nostrkey("pub", exitcode=1)
  assert "does not exist" in cap.err

  # Generate and save the default identity
  cap = nostrkey("gen", "--save")
  assert not cap.out
  assert "npub1" in cap.err
  key, = pubkey.read_sk_file(str(path.keyfile))

  # Show the public key
  cap = nostrkey("pub")
  assert cap.out == f"{key.npub}\n"
  assert key.pk in cap.err

  # Sign an event from stdin and verify it
  cap = nostrkey("sign", "-t", "t:test", stdin="Hello world")
  ev = json.loads(cap.out)
  assert ev["content"] == "Hello world"
  assert ev["tags"] == [["t", "test"]]
  assert ev["kind"] == 1
  assert ev["pubkey"] == key.pk
  assert ev["id"] in cap.err

  evfile = tmp_path / "event.json"
  evfile.write_text(cap.out)
  cap = nostrkey("verify", evfile)
  assert f"Signed by {key.npub}" in cap.err

  # Tampered events fail
  evfile.write_text(json.dumps(dict(ev, content="Goodbye")))
  cap = nostrkey("verify", evfile, exitcode=10)
  assert "Error: Event id does not match" in cap.err
  cap = nostrkey("verify", stdin="not json", exitcode=10)
  assert "not valid JSON" in cap.err
  evfile.write_text(json.dumps(dict(ev, sig=None)))
  cap = nostrkey("verify", evfile, exitcode=10)
  assert "Error: Event field sig should be str" in cap.err


def test_gen_outfile(nostrkey, tmp_path):
  fn = tmp_path / "alice.nsec"
  cap = nostrkey("gen", "-o", fn)
  assert not cap.out
  assert str(fn) in cap.err
  key, = pubkey.read_sk_file(str(fn))
  cap = nostrkey("pub", "-i", fn)
  assert cap.out == f"{key.npub}\n"
  # Refuses to overwrite
  cap = nostrkey("gen", "-o", fn, exitcode=10)
  assert "already exists" in cap.err
  cap = nostrkey("gen", "-o", fn, "--save", exitcode=1)
  assert "either --save or -o" in cap.err


def test_sign_with_key(nostrkey):
  nsec = bech.encode_nsec(SK1)
  cap = nostrkey("sign", "-i", nsec, "-k", "30023", "-t", "d:slug", "--", "# Title")
  ev = json.loads(cap.out)
  assert ev["pubkey"] == PK1
  assert ev["kind"] == 30023
  assert ev["content"] == "# Title"
  cap = nostrkey("sign", "-i", SK1, "-k", "note", "x", exitcode=1)
  assert "kind must be a number" in cap.err
  cap = nostrkey("sign", "-i", "nsec1invalid", "x", exitcode=10)
  assert "Error:" in cap.err


def test_conv_and_paste(nostrkey, mocker):
  cap = nostrkey("conv", SK1, PK1)
  assert cap.out == f"{bech.encode_nsec(SK1)}\n{bech.encode_npub(PK1)}\n"
  copy = mocker.patch("pyperclip.copy")
  cap = nostrkey("conv", "-A", bech.encode_npub(PK1))
  copy.assert_called_once_with(PK1)
  assert not cap.out
  assert "copied" in cap.err
  cap = nostrkey("conv", exitcode=1)
  assert "Give one or more keys" in cap.err
  cap = nostrkey("conv", "npub1qqqqqqqqqqqq", exitcode=10)
  assert "checksum" in cap.err
