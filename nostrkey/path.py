import os

from xdg import xdg_data_home

datadir = xdg_data_home() / "nostrkey"
keyfile = datadir / "identity.nsec"

def create_datadir():
  if not datadir.exists():
    datadir.mkdir(parents=True)
    if os.name == "posix":
      datadir.chmod(0o700)
