from setuptools import find_packages, setup

setup(
  name="nostrkey",
  version="0.1.0",
  author="Nostrkey",
  description="Pure Python secp256k1 keys, signatures and bech32 key encoding for Nostr",
  long_description=open("README.md").read(),
  long_description_content_type="text/markdown",
  packages=find_packages(exclude=["tests"]),
  python_requires=">=3.9",
  classifiers=[
    "Programming Language :: Python :: 3",
    "License :: OSI Approved :: MIT License",
    "Operating System :: OS Independent",
  ],
  install_requires=[
    "colorama>=0.4",
    "pyperclip>=1.8",
    "xdg>=5.0",
  ],
  extras_require={
    "test": ["pytest", "pytest-sugar", "pytest-mock", "coverage", "mypy", "bandit", "cryptography>=35"],
    "dev": ["tox", "isort", "yapf"],
  },
  include_package_data=True,
  entry_points=dict(console_scripts=["nostrkey = nostrkey.__main__:main"],),
)
