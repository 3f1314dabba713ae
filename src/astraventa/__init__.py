"""Astraventa Relay

Chat and contact-form relay backend for the Astraventa restaurant AI assistant.
"""

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("astraventa-relay")
except PackageNotFoundError:
    __version__ = "1.0.0"
__author__ = "Astraventa"
