"""Inspect a Google Drive folder and an Azure Blob container, and migrate files between them."""

__version__ = "0.1.0"
