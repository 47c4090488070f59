# storage.py
"""
Blob store for uploaded documents (ID photos, signed leases).

Files go to local disk under UPLOAD_DIR, or to Azure Blob Storage when
AZURE_STORAGE_ACCOUNT is set. Either way the caller only gets back a stored
path/URL, which is what the database keeps.
"""
import logging
import os
import shutil
import uuid
from typing import Iterable, Optional

from azure.storage.blob import BlobServiceClient
from fastapi import UploadFile

from config import AZURE_STORAGE_ACCOUNT, AZURE_STORAGE_CONTAINER, AZURE_STORAGE_KEY, UPLOAD_DIR

logger = logging.getLogger(__name__)


def _blob_name(folder: str, filename: Optional[str]) -> str:
     ext = os.path.splitext(filename or "")[1]
     return f"{folder}/{uuid.uuid4()}{ext}"


class LocalBlobStore:
     """Files under ``root``, served by the app at ``/uploads``."""

     def __init__(self, root: str, url_prefix: str = "/uploads"):
          self.root = root
          self.url_prefix = url_prefix.rstrip("/")

     def save(self, file: UploadFile, folder: str) -> str:
          name = _blob_name(folder, file.filename)
          path = os.path.join(self.root, *name.split("/"))
          os.makedirs(os.path.dirname(path), exist_ok=True)
          with open(path, "wb") as buffer:
               shutil.copyfileobj(file.file, buffer)
          return f"{self.url_prefix}/{name}"

     def delete(self, stored_path: str) -> None:
          relative = stored_path[len(self.url_prefix):].lstrip("/")
          path = os.path.join(self.root, *relative.split("/"))
          if os.path.exists(path):
               os.remove(path)


class AzureBlobStore:
     """Files in one Azure Blob Storage container."""

     def __init__(self, account: str, key: str, container: str):
          self.account = account
          self.container = container
          self.blob_service = BlobServiceClient.from_connection_string(
               f"DefaultEndpointsProtocol=https;"
               f"AccountName={account};"
               f"AccountKey={key};"
               f"EndpointSuffix=core.windows.net"
          )

     def save(self, file: UploadFile, folder: str) -> str:
          name = _blob_name(folder, file.filename)
          blob_client = self.blob_service.get_blob_client(container=self.container, blob=name)
          blob_client.upload_blob(file.file, overwrite=True)
          return f"https://{self.account}.blob.core.windows.net/{self.container}/{name}"

     def delete(self, blob_url: str) -> None:
          """
          Deletes a file from Azure Blob Storage using its full URL
          """
          prefix = f"https://{self.account}.blob.core.windows.net/{self.container}/"
          blob_name = blob_url[len(prefix):] if blob_url.startswith(prefix) else blob_url.split("/")[-1]
          blob_client = self.blob_service.get_blob_client(container=self.container, blob=blob_name)
          blob_client.delete_blob()


def get_blob_store():
     """FastAPI dependency returning the configured store."""
     if AZURE_STORAGE_ACCOUNT:
          return AzureBlobStore(AZURE_STORAGE_ACCOUNT, AZURE_STORAGE_KEY, AZURE_STORAGE_CONTAINER)
     return LocalBlobStore(UPLOAD_DIR)


def discard(store, stored_paths: Iterable[str]) -> None:
     """Delete uploads whose database write failed. Failures are logged, not raised."""
     for stored_path in stored_paths:
          try:
               store.delete(stored_path)
          except Exception:
               logger.warning("Could not delete orphaned upload %s", stored_path, exc_info=True)
