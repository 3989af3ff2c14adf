"""
rentshop/config.py - Application configuration and Firebase initialization.

This module defines a Pydantic BaseSettings class to load configuration from environment,
and initializes Firebase Admin SDK (async Firestore client, Storage bucket) when credentials
are present. When they are not, the stores run in pure local/cache mode and never touch
the network.
"""
import os
from functools import lru_cache
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore_async, storage
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PLACEHOLDER_PROJECT_IDS = {"", "your_project_id_here", "changeme"}


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""
    firebase_cred_file: str = Field('firebase_service_account.json', description="Service account JSON path")
    firebase_project_id: Optional[str] = None
    firebase_storage_bucket: Optional[str] = None

    # Firebase credentials from environment variables (for Cloud Run)
    firebase_private_key_id: Optional[str] = None
    firebase_private_key: Optional[str] = None
    firebase_client_email: Optional[str] = None
    firebase_client_id: Optional[str] = None
    firebase_auth_uri: Optional[str] = None
    firebase_token_uri: Optional[str] = None
    firebase_auth_provider_x509_cert_url: Optional[str] = None
    firebase_client_x509_cert_url: Optional[str] = None

    firebase_collection_prefix: str = ""
    product_images_prefix: str = "product-images"

    # Directory holding the JSON snapshots (cart, wishlist, catalog, identity).
    # Empty string disables durable local storage entirely.
    local_storage_dir: str = ".rentshop"

    # Keep local state consistent with "the user asked to remove this" even when
    # the remote delete failed.
    remove_local_on_remote_failure: bool = True

    debug: bool = False
    allowed_origins: str = '*'  # Comma-separated list or '*' for all

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    def _inline_credentials(self) -> bool:
        return all([
            self.firebase_private_key_id,
            self.firebase_private_key,
            self.firebase_client_email,
            self.firebase_client_id,
            self.firebase_auth_uri,
            self.firebase_token_uri,
            self.firebase_auth_provider_x509_cert_url,
            self.firebase_client_x509_cert_url,
        ])

    @property
    def remote_configured(self) -> bool:
        """True when a project id and some credential source are available."""
        if (self.firebase_project_id or "").strip() in _PLACEHOLDER_PROJECT_IDS:
            return False
        return self._inline_credentials() or os.path.isfile(self.firebase_cred_file)

    @property
    def storage_configured(self) -> bool:
        return self.remote_configured and bool(self.firebase_storage_bucket)

    def credential_dict(self) -> dict:
        return {
            "type": "service_account",
            "project_id": self.firebase_project_id,
            "private_key_id": self.firebase_private_key_id,
            # Cloud Run secrets usually carry escaped newlines
            "private_key": (self.firebase_private_key or "").replace("\\n", "\n"),
            "client_email": self.firebase_client_email,
            "client_id": self.firebase_client_id,
            "auth_uri": self.firebase_auth_uri,
            "token_uri": self.firebase_token_uri,
            "auth_provider_x509_cert_url": self.firebase_auth_provider_x509_cert_url,
            "client_x509_cert_url": self.firebase_client_x509_cert_url,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()


def init_firebase(settings: Settings) -> Optional[firebase_admin.App]:
    """
    Initialize (or reuse) the default Firebase app.
    Returns None when the remote is not configured; callers then skip remote calls.
    """
    if not settings.remote_configured:
        return None
    try:
        if settings._inline_credentials():
            # Use environment variables for Firebase credentials (Cloud Run)
            cred = credentials.Certificate(settings.credential_dict())
        else:
            # Use service account file (local development)
            cred = credentials.Certificate(settings.firebase_cred_file)

        options = {'projectId': settings.firebase_project_id}
        if settings.firebase_storage_bucket:
            options['storageBucket'] = settings.firebase_storage_bucket
        return firebase_admin.initialize_app(cred, options)
    except ValueError as e:
        if "already exists" in str(e):
            # Firebase app already initialized, get the default app
            return firebase_admin.get_app()
        raise


def firestore_client(firebase_app: Optional[firebase_admin.App]):
    """Async Firestore client bound to the app, or None in local mode."""
    if firebase_app is None:
        return None
    return firestore_async.client(app=firebase_app)


def storage_bucket(firebase_app: Optional[firebase_admin.App], settings: Settings):
    """Default storage bucket, or None when storage isn't configured."""
    if firebase_app is None or not settings.storage_configured:
        return None
    return storage.bucket(app=firebase_app)
