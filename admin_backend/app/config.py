"""
app/config.py - Application configuration and Firebase initialization.

This module defines a Pydantic BaseSettings class to load configuration from environment,
and initializes the Firebase Admin SDK (Firestore DB, Auth) from a service account.
Initialization is lazy: nothing talks to Firebase until the first request needs it.
"""
from functools import lru_cache
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(5000, alias="PORT")

    firebase_cred_file: str = Field("serviceAccountKey.json", alias="FIREBASE_CRED_FILE")
    firebase_project_id: str = Field("waveact-e419c", alias="FIREBASE_PROJECT_ID")

    # Firebase credentials from environment variables (for Cloud Run)
    firebase_private_key_id: Optional[str] = Field(None, alias="FIREBASE_PRIVATE_KEY_ID")
    firebase_private_key: Optional[str] = Field(None, alias="FIREBASE_PRIVATE_KEY")
    firebase_client_email: Optional[str] = Field(None, alias="FIREBASE_CLIENT_EMAIL")
    firebase_client_id: Optional[str] = Field(None, alias="FIREBASE_CLIENT_ID")
    firebase_auth_uri: str = Field("https://accounts.google.com/o/oauth2/auth", alias="FIREBASE_AUTH_URI")
    firebase_token_uri: str = Field("https://oauth2.googleapis.com/token", alias="FIREBASE_TOKEN_URI")
    firebase_auth_provider_x509_cert_url: str = Field(
        "https://www.googleapis.com/oauth2/v1/certs", alias="FIREBASE_AUTH_PROVIDER_X509_CERT_URL"
    )
    firebase_client_x509_cert_url: Optional[str] = Field(None, alias="FIREBASE_CLIENT_X509_CERT_URL")

    allowed_origins: str = Field("*", alias="ALLOWED_ORIGINS")  # Comma-separated list or '*' for all
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    recycle_retention_days: int = Field(30, alias="RECYCLE_RETENTION_DAYS")
    # 0 keeps the sweep on-read only
    recycle_sweep_interval_minutes: int = Field(0, alias="RECYCLE_SWEEP_INTERVAL_MINUTES")

    @property
    def origins(self) -> list:
        if not self.allowed_origins:
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    def service_account_info(self) -> Optional[dict]:
        """Inline service account dict when every key part is set in the environment."""
        if not all([
            self.firebase_private_key_id,
            self.firebase_private_key,
            self.firebase_client_email,
            self.firebase_client_id,
        ]):
            return None
        return {
            "type": "service_account",
            "project_id": self.firebase_project_id,
            "private_key_id": self.firebase_private_key_id,
            # Cloud Run env vars carry literal "\n" sequences
            "private_key": self.firebase_private_key.replace("\\n", "\n"),
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


def get_firebase_app() -> firebase_admin.App:
    """Return the default Firebase app, initializing it on first use."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    settings = get_settings()
    info = settings.service_account_info()
    # Use environment variables (Cloud Run) or the service account file (local development)
    cred = credentials.Certificate(info if info else settings.firebase_cred_file)
    try:
        return firebase_admin.initialize_app(cred, {"projectId": settings.firebase_project_id})
    except ValueError as e:
        if "already exists" in str(e):
            return firebase_admin.get_app()
        raise


def get_firestore_client():
    return firestore.client(app=get_firebase_app())
