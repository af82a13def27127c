# config.py - Environment settings and the per-request store/identity dependencies
import os
import logging
import cloudinary
from repository.store import DocumentStore, FirestoreStore
from repository.identity import IdentityProvider, FirebaseIdentityProvider
from utils.firebase_service import FirebaseService

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Cloud Run and Cloud Functions (gen2) set these automatically
IS_PRODUCTION = os.getenv("K_SERVICE") is not None or os.getenv("FUNCTION_TARGET") is not None

API_TITLE = "Looker Marketplace API"
API_VERSION = "1.0.0"

CHECK_REVOKED_TOKENS = os.getenv("CHECK_REVOKED_TOKENS", "true").lower() not in ("0", "false", "no")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Cloudinary configuration for avatar uploads (optional everywhere)
CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME")
CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY")
CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET")
CLOUDINARY_ENABLED = bool(CLOUDINARY_CLOUD_NAME and CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET)

if CLOUDINARY_ENABLED:
    cloudinary.config(
        cloud_name=CLOUDINARY_CLOUD_NAME,
        api_key=CLOUDINARY_API_KEY,
        api_secret=CLOUDINARY_API_SECRET
    )
    logger.info("Cloudinary configured successfully")
else:
    logger.info("Cloudinary disabled - avatar data URIs will be rejected")

if IS_PRODUCTION:
    logger.info("Running in PRODUCTION mode")
else:
    logger.info("Running in LOCAL development mode")

_store = None
_identity_provider = None


def get_store() -> DocumentStore:
    global _store
    if _store is None:
        _store = FirestoreStore(FirebaseService.firestore_client())
    return _store


def get_identity_provider() -> IdentityProvider:
    global _identity_provider
    if _identity_provider is None:
        _identity_provider = FirebaseIdentityProvider(
            app=FirebaseService.initialize(),
            check_revoked=CHECK_REVOKED_TOKENS,
        )
    return _identity_provider
