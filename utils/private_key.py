"""Normalization of the GitHub App private key.

Keys reach us through CI secrets, which means they are often base64-encoded
or have had their newlines flattened into literal ``\\n`` sequences.
"""

import base64
import binascii
import logging
from typing import Optional

from utils.errors import ConfigError

logger = logging.getLogger(__name__)


def normalize_private_key(
    app_id: Optional[str],
    installation_id: Optional[str],
    private_key: Optional[str],
) -> str:
    """Validate the app credentials and return a PEM key ready for signing.
    
    Args:
        app_id: GitHub App ID
        installation_id: Installation ID the app acts through
        private_key: Raw PEM or base64-encoded PEM key material
    
    Returns:
        PEM private key with real line breaks
    
    Raises:
        ConfigError: If a credential is missing or the key is not a PEM private key
    """
    if not app_id or not installation_id or not private_key:
        raise ConfigError(
            "Missing required credentials: APP_ID, INSTALLATION_ID, "
            "and APP_PRIVATE_KEY must be set"
        )
    
    logger.info("🔑 Processing private key...")
    key = private_key
    if "BEGIN" not in key:
        logger.info("   Detected base64-encoded key, decoding...")
        try:
            key = base64.b64decode(key, validate=False).decode("utf-8")
        except (binascii.Error, ValueError) as e:
            raise ConfigError(f"Failed to decode base64 private key: {e}") from e
    
    if "BEGIN" not in key or "PRIVATE KEY" not in key:
        raise ConfigError(
            "Invalid private key format. Key must be in PEM format "
            "and contain BEGIN PRIVATE KEY"
        )
    
    key = key.replace("\\n", "\n")
    
    logger.info("   ✓ Private key format validated")
    logger.info(f"   Key type: {'RSA' if 'RSA' in key else 'PKCS8'}")
    return key
