"""Round-trip validation of a keypair."""

import logging
from typing import Any, Dict, Final, Optional

from social.graze.login.keys.model import (
    FailureKind,
    KeyFailure,
    KeyMaterial,
    SigningOptions,
)
from social.graze.login.tokens import load_key, sign_token, verify_token

logger = logging.getLogger(__name__)

VALIDATION_CLAIMS: Final[Dict[str, Any]] = {"test": "test"}


def validate_key_material(
    material: KeyMaterial, options: SigningOptions
) -> Optional[KeyFailure]:
    """Prove that a keypair can sign and verify a token.

    A synthetic payload is signed with the private key using the configured algorithm and
    lifetime, then verified with the public key. Malformed encodings, an algorithm that does
    not fit the key type and mismatched halves all fail the same way: this is a gate, it
    does not tell those causes apart.

    Args:
        material: Candidate keypair
        options: Signing algorithm and lifetime

    Returns:
        None when the pair is usable, otherwise an INVALID_KEY_PAIR KeyFailure.
    """
    try:
        private_key = load_key(material.private_key)
        public_key = load_key(material.public_key)
        if public_key.has_private:
            return KeyFailure(
                FailureKind.INVALID_KEY_PAIR,
                detail="public key file contains a private key",
            )
        token = sign_token(VALIDATION_CLAIMS, private_key, options)
        verify_token(token, public_key, options.algorithm)
    except Exception as e:
        logger.debug("Keypair round trip failed", exc_info=True)
        return KeyFailure(
            FailureKind.INVALID_KEY_PAIR, detail=f"{type(e).__name__}: {e}"
        )
    return None
