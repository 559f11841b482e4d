"""
JWT signing and verification with the provisioned keypair.

The startup round-trip validation and the production token issuer share the functions in
this module, so a keypair that passes validation is exactly a keypair that can issue and
verify session tokens with the configured algorithm and lifetime.
"""

import json
from time import time
from typing import Any, Dict, Optional

from jwcrypto import jwk, jwt

from social.graze.login.keys.model import KeyMaterial, SigningOptions


def load_key(data: bytes) -> jwk.JWK:
    """Import a PEM encoded private or public key.

    Args:
        data: PEM bytes

    Returns:
        jwk.JWK: The imported key

    Raises:
        ValueError, TypeError or cryptography errors when the bytes are not a usable key.
    """
    return jwk.JWK.from_pem(data)


def sign_token(
    claims: Dict[str, Any],
    key: jwk.JWK,
    options: SigningOptions,
    issued_at: Optional[int] = None,
) -> str:
    """Create a signed, compact-serialized JWT.

    ``iat`` and ``exp`` are added to the claims; ``exp`` is always ``iat`` plus the
    configured lifetime.

    Args:
        claims: Token claims
        key: Private signing key
        options: Algorithm and lifetime
        issued_at: Issue time as a unix timestamp (defaults to now)

    Returns:
        str: The serialized token
    """
    if issued_at is None:
        issued_at = int(time())
    payload = dict(claims)
    payload["iat"] = issued_at
    payload["exp"] = issued_at + options.expires_in

    token = jwt.JWT(header={"alg": options.algorithm, "typ": "JWT"}, claims=payload)
    token.make_signed_token(key)
    return token.serialize()


def verify_token(serialized: str, key: jwk.JWK, algorithm: str) -> Dict[str, Any]:
    """Verify signature, algorithm and expiry of a token and return its claims."""
    token = jwt.JWT(
        jwt=serialized, key=key, algs=[algorithm], check_claims={"exp": None}
    )
    return json.loads(token.claims)


class TokenIssuer:
    """Issues and verifies session tokens with the resolved key material."""

    def __init__(self, material: KeyMaterial, options: SigningOptions) -> None:
        self._options = options
        self._signing_key = load_key(material.private_key)
        self._verification_key = load_key(material.public_key)

    @property
    def algorithm(self) -> str:
        return self._options.algorithm

    def issue(self, claims: Dict[str, Any]) -> str:
        return sign_token(claims, self._signing_key, self._options)

    def verify(self, token: str) -> Dict[str, Any]:
        return verify_token(token, self._verification_key, self._options.algorithm)

    def public_pem(self) -> str:
        """PEM SubjectPublicKeyInfo of the verification key, never private material."""
        return self._verification_key.export_to_pem().decode("utf-8")

    def public_jwk(self) -> Dict[str, Any]:
        """Export the verification key as a JWK with its RFC 7638 thumbprint as kid."""
        public_key = self._verification_key.export_public(as_dict=True)
        public_key["kid"] = self._verification_key.thumbprint()
        public_key["alg"] = self._options.algorithm
        public_key["use"] = "sig"
        return public_key
