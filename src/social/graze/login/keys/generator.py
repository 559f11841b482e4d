"""Fresh keypair generation."""

import logging

from jwcrypto import jwk

from social.graze.login.keys.errors import KeyGenerationFailure
from social.graze.login.keys.model import (
    DEFAULT_KEY_SIZE,
    KEY_TYPES,
    KeyMaterial,
    SigningOptions,
)

logger = logging.getLogger(__name__)


def generate_key_material(
    options: SigningOptions, key_size: int = DEFAULT_KEY_SIZE
) -> KeyMaterial:
    """Generate a keypair suitable for the configured signing algorithm.

    RSA keys of ``key_size`` bits are generated for RS* and PS* algorithms, EC keys on the
    matching curve for ES* algorithms. Both halves are exported as PEM text: the private
    key as PKCS#8, the public key as SubjectPublicKeyInfo.

    Args:
        options: Signing options naming the algorithm
        key_size: RSA modulus size in bits

    Returns:
        KeyMaterial: The new keypair

    Raises:
        KeyGenerationFailure: When the algorithm is unsupported or the crypto backend fails
    """
    if options.algorithm not in KEY_TYPES:
        raise KeyGenerationFailure(
            f"Cannot generate a keypair for unsupported algorithm {options.algorithm}."
        )
    kty, crv = KEY_TYPES[options.algorithm]

    try:
        if kty == "EC":
            key = jwk.JWK.generate(kty="EC", crv=crv)
        else:
            key = jwk.JWK.generate(kty="RSA", size=key_size)
        private_key = key.export_to_pem(private_key=True, password=None)
        public_key = key.export_to_pem()
    except Exception as e:
        raise KeyGenerationFailure(
            f"Could not generate a {kty} keypair ({type(e).__name__}: {e})."
        ) from e

    logger.debug("Generated %s keypair for %s", kty, options.algorithm)
    return KeyMaterial(private_key=private_key, public_key=public_key)
