"""
Key Provisioning

This package resolves the signing keypair once at process startup.

Key Components:
- model.py: Immutable value types (paths, signing options, key material, outcomes, failures)
- fs.py: Filesystem capability used by every step that touches the disk
- loader.py: Reads candidate key bytes and classifies read failures
- validator.py: Sign/verify round trip proving that a keypair is usable
- generator.py: Fresh keypair generation in PEM form
- backup.py: Numbered backup rotation before an existing key file is replaced
- persist.py: Writes key files with owner-only (private) and world-readable (public) permissions
- provision.py: The KeyProvisioner state machine tying the steps together
- errors.py: Fatal provisioning errors

Recovery Policy:
The only self-healing path is "nothing configured, nothing usable found": default paths,
no partially loaded material, files absent, empty or failing validation. In that case a new
keypair is generated and previous files are preserved as backups. Every other failure is
fatal, because a wrong signing key invalidates the whole authentication surface.
"""
