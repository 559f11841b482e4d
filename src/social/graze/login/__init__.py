"""
Login Server

This module implements the startup and key-publishing core of a token-issuing login service.
Before the service accepts any request it resolves the asymmetric keypair used to sign and
verify session tokens, and it refuses to start when that keypair is ambiguous or broken.

Key Components:
- keys: Key provisioning (load, round-trip validation, generation, backup rotation, persistence)
- tokens: JWT signing and verification with the resolved key material
- app: Configuration, provider metadata, HTTP surface and command line entry points

Startup Flow:
1. Settings are loaded from the environment (and an optional .env file)
2. The key provisioner loads the configured keypair and proves it with a sign/verify round trip
3. When nothing was configured and nothing usable exists, a fresh keypair is generated,
   existing files are moved to numbered backups and the new keys are written to disk
4. Any other failure terminates the process with a diagnostic
5. The resolved key material is handed to the web application for the lifetime of the process

Provisioning runs once per process. Running two instances concurrently against the same key
directory is not supported; deployments must serialize startups that share key files.
"""
