"""
Login Server Application Layer

This package implements the configuration and HTTP layer of the login server using the
aiohttp framework.

Key Components:
- cli.py: Entry point; provisions the signing keys, then runs the web application
- config.py: Configuration management using Pydantic settings, and typed AppKeys
- providers.py: Login provider list loading and URL enrichment
- server.py: Web application setup and middleware
- handlers/: Request handlers for key publication and internal endpoints
- util/: Operator utilities (check, provision or generate keys)

It provides the following endpoints:
- Public key endpoints (/publicKey, /.well-known/jwks.json)
- Service metadata (/about, /providers)
- Internal liveness endpoint (/internal/alive)

The web application is only built after key provisioning succeeded; a provisioning failure
terminates the process with a non-zero exit status before any request is served.
"""
