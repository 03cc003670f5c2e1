"""CDI Platform.

Service layer for the contractor community platform: seller marketplace
analytics, member tool rentals, AI assisted estimates and team coordination.

High-level architecture
-----------------------

The hosted backend owns authentication, storage and the Postgres tables. This
package sits between callers (web apps, the HTTP API in
``cdi_platform.server``) and that backend, and gives every table and remote
procedure a typed entry point.

Core subpackages
----------------

- ``cdi_platform.core``:

  - Logging and optional Logfire monitoring.
  - SQLModel entities and async repositories for the platform tables.

- ``cdi_platform.edge_functions``:

  - Thin httpx client for backend hosted functions (SMS, email, calendar
    sync, workspace provisioning).

- ``cdi_platform.ai``:

  - Estimate generation through Pydantic AI, regional pricing guidance and
    Pillow based image preparation.

- ``cdi_platform.services``:

  - Domain services composed from repositories and the clients above.

- ``cdi_platform.server``:

  - FastAPI application exposing the services under ``/api/v1``.
"""
