"""
Application package initializer.

The project is organised in layers.  ``storage`` turns records into
SQL rows, ``services`` holds the per‑resource rules (uniqueness,
password hashing, existence checks) and ``api`` exposes the resources
over HTTP.  Shared plumbing (configuration, logging, errors, the
database engine) lives in ``core``.

Each resource (users, authors, genres, languages) is one storage, one
service and one router.  Authors, genres and languages share the
generic implementations in ``storage.base``, ``services.base`` and
``api.endpoints.resource``.
"""

from .main import create_app  # noqa: F401
