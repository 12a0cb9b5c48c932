"""
Endpoint subpackage.

Each module defines an ``APIRouter`` for one resource.  Authors,
genres and languages are built by the generic factory in
``resource``; users have their own module because of the credential
lookup and password rules.
"""
