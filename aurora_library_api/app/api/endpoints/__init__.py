"""
Endpoint subpackage.

Each module defines an APIRouter for one part of the API.  The routers
are aggregated in ``router.py`` at the package level.
"""
