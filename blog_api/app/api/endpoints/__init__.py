"""
Endpoint subpackage.

Each module in this package defines an APIRouter for a specific
resource.  The routers are aggregated in ``api/router.py``.
"""
