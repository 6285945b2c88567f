"""
FastAPI routers.

Each module exposes an APIRouter included by pastepouch.app.create_app.
"""
