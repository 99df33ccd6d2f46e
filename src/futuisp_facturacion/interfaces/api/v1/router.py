"""Router principal v1."""
from fastapi import APIRouter

from futuisp_facturacion.interfaces.api.v1.endpoints import facturacion, health

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(facturacion.router)
