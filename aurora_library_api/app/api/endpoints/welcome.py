"""
Welcome endpoint.

Returns a greeting together with the list of available book
endpoints, so a client hitting the root URL can discover the API.
"""

from typing import Any, Dict

from fastapi import APIRouter

router = APIRouter()


@router.get("/", response_model=Dict[str, Any])
async def welcome() -> Dict[str, Any]:
    return {
        "message": "Bienvenido a la API de Biblioteca Aurora",
        "endpoints": {
            "getAll": "GET /api/libros",
            "getById": "GET /api/libros/:id",
            "create": "POST /api/libros",
            "delete": "DELETE /api/libros/:id",
        },
    }
