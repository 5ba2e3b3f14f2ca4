"""
Rate limiting por endpoint usando slowapi
"""
from fastapi import Request, HTTPException
from slowapi.util import get_remote_address
from limits import parse

def apply_rate_limit(request: Request, limit: str, scope: str = "default") -> None:
    """
    Aplica rate limiting a un endpoint concreto.
    Uso: apply_rate_limit(request, "5/minute", "signup")

    Si el limiter no está configurado (por ejemplo, en tests), no hace nada.
    """
    limiter = getattr(request.app.state, "limiter", None)
    if limiter is None:
        return

    key = get_remote_address(request)
    if not limiter.limiter.hit(parse(limit), scope, key):
        raise HTTPException(
            status_code=429,
            detail=f"Demasiadas solicitudes. Límite: {limit}. Intenta más tarde."
        )
