import os
from fastapi import APIRouter, HTTPException, Response
from pydantic import BaseModel

from checkcx.api.auth import SESSION_COOKIE, tokens_match


class LoginRequest(BaseModel):
    password: str


def create_auth_router() -> APIRouter:
    router = APIRouter(prefix="/auth", tags=["auth"])

    @router.post("/login")
    def login(req: LoginRequest, response: Response):
        admin = os.getenv("ADMIN_TOKEN")
        if not admin:
            raise HTTPException(status_code=503, detail="ADMIN_TOKEN not configured")
        if not tokens_match(req.password, admin):
            raise HTTPException(status_code=401, detail="Unauthorized")
        response.set_cookie(SESSION_COOKIE, admin, httponly=True, samesite="lax")
        return {"access_token": admin}

    @router.post("/logout")
    def logout(response: Response):
        response.delete_cookie(SESSION_COOKIE)
        return {"status": "signed out"}

    return router
