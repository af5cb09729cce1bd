# api/router.py
from fastapi import APIRouter

from . import auth, uploads, users

api_router = APIRouter()

# auth routes go first so /auth/verify-email is not captured by /auth/{account_id}
for prefix in ("/api/auth", "/auth"):
    api_router.include_router(auth.router, prefix=prefix, tags=["Auth"])

for prefix in ("/api/users", "/auth"):
    api_router.include_router(users.router, prefix=prefix, tags=["Users"])

api_router.include_router(uploads.router, prefix="/api/uploads", tags=["Uploads"])
