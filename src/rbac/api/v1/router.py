from fastapi import APIRouter

from src.rbac.api.v1 import invitations, members, roles, tenants

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(tenants.router)
api_router.include_router(roles.router)
api_router.include_router(members.router)
api_router.include_router(invitations.router)
