from fastapi import APIRouter, Security

from api.routers.api_v1.endpoints import projects, transactions, users
from api.utils.security import get_api_key


api_router = APIRouter(dependencies=[Security(get_api_key)])

api_router.include_router(projects.router, prefix="/projects", tags=["Projects"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(transactions.router, prefix="/transactions", tags=["Transactions"])
