# coding: utf-8

"""
    MCP Registry API

    Registry for publishing, versioning and downloading MCP packages and services.

    The version of the OpenAPI document: 1.0.0
"""


from fastapi import FastAPI

from registry_api.apis.catalog_api import packages_router as PackagesApiRouter
from registry_api.apis.catalog_api import services_router as ServicesApiRouter
from registry_api.apis.health_api import router as HealthApiRouter
from registry_api.apis.stats_api import router as StatsApiRouter
from registry_api.apis.tokens_api import router as TokensApiRouter
from registry_api.apis.users_api import router as UsersApiRouter
from registry_api.apis.versions_api import packages_router as PackageVersionsApiRouter
from registry_api.apis.versions_api import services_router as ServiceVersionsApiRouter

app = FastAPI(
    title="MCP Registry API",
    description="Registry for publishing, versioning and downloading MCP packages and services.",
    version="1.0.0",
)

app.include_router(PackagesApiRouter)
app.include_router(PackageVersionsApiRouter)
app.include_router(ServicesApiRouter)
app.include_router(ServiceVersionsApiRouter)
app.include_router(UsersApiRouter)
app.include_router(TokensApiRouter)
app.include_router(StatsApiRouter)
app.include_router(HealthApiRouter)
