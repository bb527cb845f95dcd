from fastapi import APIRouter

from streaming_platform.features.auth.routes import router as auth_router
from streaming_platform.features.blocks.routes import router as blocks_router
from streaming_platform.features.content.routes import router as content_router
from streaming_platform.features.creators.routes import router as creators_router
from streaming_platform.features.health.routes import router as health_router
from streaming_platform.features.platform_admin.routes import router as platform_router
from streaming_platform.features.playlists.routes import router as playlists_router
from streaming_platform.features.ratings.routes import router as ratings_router
from streaming_platform.features.subscriptions.routes import router as subscriptions_router
from streaming_platform.features.users.routes import router as users_router

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["health"])
api_v1_router.include_router(auth_router, tags=["auth"])
api_v1_router.include_router(users_router, tags=["users"])
api_v1_router.include_router(platform_router, tags=["platform"])
api_v1_router.include_router(content_router, tags=["content"])
api_v1_router.include_router(creators_router, tags=["creators"])
api_v1_router.include_router(subscriptions_router, tags=["subscriptions"])
api_v1_router.include_router(ratings_router, tags=["ratings"])
api_v1_router.include_router(playlists_router, tags=["playlists"])
api_v1_router.include_router(blocks_router, tags=["blocks"])
