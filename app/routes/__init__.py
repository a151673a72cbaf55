# app/routes/__init__.py
from fastapi import APIRouter
from app.routes.auth import auth, profile
from app.routes.trip import trip_routes, trip_member, invitation
from app.routes.stay import stay_routes
from app.routes.itineraries import itinerary_routes
from app.routes.distance import distance


api_router = APIRouter()

# Auth routes
api_router.include_router(auth.router)
api_router.include_router(profile.router)

# Trip routes
api_router.include_router(trip_routes.router)
api_router.include_router(trip_member.router)
api_router.include_router(invitation.router)

# Stay routes
api_router.include_router(stay_routes.router)

# Itinerary routes
api_router.include_router(itinerary_routes.router)

# Distance lookup
api_router.include_router(distance.router)
