# travelmarket/routes/__init__.py
from fastapi import APIRouter
from travelmarket.routes.auth import auth, profile
from travelmarket.routes.services import service_provider
from travelmarket.routes.availability import availability, provider_calendar
from travelmarket.routes.bookings import bookings
from travelmarket.routes.seasons import seasons

api_router = APIRouter(prefix="/api")

# Identity
api_router.include_router(auth.router)
api_router.include_router(profile.router)

# Catalog
api_router.include_router(service_provider.router)
api_router.include_router(service_provider.public_router)

# Calendars and bookings
api_router.include_router(availability.router)
api_router.include_router(provider_calendar.router)
api_router.include_router(bookings.router)

# Pricing seasons
api_router.include_router(seasons.router)
