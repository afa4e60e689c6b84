from .user.user import User
from .service.service_provider import ServiceProvider, Service
from .booking.booking import Booking, BookingDate, BookingStatus, BookingKind
from .booking.blocked_date import ProviderBlockedDate
from .season.season import ProviderSeason
