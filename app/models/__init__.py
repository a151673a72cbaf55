from .user.user import User
from .trips.trip_model import Trip
from .trips.trip_user import TripUser, TripRole
from .trips.trip_invitation import TripInvitation, InvitationStatus
from .stays.stay_model import Stay
from .stays.contact import Contact
