# Force SQLModel table registration at test discovery time
# This ensures all models are registered before any test database creation
from papaya.models.match import Match  # noqa: F401
from papaya.models.participant import Participant  # noqa: F401
from papaya.models.tournament import Tournament  # noqa: F401
from papaya.models.user import User  # noqa: F401
