from teamkeys.models.team import Team
from teamkeys.models.user import User
from teamkeys.models.api_key import ApiKey
from teamkeys.models.event import Event
